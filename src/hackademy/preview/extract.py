"""Regex-driven preview of what the player's snippet would render.

This is not a markup parser: each stage looks for the handful of patterns its
mission is about and reports placeholders for whatever is missing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from hackademy.missions import GameStage

_H1 = re.compile(r"<h1>(.*?)</h1>")
_P = re.compile(r"<p>(.*?)</p>")
_BUTTON = re.compile(r'<button className="(.*?)">(.*?)</button>', re.DOTALL)
_CONTAINER = re.compile(r'<div className="(.*?)">')


@dataclass(frozen=True, slots=True)
class PreviewElement:
    kind: str
    text: str = ""
    classes: str = ""


@dataclass(frozen=True, slots=True)
class PreviewModel:
    stage: GameStage
    elements: tuple[PreviewElement, ...] = ()
    container_classes: str = ""
    missing: tuple[str, ...] = field(default_factory=tuple)
    interactive: bool = False

    @property
    def complete(self) -> bool:
        return not self.missing


def _intro(code: str) -> PreviewModel:
    elements: list[PreviewElement] = []
    missing: list[str] = []
    heading = _H1.search(code)
    paragraph = _P.search(code)
    if heading:
        elements.append(PreviewElement("h1", heading.group(1)))
    else:
        missing.append("Add a heading here...")
    if paragraph:
        elements.append(PreviewElement("p", paragraph.group(1)))
    else:
        missing.append("Add a paragraph here...")
    return PreviewModel(GameStage.INTRO, tuple(elements), missing=tuple(missing))


def _styling(code: str) -> PreviewModel:
    button = _BUTTON.search(code)
    container = _CONTAINER.search(code)
    container_classes = container.group(1) if container else ""
    if button is None:
        return PreviewModel(
            GameStage.CSS_STYLING,
            container_classes=container_classes,
            missing=("Button code is missing",),
        )
    element = PreviewElement("button", button.group(2).strip(), button.group(1))
    return PreviewModel(
        GameStage.CSS_STYLING,
        (element,),
        container_classes=container_classes,
    )


def _react(code: str) -> PreviewModel:
    missing: list[str] = []
    if "useState" not in code:
        missing.append("useState definition is missing")
    if "onClick" not in code:
        missing.append("onClick handler is missing")
    interactive = "onClick" in code and "setCount" in code
    return PreviewModel(
        GameStage.REACT_STATE,
        (PreviewElement("counter", "0"),),
        missing=tuple(missing),
        interactive=interactive,
    )


def render_preview(code: str, stage: GameStage) -> PreviewModel:
    # HTML_BASICS shares the INTRO content.
    if stage in (GameStage.INTRO, GameStage.HTML_BASICS):
        return _intro(code)
    if stage is GameStage.CSS_STYLING:
        return _styling(code)
    if stage is GameStage.REACT_STATE:
        return _react(code)
    return PreviewModel(
        stage,
        (
            PreviewElement("h1", "System rebuild complete"),
            PreviewElement("p", "Waiting for the next mission..."),
        ),
    )


def describe(model: PreviewModel) -> str:
    """Plain-text rendering used by terminal hosts."""

    lines: list[str] = []
    if model.container_classes:
        lines.append(f"[container] {model.container_classes}")
    for element in model.elements:
        label: Optional[str] = element.classes or None
        suffix = f"  ({label})" if label else ""
        lines.append(f"<{element.kind}> {element.text}{suffix}")
    if model.stage is GameStage.REACT_STATE:
        lines.append("counter: live" if model.interactive else "counter: inert")
    lines.extend(f"! {message}" for message in model.missing)
    return "\n".join(lines)


__all__ = ["PreviewElement", "PreviewModel", "describe", "render_preview"]
