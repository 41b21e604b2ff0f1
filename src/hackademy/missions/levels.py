"""Mission stages, their starting snippets and validation predicates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping


class GameStage(str, Enum):
    INTRO = "INTRO"
    HTML_BASICS = "HTML_BASICS"
    CSS_STYLING = "CSS_STYLING"
    REACT_STATE = "REACT_STATE"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True, slots=True)
class LevelConfig:
    id: GameStage
    title: str
    description: str
    mission: str
    initial_code: str
    solution_hint: str
    explanation: str
    validate: Callable[[str], bool]
    success_message: str


def _has_heading_and_paragraph(code: str) -> bool:
    return bool(re.search(r"<h1>.+</h1>", code)) and bool(re.search(r"<p>.+</p>", code))


def _has_button_styles(code: str) -> bool:
    return all(name in code for name in ("bg-blue-500", "text-white", "rounded-lg"))


def _has_counter_state(code: str) -> bool:
    return "useState(0)" in code and "setCount(count + 1)" in code


INTRO_CODE = """<div>
  <!-- heading goes here -->

  <!-- paragraph goes here -->

</div>"""

CSS_CODE = """<div className="flex items-center justify-center h-screen">
  <div className="bg-white p-6 shadow-xl rounded-2xl">
    <h2 className="text-2xl font-bold mb-4">Profile</h2>

    <!-- style the button below -->
    <button className="">
      Follow
    </button>

  </div>
</div>"""

REACT_CODE = """import React, { useState } from 'react';

function Counter() {
  // Task 1: declare the count state here
  const [count, setCount] =

  return (
    <div className="p-8 text-center">
      <h1 className="text-4xl mb-4">{count}</h1>
      <button
        className="bg-indigo-600 text-white px-4 py-2 rounded"
        // Task 2: add the click handler here
        onClick={}
      >
        Like
      </button>
    </div>
  );
}
"""

LEVEL_CONFIGS: Mapping[GameStage, LevelConfig] = {
    GameStage.INTRO: LevelConfig(
        id=GameStage.INTRO,
        title="Chapter 1: The Skeleton (HTML)",
        description=(
            "A web page is like a body and HTML is its skeleton. Repair the "
            "page's heading and introduction so it can show content."
        ),
        mission=(
            "Wrap 'Hello World' in an <h1> tag and wrap 'I am the new hacker' "
            "in a <p> tag."
        ),
        initial_code=INTRO_CODE,
        solution_hint="<h1>Hello World</h1>\n<p>I am the new hacker</p>",
        explanation=(
            "HTML wraps content in tags.\n"
            "1. Below the heading comment, type <h1>Hello World</h1>.\n"
            "   <h1> is Heading 1, the page's main title.\n"
            "2. Below the paragraph comment, type <p>I am the new hacker</p>.\n"
            "   <p> is a Paragraph for ordinary text."
        ),
        validate=_has_heading_and_paragraph,
        success_message="Skeleton repaired! The content structure is recognised.",
    ),
    GameStage.HTML_BASICS: LevelConfig(
        id=GameStage.HTML_BASICS,
        title="Chapter 1: The Skeleton (HTML)",
        description="Same as above.",
        mission="Same as above.",
        initial_code="",
        solution_hint="",
        explanation="",
        validate=lambda code: True,
        success_message="",
    ),
    GameStage.CSS_STYLING: LevelConfig(
        id=GameStage.CSS_STYLING,
        title="Chapter 2: The Skin (Tailwind CSS)",
        description=(
            "The skeleton is ugly. CSS is the clothing and make-up; use "
            "Tailwind class names to make this button look good."
        ),
        mission=(
            "Give the <button> a className with a blue background "
            "(bg-blue-500), white text (text-white), large rounded corners "
            "(rounded-lg) and padding (p-2)."
        ),
        initial_code=CSS_CODE,
        solution_hint=(
            '<button className="bg-blue-500 text-white rounded-lg p-2">\n'
            "  Follow\n"
            "</button>"
        ),
        explanation=(
            "Fill the button's className with space separated classes:\n"
            "1. bg-blue-500: blue background, shade 500.\n"
            "2. text-white: white text.\n"
            "3. rounded-lg: large rounded corners.\n"
            "4. p-2: padding of 2 units."
        ),
        validate=_has_button_styles,
        success_message="Visual module loaded! The interface looks brand new.",
    ),
    GameStage.REACT_STATE: LevelConfig(
        id=GameStage.REACT_STATE,
        title="Chapter 3: The Soul (React State)",
        description=(
            "The page is lifeless. React gives it a soul through state and "
            "interaction; make the counter move."
        ),
        mission="1. Complete useState(0). 2. Call setCount(count + 1) in onClick.",
        initial_code=REACT_CODE,
        solution_hint=(
            "const [count, setCount] = useState(0);\n"
            "// ...\n"
            "onClick={() => setCount(count + 1)}"
        ),
        explanation=(
            "Components need state to remember data:\n"
            "1. Initialise it with useState(0): count starts at 0 and "
            "setCount changes it.\n"
            "2. Put an arrow function in onClick={}: "
            "() => setCount(count + 1)."
        ),
        validate=_has_counter_state,
        success_message="Neural link established! Interaction logic is running.",
    ),
    GameStage.COMPLETED: LevelConfig(
        id=GameStage.COMPLETED,
        title="Graduation: Free Hacker",
        description=(
            "You have the basics: HTML builds structure, CSS styles it and "
            "React handles logic."
        ),
        mission="You have graduated. Copy this code into a real project.",
        initial_code=(
            "// Congratulations! You finished every training course.\n"
            "// Next: install Node.js and VS Code and start for real."
        ),
        solution_hint="",
        explanation="Congratulations on your first step into full-stack development.",
        validate=lambda code: False,
        success_message="",
    ),
}

STAGE_ORDER: tuple[GameStage, ...] = (
    GameStage.INTRO,
    GameStage.CSS_STYLING,
    GameStage.REACT_STATE,
    GameStage.COMPLETED,
)


__all__ = ["GameStage", "LevelConfig", "LEVEL_CONFIGS", "STAGE_ORDER"]
