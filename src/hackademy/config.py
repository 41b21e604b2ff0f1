"""Editor settings sourced from ``HACKADEMY_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from hackademy.completion import MAX_SUGGESTIONS
from hackademy.layout import TERMINAL_METRICS, WEB_METRICS, LayoutMetrics

ENV_PREFIX = "HACKADEMY_"

METRIC_PRESETS: Mapping[str, LayoutMetrics] = {
    "web": WEB_METRICS,
    "terminal": TERMINAL_METRICS,
}


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Tunables for the edit session and the mentor service."""

    suggestion_limit: int = MAX_SUGGESTIONS
    dismiss_delay_ms: int = 200
    metrics_preset: str = "web"
    mentor_model: str = "gemini-2.5-flash"
    api_key: str = ""

    @property
    def metrics(self) -> LayoutMetrics:
        try:
            return METRIC_PRESETS[self.metrics_preset]
        except KeyError as exc:
            raise ValueError(
                f"Unknown metrics preset '{self.metrics_preset}'"
            ) from exc


def _env_int(environ: Mapping[str, str], key: str, fallback: int) -> int:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


def _api_key(environ: Mapping[str, str]) -> str:
    for name in (f"{ENV_PREFIX}API_KEY", "GEMINI_API_KEY", "API_KEY"):
        value = environ.get(name)
        if value:
            return value
    return ""


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EditorSettings:
    env = os.environ if environ is None else environ
    defaults = EditorSettings()
    preset = env.get(f"{ENV_PREFIX}METRICS", defaults.metrics_preset).lower()
    if preset not in METRIC_PRESETS:
        preset = defaults.metrics_preset
    return EditorSettings(
        suggestion_limit=min(
            _env_int(env, "SUGGESTION_LIMIT", defaults.suggestion_limit),
            MAX_SUGGESTIONS,
        ),
        dismiss_delay_ms=_env_int(env, "DISMISS_DELAY_MS", defaults.dismiss_delay_ms),
        metrics_preset=preset,
        mentor_model=env.get(f"{ENV_PREFIX}MENTOR_MODEL", defaults.mentor_model),
        api_key=_api_key(env),
    )


__all__ = ["EditorSettings", "METRIC_PRESETS", "load_settings"]
