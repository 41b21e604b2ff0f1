import pytest

from hackademy.config import EditorSettings, load_settings
from hackademy.layout import TERMINAL_METRICS, WEB_METRICS


def test_load_settings_defaults() -> None:
    settings = load_settings({})

    assert settings == EditorSettings()
    assert settings.metrics == WEB_METRICS
    assert settings.api_key == ""


def test_load_settings_reads_environment() -> None:
    settings = load_settings(
        {
            "HACKADEMY_SUGGESTION_LIMIT": "4",
            "HACKADEMY_DISMISS_DELAY_MS": "350",
            "HACKADEMY_METRICS": "Terminal",
            "GEMINI_API_KEY": "gem",
        }
    )

    assert settings.suggestion_limit == 4
    assert settings.dismiss_delay_ms == 350
    assert settings.metrics == TERMINAL_METRICS
    assert settings.api_key == "gem"


def test_load_settings_ignores_invalid_values() -> None:
    settings = load_settings(
        {
            "HACKADEMY_SUGGESTION_LIMIT": "-1",
            "HACKADEMY_DISMISS_DELAY_MS": "soon",
            "HACKADEMY_METRICS": "print",
        }
    )

    assert settings.suggestion_limit == 8
    assert settings.dismiss_delay_ms == 200
    assert settings.metrics_preset == "web"


def test_api_key_precedence() -> None:
    settings = load_settings(
        {"HACKADEMY_API_KEY": "own", "GEMINI_API_KEY": "gem", "API_KEY": "any"}
    )

    assert settings.api_key == "own"


def test_unknown_metrics_preset_raises() -> None:
    with pytest.raises(ValueError):
        EditorSettings(metrics_preset="print").metrics


def test_suggestion_limit_is_capped_at_eight() -> None:
    settings = load_settings({"HACKADEMY_SUGGESTION_LIMIT": "20"})

    assert settings.suggestion_limit == 8
