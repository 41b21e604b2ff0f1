"""Autocomplete editing engine for the H5 Hacker Academy coding game."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "completion",
    "keymaps",
    "layout",
    "mentor",
    "missions",
    "preview",
    "runtime",
    "session",
]

__version__ = "0.1.0"
