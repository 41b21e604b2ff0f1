"""Live preview extraction for the current buffer."""

from .extract import PreviewElement, PreviewModel, describe, render_preview

__all__ = ["PreviewElement", "PreviewModel", "describe", "render_preview"]
