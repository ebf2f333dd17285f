"""Utility functions for rendering diff segments."""

from .highlighting import (
    group_segments,
    render_diff,
    render_reference_line,
    render_user_line,
    truncate_text,
)

__all__ = [
    "group_segments",
    "render_diff",
    "render_reference_line",
    "render_user_line",
    "truncate_text",
]
