"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

# Above this the two O(m*n) tables of a single comparison run to hundreds of MB.
LARGE_TRANSCRIPT_LENGTH = 20000


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    comparison = config_dict.get("comparison", {})
    if isinstance(comparison, dict):
        max_length = comparison.get("max_transcript_length")
        if isinstance(max_length, int) and max_length > LARGE_TRANSCRIPT_LENGTH:
            warning_messages.append(
                f"Large max_transcript_length ({max_length}) allows comparisons whose "
                f"memory use grows quadratically with transcript length"
            )

    render = config_dict.get("render", {})
    if isinstance(render, dict):
        marker_keys = ("delete_start", "delete_end", "insert_start", "insert_end")
        if any(key in render for key in marker_keys) and not any(
            render.get(key) for key in marker_keys
        ):
            warning_messages.append(
                "All delete/insert render markers are empty; missed and extra "
                "characters will be indistinguishable from matched text"
            )

        for key, value in render.items():
            if isinstance(value, str) and "\n" in value:
                warning_messages.append(
                    f"Render marker '{key}' contains a newline and will break line-based output"
                )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
