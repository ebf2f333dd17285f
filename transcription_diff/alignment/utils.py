"""Utility functions for preparing comparison results for downstream consumers.

This module provides helpers for building UI payloads, compact log
rationales and plain-text feedback reports.
"""

from typing import Dict, Optional

from transcription_diff.config.models import RenderConfig
from transcription_diff.domain.models import TranscriptionComparison
from transcription_diff.utils.highlighting import (
    render_diff,
    render_reference_line,
    render_user_line,
    truncate_text,
)


def build_comparison_payload(comparison: TranscriptionComparison) -> Dict:
    """Build a JSON-ready payload for a feedback UI.

    Args:
        comparison: Result of TranscriptionComparer.compare()

    Returns:
        Dict with keys:
        - accuracy: 0-100 score
        - edit_distance: Levenshtein distance of the normalized strings
        - total_characters: Length of the normalized reference
        - correct_characters: Reference characters inside match segments
        - reference: Normalized reference (segment indices refer to it)
        - user_text: Normalized learner text
        - diffs: List of segment dicts (kind, reference_text, user_text, start_index, end_index)
        - counts: Number of segments per kind
    """
    return {
        "accuracy": comparison.accuracy,
        "edit_distance": comparison.edit_distance,
        "total_characters": comparison.total_characters,
        "correct_characters": comparison.correct_characters,
        "reference": comparison.reference,
        "user_text": comparison.user_text,
        "diffs": [segment.model_dump(mode="json") for segment in comparison.diffs],
        "counts": comparison.counts_by_kind,
    }


def build_rationale_dict(comparison: TranscriptionComparison) -> Dict:
    """Build a lightweight summary of a comparison for logs or storage.

    Args:
        comparison: Comparison to summarize

    Returns:
        Dict with score, counts and truncated texts (no segment list)
    """
    return {
        "accuracy": comparison.accuracy,
        "edit_distance": comparison.edit_distance,
        "is_perfect": comparison.is_perfect,
        "error_count": comparison.error_count,
        "segment_count": len(comparison.diffs),
        "counts": comparison.counts_by_kind,
        "correct_characters": comparison.correct_characters,
        "total_characters": comparison.total_characters,
        "reference_preview": truncate_text(comparison.reference, max_length=80),
        "user_preview": truncate_text(comparison.user_text, max_length=80),
    }


def format_feedback_text(
    comparison: TranscriptionComparison,
    render_config: Optional[RenderConfig] = None,
) -> str:
    """Format a comparison as a plain-text feedback report.

    Args:
        comparison: Comparison to format
        render_config: Marker scheme for the rendered lines

    Returns:
        Multi-line report string
    """
    lines = []

    lines.append(f"Accuracy: {comparison.accuracy}%")
    lines.append(
        f"Correct characters: {comparison.correct_characters}/{comparison.total_characters}"
        f" (edit distance {comparison.edit_distance})"
    )
    lines.append("=" * 60)

    if comparison.is_perfect:
        lines.append("Perfect match!")
        lines.append(render_diff(comparison.diffs, render_config))
        return "\n".join(lines)

    lines.append(f"Diff:      {render_diff(comparison.diffs, render_config)}")
    lines.append(f"Reference: {render_reference_line(comparison.diffs, render_config)}")
    lines.append(f"You typed: {render_user_line(comparison.diffs, render_config)}")
    lines.append("-" * 60)

    counts = comparison.counts_by_kind
    lines.append(
        f"Missed: {counts['delete']}  Extra: {counts['insert']}  Wrong: {counts['replace']}"
    )

    return "\n".join(lines)
