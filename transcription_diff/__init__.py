"""Transcription alignment and diff engine for language-learning practice.

Compares a reference transcript with a learner's typed transcription and
returns an edit-distance-optimal character alignment, an accuracy score and
categorized diff segments for feedback rendering.
"""

from .alignment import (
    TranscriptionComparer,
    TranscriptValidationError,
    accuracy,
    align,
    diff,
    edit_distance,
)
from .domain import AlignmentResult, DiffKind, DiffSegment, TranscriptionComparison
from .normalization import normalize

__version__ = "1.0.0"

__all__ = [
    "normalize",
    "edit_distance",
    "accuracy",
    "diff",
    "align",
    "TranscriptionComparer",
    "TranscriptValidationError",
    "DiffKind",
    "DiffSegment",
    "AlignmentResult",
    "TranscriptionComparison",
]
