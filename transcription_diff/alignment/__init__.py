"""Character-level alignment of learner transcriptions against reference transcripts.

This module provides:
- compute_distance_table / backtrace: the dynamic-programming engine
- score: accuracy percentage from edit distance
- edit_distance / accuracy / diff / align: pure caller-facing functions
- TranscriptionComparer: boundary service with input governance and logging
- Utility functions for building payloads and feedback text
"""

from .comparer import TranscriptionComparer
from .engine import backtrace, compute_distance_table
from .exceptions import TranscriptValidationError
from .models import Operation
from .scoring import score
from .service import accuracy, align, align_normalized, diff, edit_distance
from .utils import build_comparison_payload, build_rationale_dict, format_feedback_text

__all__ = [
    "compute_distance_table",
    "backtrace",
    "score",
    "Operation",
    "edit_distance",
    "accuracy",
    "diff",
    "align",
    "align_normalized",
    "TranscriptionComparer",
    "TranscriptValidationError",
    "build_comparison_payload",
    "build_rationale_dict",
    "format_feedback_text",
]
