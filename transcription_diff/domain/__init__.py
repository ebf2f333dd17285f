"""Domain models for transcription alignment results."""

from .models import AlignmentResult, DiffKind, DiffSegment, TranscriptionComparison

__all__ = [
    "DiffKind",
    "DiffSegment",
    "AlignmentResult",
    "TranscriptionComparison",
]
