"""Core domain models for alignment results.

This module defines the data structures handed to callers:
- DiffKind: category of a diff segment
- DiffSegment: labeled span of the normalized reference and the learner text
- AlignmentResult: edit distance, accuracy and diff segments of one alignment
- TranscriptionComparison: AlignmentResult plus character counts for feedback UIs
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, model_validator


class DiffKind(str, Enum):
    """Category of a diff segment."""

    MATCH = "match"
    DELETE = "delete"
    INSERT = "insert"
    REPLACE = "replace"


class DiffSegment(BaseModel):
    """A labeled span describing how reference text corresponds to learner text.

    start_index/end_index address the normalized reference as a half-open
    range. Insert segments have no reference text, so both indices equal the
    reference position the inserted text sits at.
    """

    kind: DiffKind = Field(..., description="match, delete, insert or replace")
    reference_text: str = Field("", description="Reference characters covered by the segment")
    user_text: str = Field("", description="Learner characters covered by the segment")
    start_index: int = Field(..., ge=0, description="Start offset into the normalized reference")
    end_index: int = Field(..., ge=0, description="End offset (exclusive) into the normalized reference")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_span(self):
        """Keep the span consistent with the segment kind."""
        if self.end_index < self.start_index:
            raise ValueError(
                f"end_index ({self.end_index}) must not be before start_index ({self.start_index})"
            )

        if self.kind == DiffKind.INSERT:
            if self.reference_text:
                raise ValueError("insert segments carry no reference text")
            if self.start_index != self.end_index:
                raise ValueError("insert segments must have start_index == end_index")
        elif self.end_index - self.start_index != len(self.reference_text):
            raise ValueError(
                f"{self.kind.value} segment span {self.end_index - self.start_index} "
                f"does not match reference text length {len(self.reference_text)}"
            )

        if self.kind == DiffKind.DELETE and self.user_text:
            raise ValueError("delete segments carry no user text")
        if self.kind == DiffKind.MATCH and self.reference_text != self.user_text:
            raise ValueError("match segments must have identical reference and user text")

        return self

    @property
    def is_error(self) -> bool:
        """Whether this segment marks a mistake (anything but a match)."""
        return self.kind != DiffKind.MATCH


class AlignmentResult(BaseModel):
    """Edit distance, accuracy and ordered diff segments for one comparison."""

    edit_distance: int = Field(..., ge=0)
    accuracy: int = Field(..., ge=0, le=100)
    diff: List[DiffSegment] = Field(default_factory=list)
    reference: str = Field("", description="Normalized reference the indices refer to")
    user_text: str = Field("", description="Normalized learner text")


class TranscriptionComparison(BaseModel):
    """Feedback-ready comparison of a reference transcript and a learner transcription.

    Attributes:
        accuracy: 0-100 accuracy score
        edit_distance: Levenshtein distance of the normalized strings
        diffs: Ordered diff segments
        total_characters: Length of the normalized reference
        correct_characters: Reference characters covered by match segments
        reference: Normalized reference
        user_text: Normalized learner text
    """

    accuracy: int = Field(..., ge=0, le=100)
    edit_distance: int = Field(..., ge=0)
    diffs: List[DiffSegment] = Field(default_factory=list)
    total_characters: int = Field(..., ge=0)
    correct_characters: int = Field(..., ge=0)
    reference: str = ""
    user_text: str = ""

    @classmethod
    def from_alignment(cls, result: AlignmentResult) -> "TranscriptionComparison":
        """Build a comparison from an AlignmentResult."""
        correct = sum(
            len(segment.reference_text)
            for segment in result.diff
            if segment.kind == DiffKind.MATCH
        )
        return cls(
            accuracy=result.accuracy,
            edit_distance=result.edit_distance,
            diffs=list(result.diff),
            total_characters=len(result.reference),
            correct_characters=correct,
            reference=result.reference,
            user_text=result.user_text,
        )

    @property
    def error_count(self) -> int:
        """Number of non-match segments."""
        return sum(1 for segment in self.diffs if segment.is_error)

    @property
    def counts_by_kind(self) -> Dict[str, int]:
        """Number of segments of each kind, keyed by kind value."""
        counts = {kind.value: 0 for kind in DiffKind}
        for segment in self.diffs:
            counts[segment.kind.value] += 1
        return counts

    @property
    def is_perfect(self) -> bool:
        return self.edit_distance == 0
