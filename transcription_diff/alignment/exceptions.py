"""Exceptions raised at the comparison boundary.

The engine functions never raise for string input; only the caller-facing
TranscriptionComparer rejects input it is configured not to accept.
"""

from typing import Optional


class TranscriptValidationError(ValueError):
    """Raised when a transcript is rejected before alignment.

    Attributes:
        field: Which input was rejected ("reference" or "user_text")
        length: Normalized length of the rejected input
        limit: Configured maximum length, if the rejection is a size limit
    """

    def __init__(
        self,
        message: str,
        field: str,
        length: int,
        limit: Optional[int] = None,
    ):
        self.field = field
        self.length = length
        self.limit = limit
        super().__init__(message)

    def to_dict(self) -> dict:
        """Serialize for API error responses."""
        return {
            "error": "transcript_validation_error",
            "message": str(self),
            "field": self.field,
            "length": self.length,
            "limit": self.limit,
        }
