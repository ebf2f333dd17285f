"""Data models for the normalization layer."""

from dataclasses import dataclass

from .service import normalize


@dataclass(frozen=True)
class NormalizedPair:
    """Original and normalized variants of the two transcripts being compared.

    Preserves the raw input for logging while exposing the normalized
    strings that alignment indices refer to.

    Attributes:
        reference_original: Reference transcript as supplied by the caller
        reference: Normalized reference
        user_original: Learner transcription as supplied by the caller
        user_text: Normalized learner transcription
    """

    reference_original: str
    reference: str
    user_original: str
    user_text: str

    @classmethod
    def from_texts(cls, reference: str, user_text: str) -> "NormalizedPair":
        return cls(
            reference_original=reference,
            reference=normalize(reference),
            user_original=user_text,
            user_text=normalize(user_text),
        )

    @property
    def reference_length(self) -> int:
        return len(self.reference)

    @property
    def user_length(self) -> int:
        return len(self.user_text)

    @property
    def is_empty(self) -> bool:
        """True when both normalized strings are empty."""
        return not self.reference and not self.user_text
