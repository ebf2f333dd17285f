"""Caller-facing comparison service.

TranscriptionComparer is what the surrounding application calls when a
learner submits a transcription:
1. Normalizes both transcripts
2. Rejects input the configuration does not allow (size limit, blank text)
3. Runs the alignment engine
4. Packages the result with character counts for feedback rendering
5. Emits one structured log record per comparison
"""

import logging
import time
from typing import Iterable, Iterator, Optional, Tuple

from transcription_diff.config.models import ComparisonConfig
from transcription_diff.domain.models import TranscriptionComparison
from transcription_diff.logging import get_logger
from transcription_diff.normalization import NormalizedPair

from .exceptions import TranscriptValidationError
from .service import align_normalized

logger = get_logger(__name__, component="comparison")


class TranscriptionComparer:
    """Compares learner transcriptions against reference transcripts.

    Responsibilities:
    - Enforce the configured maximum transcript length before the quadratic
      alignment runs
    - Optionally reject blank learner input
    - Produce TranscriptionComparison results
    - Log comparison outcomes
    """

    def __init__(
        self,
        config: Optional[ComparisonConfig] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize TranscriptionComparer.

        Args:
            config: Comparison settings (defaults to ComparisonConfig())
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.config = config or ComparisonConfig()
        self.logger = logger_instance or logger

    def validate(self, reference: str, user_text: str) -> NormalizedPair:
        """Normalize both transcripts and check them against the configuration.

        Args:
            reference: Raw reference transcript
            user_text: Raw learner transcription

        Returns:
            NormalizedPair ready for alignment

        Raises:
            TranscriptValidationError: If either transcript is rejected
        """
        pair = NormalizedPair.from_texts(reference, user_text)
        self._check_pair(pair)
        return pair

    def compare(self, reference: str, user_text: str) -> TranscriptionComparison:
        """Compare a learner transcription with the reference.

        Args:
            reference: Raw reference transcript
            user_text: Raw learner transcription

        Returns:
            TranscriptionComparison with accuracy, diff segments and counts

        Raises:
            TranscriptValidationError: If either transcript is rejected
        """
        pair = NormalizedPair.from_texts(reference, user_text)

        try:
            self._check_pair(pair)
        except TranscriptValidationError as e:
            self.logger.warning(
                f"Comparison rejected: {e}",
                extra={
                    "event": "comparison.rejected",
                    "field": e.field,
                    "length": e.length,
                    "limit": e.limit,
                },
            )
            raise

        started = time.perf_counter()
        result = align_normalized(
            pair.reference, pair.user_text, match_first=self.config.match_first
        )
        comparison = TranscriptionComparison.from_alignment(result)
        duration_ms = (time.perf_counter() - started) * 1000

        self.logger.info(
            "Transcription compared",
            extra={
                "event": "comparison.completed",
                "accuracy": comparison.accuracy,
                "edit_distance": comparison.edit_distance,
                "reference_length": pair.reference_length,
                "user_length": pair.user_length,
                "segment_count": len(comparison.diffs),
                "error_count": comparison.error_count,
                "duration_ms": round(duration_ms, 2),
            },
        )

        return comparison

    def compare_batch(
        self, pairs: Iterable[Tuple[str, str]]
    ) -> Iterator[TranscriptionComparison]:
        """Compare many (reference, user_text) pairs.

        Rejected pairs are logged and skipped; processing continues with the
        next pair.

        Args:
            pairs: Iterable of (reference, user_text) tuples

        Yields:
            TranscriptionComparison for each accepted pair
        """
        for index, (reference, user_text) in enumerate(pairs):
            try:
                yield self.compare(reference, user_text)
            except TranscriptValidationError as e:
                self.logger.error(
                    f"Skipping pair {index}: {e}",
                    extra={"event": "comparison.batch.skipped", "pair_index": index},
                )
                continue

    def _check_pair(self, pair: NormalizedPair) -> None:
        limit = self.config.max_transcript_length

        if pair.reference_length > limit:
            raise TranscriptValidationError(
                f"Reference transcript is {pair.reference_length} characters; "
                f"the limit is {limit}",
                field="reference",
                length=pair.reference_length,
                limit=limit,
            )

        if pair.user_length > limit:
            raise TranscriptValidationError(
                f"User transcription is {pair.user_length} characters; the limit is {limit}",
                field="user_text",
                length=pair.user_length,
                limit=limit,
            )

        if not pair.user_text and not self.config.allow_empty_user_text:
            raise TranscriptValidationError(
                "User transcription is empty",
                field="user_text",
                length=0,
            )
