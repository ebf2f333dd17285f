"""Pure functions exposed to callers of the alignment engine.

Every function normalizes its raw inputs, runs the engine and returns a
fresh result; nothing is cached or shared between calls, so concurrent
callers need no locking.
"""

from typing import List

from transcription_diff.domain.models import AlignmentResult, DiffSegment
from transcription_diff.normalization import normalize

from .engine import backtrace, compute_distance_table
from .scoring import score


def edit_distance(reference: str, user_text: str) -> int:
    """Levenshtein distance between the normalized reference and learner text."""
    ref = normalize(reference)
    usr = normalize(user_text)
    table, _ = compute_distance_table(ref, usr)
    return table[len(ref)][len(usr)]


def accuracy(reference: str, user_text: str) -> int:
    """Accuracy percentage (0-100) of the learner text against the reference."""
    ref = normalize(reference)
    usr = normalize(user_text)
    if not ref and not usr:
        return 100
    return score(edit_distance(ref, usr), len(ref), len(usr))


def diff(reference: str, user_text: str, match_first: bool = False) -> List[DiffSegment]:
    """Ordered diff segments of the learner text against the reference.

    Segment indices address normalize(reference).
    """
    return align(reference, user_text, match_first=match_first).diff


def align(reference: str, user_text: str, match_first: bool = False) -> AlignmentResult:
    """Compute edit distance, accuracy and diff segments in a single pass.

    Args:
        reference: Raw reference transcript
        user_text: Raw learner transcription
        match_first: Record matches for equal characters before the tie-break

    Returns:
        AlignmentResult carrying the normalized strings the segments index into
    """
    return align_normalized(normalize(reference), normalize(user_text), match_first=match_first)


def align_normalized(
    reference: str, user_text: str, match_first: bool = False
) -> AlignmentResult:
    """Same as align() for strings that are already normalized."""
    table, ops = compute_distance_table(reference, user_text, match_first=match_first)
    distance = table[len(reference)][len(user_text)]

    return AlignmentResult(
        edit_distance=distance,
        accuracy=score(distance, len(reference), len(user_text)),
        diff=backtrace(reference, user_text, table, ops),
        reference=reference,
        user_text=user_text,
    )
