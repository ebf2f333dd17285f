"""Text normalization applied to both transcripts before comparison.

Normalization removes presentation differences that should not count as
errors: surrounding whitespace, letter case and whitespace run lengths.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Normalize text for comparison.

    Normalization steps:
    - Strip leading/trailing whitespace
    - Convert to lowercase
    - Replace every run of whitespace with a single space

    Never fails; an empty string normalizes to an empty string and
    normalize(normalize(s)) == normalize(s).

    Args:
        text: Text to normalize

    Returns:
        Normalized text

    Example:
        >>> normalize("  Multi   SPACE ")
        'multi space'
    """
    if not text:
        return ""

    normalized = text.strip().lower()
    return _WHITESPACE_RE.sub(" ", normalized)
