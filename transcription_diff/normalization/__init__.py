"""Normalization layer shared by the alignment engine and the comparison service.

This module provides:
- normalize: trim, lowercase and collapse whitespace
- NormalizedPair: original and normalized variants of both transcripts
"""

from .models import NormalizedPair
from .service import normalize

__all__ = [
    "normalize",
    "NormalizedPair",
]
