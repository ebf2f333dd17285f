"""Data models internal to the alignment engine."""

from enum import Enum
from typing import List


class Operation(str, Enum):
    """Transition that produced a cell of the distance table."""

    MATCH = "match"
    DELETE = "delete"
    INSERT = "insert"
    SUBSTITUTE = "substitute"


# table[i][j]: edit distance between reference[:i] and user_text[:j]
DistanceTable = List[List[int]]

# ops[i][j]: operation chosen for table[i][j]
OperationTable = List[List[Operation]]
