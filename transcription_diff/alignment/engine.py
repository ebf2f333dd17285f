"""Character-level alignment of a normalized reference against normalized learner text.

This module implements:
1. compute_distance_table: Levenshtein dynamic-programming table plus the
   operation chosen for every cell
2. backtrace: walk of the operation table from the last cell to the origin,
   producing ordered diff segments with consecutive matches merged

Both functions take already-normalized strings and cost O(m*n) time and
memory. Callers that need bounded memory must limit input length before
calling them (see TranscriptionComparer).
"""

from typing import List, Tuple

from transcription_diff.domain.models import DiffKind, DiffSegment

from .models import DistanceTable, Operation, OperationTable


def compute_distance_table(
    reference: str, user_text: str, match_first: bool = False
) -> Tuple[DistanceTable, OperationTable]:
    """Build the edit-distance table and the operation table.

    For every cell the three candidates are checked in a fixed order and the
    first one reaching the minimum cost wins:
    1. delete (reference character missing from the user text)
    2. insert (extra user character)
    3. diagonal (match for equal characters, substitute otherwise)

    Equal characters go through the same ordered check, so an equal-cost
    delete or insert is preferred over a diagonal match. The table values are
    the same either way; only the recorded operations differ. Pass
    match_first=True to always record a match for equal characters.

    Args:
        reference: Normalized reference text
        user_text: Normalized learner text
        match_first: Record a match for equal characters before the tie-break

    Returns:
        Tuple of (table, ops), both (len(reference)+1) x (len(user_text)+1).
        table[-1][-1] is the Levenshtein distance.

    Example:
        >>> table, ops = compute_distance_table("cat", "cut")
        >>> table[3][3]
        1
    """
    m = len(reference)
    n = len(user_text)

    table: DistanceTable = [[0] * (n + 1) for _ in range(m + 1)]
    ops: OperationTable = [[Operation.MATCH] * (n + 1) for _ in range(m + 1)]

    # Base cases: reach an empty prefix by deleting or inserting everything
    for i in range(1, m + 1):
        table[i][0] = i
        ops[i][0] = Operation.DELETE
    for j in range(1, n + 1):
        table[0][j] = j
        ops[0][j] = Operation.INSERT

    for i in range(1, m + 1):
        ref_char = reference[i - 1]
        row = table[i]
        prev_row = table[i - 1]
        op_row = ops[i]

        for j in range(1, n + 1):
            is_match = ref_char == user_text[j - 1]
            diagonal_cost = prev_row[j - 1] if is_match else prev_row[j - 1] + 1

            if is_match and match_first:
                row[j] = diagonal_cost
                op_row[j] = Operation.MATCH
                continue

            delete_cost = prev_row[j] + 1
            insert_cost = row[j - 1] + 1
            best_cost = min(delete_cost, insert_cost, diagonal_cost)
            row[j] = best_cost

            # Tie-break order: delete, insert, then the diagonal step
            if delete_cost == best_cost:
                op_row[j] = Operation.DELETE
            elif insert_cost == best_cost:
                op_row[j] = Operation.INSERT
            elif is_match:
                op_row[j] = Operation.MATCH
            else:
                op_row[j] = Operation.SUBSTITUTE

    return table, ops


def backtrace(
    reference: str, user_text: str, table: DistanceTable, ops: OperationTable
) -> List[DiffSegment]:
    """Reconstruct ordered diff segments from the operation table.

    Walks from cell (m, n) to (0, 0). A match cell starts a greedy run that
    consumes every consecutive match cell and emits a single merged segment.
    Delete, insert and substitute steps emit one single-character segment
    each. Insert segments sit at the current reference position, which only
    moves on steps that consume a reference character.

    Segments are collected end-to-start and reversed once before returning.
    Two empty strings produce no segments.

    Args:
        reference: Normalized reference text the tables were built from
        user_text: Normalized learner text the tables were built from
        table: Distance table from compute_distance_table
        ops: Operation table from compute_distance_table

    Returns:
        Diff segments in reference reading order

    Raises:
        ValueError: If the tables do not match the strings' dimensions
    """
    m = len(reference)
    n = len(user_text)

    if len(table) != m + 1 or len(ops) != m + 1 or any(len(row) != n + 1 for row in ops):
        raise ValueError(
            f"Alignment tables must be {m + 1}x{n + 1} for the given strings"
        )

    segments: List[DiffSegment] = []
    i, j = m, n
    current_ref_pos = m

    while i > 0 or j > 0:
        op = ops[i][j]

        if op == Operation.MATCH and i > 0 and j > 0:
            run_end = i
            while i > 0 and j > 0 and ops[i][j] == Operation.MATCH:
                i -= 1
                j -= 1
            matched = reference[i:run_end]
            segments.append(
                DiffSegment(
                    kind=DiffKind.MATCH,
                    reference_text=matched,
                    user_text=matched,
                    start_index=i,
                    end_index=run_end,
                )
            )
        elif op == Operation.DELETE and i > 0:
            segments.append(
                DiffSegment(
                    kind=DiffKind.DELETE,
                    reference_text=reference[i - 1],
                    user_text="",
                    start_index=i - 1,
                    end_index=i,
                )
            )
            i -= 1
        elif op == Operation.INSERT and j > 0:
            segments.append(
                DiffSegment(
                    kind=DiffKind.INSERT,
                    reference_text="",
                    user_text=user_text[j - 1],
                    start_index=current_ref_pos,
                    end_index=current_ref_pos,
                )
            )
            j -= 1
        elif op == Operation.SUBSTITUTE and i > 0 and j > 0:
            segments.append(
                DiffSegment(
                    kind=DiffKind.REPLACE,
                    reference_text=reference[i - 1],
                    user_text=user_text[j - 1],
                    start_index=i - 1,
                    end_index=i,
                )
            )
            i -= 1
            j -= 1
        else:
            raise ValueError(f"Operation table has no valid step at cell ({i}, {j}): {op!r}")

        current_ref_pos = i

    segments.reverse()
    return segments
