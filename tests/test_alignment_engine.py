"""Unit tests for the alignment engine.

Tests compute_distance_table and backtrace for:
- Base rows and columns of both tables
- Levenshtein distances
- Tie-break order (delete, insert, substitute)
- Greedy merging of match runs
- Reference index bookkeeping for every segment kind
- Reconstruction of both normalized strings from the segments
"""

import pytest

from transcription_diff.alignment.engine import backtrace, compute_distance_table
from transcription_diff.alignment.models import Operation
from transcription_diff.domain.models import DiffKind, DiffSegment


def _segments(reference, user_text, match_first=False):
    table, ops = compute_distance_table(reference, user_text, match_first=match_first)
    return backtrace(reference, user_text, table, ops)


def _as_tuples(segments):
    return [
        (s.kind.value, s.reference_text, s.user_text, s.start_index, s.end_index)
        for s in segments
    ]


class TestComputeDistanceTable:
    """Tests for compute_distance_table."""

    def test_empty_strings(self):
        table, ops = compute_distance_table("", "")

        assert table == [[0]]
        assert ops == [[Operation.MATCH]]

    def test_dimensions(self):
        table, ops = compute_distance_table("abc", "de")

        assert len(table) == 4
        assert all(len(row) == 3 for row in table)
        assert len(ops) == 4
        assert all(len(row) == 3 for row in ops)

    def test_base_row_and_column(self):
        table, ops = compute_distance_table("kitten", "sitting")

        for i in range(7):
            assert table[i][0] == i
        for j in range(8):
            assert table[0][j] == j

        assert ops[0][0] == Operation.MATCH
        assert all(ops[i][0] == Operation.DELETE for i in range(1, 7))
        assert all(ops[0][j] == Operation.INSERT for j in range(1, 8))

    @pytest.mark.parametrize(
        "reference,user_text,expected",
        [
            ("kitten", "sitting", 3),
            ("cat", "cut", 1),
            ("hello", "helloo", 1),
            ("hello", "hell", 1),
            ("abc", "", 3),
            ("", "abc", 3),
            ("flaw", "lawn", 2),
            ("intention", "execution", 5),
            ("ab", "ba", 2),
        ],
    )
    def test_final_cell_is_levenshtein_distance(self, reference, user_text, expected):
        table, _ = compute_distance_table(reference, user_text)
        assert table[len(reference)][len(user_text)] == expected

    def test_recurrence_holds_for_every_cell(self):
        reference, user_text = "the quick fox", "a quik fax"
        table, _ = compute_distance_table(reference, user_text)

        for i in range(1, len(reference) + 1):
            for j in range(1, len(user_text) + 1):
                if reference[i - 1] == user_text[j - 1]:
                    assert table[i][j] == table[i - 1][j - 1]
                else:
                    assert table[i][j] == 1 + min(
                        table[i - 1][j], table[i][j - 1], table[i - 1][j - 1]
                    )

    def test_substitution_recorded(self):
        _, ops = compute_distance_table("cat", "cut")

        assert ops[1][1] == Operation.MATCH
        assert ops[2][2] == Operation.SUBSTITUTE
        assert ops[3][3] == Operation.MATCH

    def test_tie_prefers_delete_over_insert_and_substitute(self):
        # At (2, 2) delete, insert and substitute all cost 2
        table, ops = compute_distance_table("ab", "ba")

        assert table[1][2] + 1 == table[2][1] + 1 == table[1][1] + 1 == 2
        assert ops[2][2] == Operation.DELETE

    def test_tie_prefers_insert_over_diagonal_match(self):
        # At (5, 6) inserting the last "o" and matching it both cost 1
        table, ops = compute_distance_table("hello", "helloo")

        assert table[5][5] + 1 == table[4][5] == 1
        assert ops[5][6] == Operation.INSERT

    def test_match_first_records_match_for_equal_characters(self):
        table, ops = compute_distance_table("hello", "helloo", match_first=True)

        assert ops[5][6] == Operation.MATCH
        assert table[5][6] == 1

    def test_match_first_does_not_change_distances(self):
        reference, user_text = "a b a b", "b a b a"
        default_table, _ = compute_distance_table(reference, user_text)
        match_first_table, _ = compute_distance_table(reference, user_text, match_first=True)

        assert default_table == match_first_table


class TestBacktrace:
    """Tests for backtrace."""

    def test_empty_strings_produce_no_segments(self):
        assert _segments("", "") == []

    def test_identical_strings_produce_one_match(self):
        segments = _segments("hello world", "hello world")

        assert _as_tuples(segments) == [("match", "hello world", "hello world", 0, 11)]

    def test_identical_strings_with_repeated_characters(self):
        segments = _segments("aaaa", "aaaa")

        assert _as_tuples(segments) == [("match", "aaaa", "aaaa", 0, 4)]

    def test_replace_in_middle(self):
        segments = _segments("cat", "cut")

        assert _as_tuples(segments) == [
            ("match", "c", "c", 0, 1),
            ("replace", "a", "u", 1, 2),
            ("match", "t", "t", 2, 3),
        ]

    def test_trailing_insert(self):
        segments = _segments("hello", "helloo")

        assert _as_tuples(segments) == [
            ("match", "hello", "hello", 0, 5),
            ("insert", "", "o", 5, 5),
        ]

    def test_trailing_insert_with_match_first(self):
        segments = _segments("hello", "helloo", match_first=True)

        assert _as_tuples(segments) == [
            ("match", "hell", "hell", 0, 4),
            ("insert", "", "o", 4, 4),
            ("match", "o", "o", 4, 5),
        ]

    def test_trailing_delete(self):
        segments = _segments("hello", "hell")

        assert _as_tuples(segments) == [
            ("match", "hell", "hell", 0, 4),
            ("delete", "o", "", 4, 5),
        ]

    def test_leading_delete(self):
        segments = _segments("xhello", "hello")

        assert _as_tuples(segments) == [
            ("delete", "x", "", 0, 1),
            ("match", "hello", "hello", 1, 6),
        ]

    def test_insert_in_middle_sits_at_reference_position(self):
        segments = _segments("cat", "cart")

        assert _as_tuples(segments) == [
            ("match", "ca", "ca", 0, 2),
            ("insert", "", "r", 2, 2),
            ("match", "t", "t", 2, 3),
        ]

    def test_transposition_uses_delete_and_insert(self):
        segments = _segments("ab", "ba")

        assert _as_tuples(segments) == [
            ("insert", "", "b", 0, 0),
            ("match", "a", "a", 0, 1),
            ("delete", "b", "", 1, 2),
        ]

    def test_reference_only(self):
        segments = _segments("abc", "")

        assert _as_tuples(segments) == [
            ("delete", "a", "", 0, 1),
            ("delete", "b", "", 1, 2),
            ("delete", "c", "", 2, 3),
        ]

    def test_user_text_only(self):
        segments = _segments("", "ab")

        assert _as_tuples(segments) == [
            ("insert", "", "a", 0, 0),
            ("insert", "", "b", 0, 0),
        ]

    def test_segments_are_diff_segments(self):
        segments = _segments("cat", "cut")

        assert all(isinstance(s, DiffSegment) for s in segments)
        assert segments[1].kind == DiffKind.REPLACE

    def test_no_adjacent_match_segments(self):
        segments = _segments("the cat sat on the mat", "the bat sat in a mat")

        for previous, current in zip(segments, segments[1:]):
            assert not (previous.kind == DiffKind.MATCH and current.kind == DiffKind.MATCH)

    @pytest.mark.parametrize(
        "reference,user_text",
        [
            ("the cat sat on the mat", "the bat sat in a mat"),
            ("kitten", "sitting"),
            ("intention", "execution"),
            ("abc", "xyz"),
            ("a", ""),
            ("", "a"),
            ("mississippi", "missisippi"),
            ("ab ab ab", "ba ba ba"),
        ],
    )
    def test_reconstruction(self, reference, user_text):
        segments = _segments(reference, user_text)

        rebuilt_reference = "".join(
            s.reference_text for s in segments if s.kind != DiffKind.INSERT
        )
        rebuilt_user = "".join(s.user_text for s in segments if s.kind != DiffKind.DELETE)

        assert rebuilt_reference == reference
        assert rebuilt_user == user_text

    @pytest.mark.parametrize(
        "reference,user_text",
        [("the cat sat on the mat", "the bat sat in a mat"), ("mississippi", "missisippi")],
    )
    def test_indices_tile_the_reference(self, reference, user_text):
        segments = _segments(reference, user_text)

        position = 0
        for segment in segments:
            assert segment.start_index == position
            if segment.kind != DiffKind.INSERT:
                assert reference[segment.start_index:segment.end_index] == segment.reference_text
            position = segment.end_index
        assert position == len(reference)

    def test_segment_count_reflects_edit_distance(self):
        reference, user_text = "kitten", "sitting"
        table, ops = compute_distance_table(reference, user_text)
        segments = backtrace(reference, user_text, table, ops)

        errors = [s for s in segments if s.kind != DiffKind.MATCH]
        assert len(errors) == table[-1][-1]

    def test_mismatched_tables_rejected(self):
        table, ops = compute_distance_table("abc", "abc")

        with pytest.raises(ValueError):
            backtrace("abcd", "abc", table, ops)
