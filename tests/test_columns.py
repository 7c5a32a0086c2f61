"""Unit tests for header-driven column detection.

Fragment widths are given explicitly so every gap in these layouts is known:

  Item        10 .. 34
  Description 60 .. 126
  Qty        200 .. 218
  Unit Price 260 .. 320
  Total      380 .. 410
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from invoice_tables.columns import (
    cluster_fragments,
    detect_columns,
    find_column_index,
    gap_threshold,
    positive_gaps,
)
from invoice_tables.config import ExtractionConfig
from invoice_tables.schema import Line, TextFragment


def frag(text: str, x: float, width: float, y: float = 100.0) -> TextFragment:
    return TextFragment(text=text, x=x, y=y, width=width, height=10.0)


def make_line(*items: TextFragment) -> Line:
    ordered = tuple(sorted(items, key=lambda f: f.x))
    return Line(y=ordered[0].y, items=ordered, text=" ".join(f.text for f in ordered))


FIVE_HEADERS = [
    frag("Item", 10, 24),
    frag("Description", 60, 66),
    frag("Qty", 200, 18),
    frag("Unit Price", 260, 60),
    frag("Total", 380, 30),
]


# ===========================================================================
# Gap statistics tests
# ===========================================================================


class TestPositiveGaps:

    def test_gaps_between_neighbours(self):
        assert positive_gaps(FIVE_HEADERS) == [26, 74, 42, 60]

    def test_overlaps_ignored(self):
        assert positive_gaps([frag("a", 10, 50), frag("b", 40, 10), frag("c", 70, 10)]) == [20]

    def test_single_fragment(self):
        assert not positive_gaps([frag("a", 10, 50)])


class TestGapThreshold:

    def test_half_of_30th_percentile(self):
        # sorted gaps [26, 42, 60, 74]; index int(4 * 0.3) == 1 -> 42 -> 21
        assert gap_threshold(FIVE_HEADERS) == pytest.approx(21)

    def test_minimum_floor(self):
        tight = [frag("a", 0, 10), frag("b", 12, 10), frag("c", 25, 10)]
        assert gap_threshold(tight) == 5

    def test_no_gaps_uses_minimum(self):
        assert gap_threshold([frag("a", 0, 10)]) == 5

    def test_config_overrides(self):
        config = ExtractionConfig(min_column_gap=30)
        assert gap_threshold(FIVE_HEADERS, config) == 30


class TestClusterFragments:

    def test_small_gap_joins(self):
        groups = cluster_fragments([frag("Unit", 260, 24), frag("Price", 290, 30), frag("Total", 380, 30)], 13)
        assert [[f.text for f in g] for g in groups] == [["Unit", "Price"], ["Total"]]

    def test_gap_equal_to_threshold_joins(self):
        groups = cluster_fragments([frag("a", 0, 10), frag("b", 20, 10)], 10)
        assert len(groups) == 1

    def test_empty(self):
        assert not cluster_fragments([], 5)


# ===========================================================================
# detect_columns tests
# ===========================================================================


class TestDetectColumns:

    def test_five_columns(self):
        columns = detect_columns([make_line(*FIVE_HEADERS)])
        assert [c.header_text for c in columns] == ["Item", "Description", "Qty", "Unit Price", "Total"]

    def test_boundaries_at_midpoints(self):
        columns = detect_columns([make_line(*FIVE_HEADERS)])
        assert [(c.start_x, c.end_x) for c in columns] == [
            (0.0, 47.0),
            (47.0, 163.0),
            (163.0, 239.0),
            (239.0, 350.0),
            (350.0, 9999.0),
        ]

    def test_centers(self):
        columns = detect_columns([make_line(*FIVE_HEADERS)])
        assert [c.center_x for c in columns] == [22.0, 93.0, 209.0, 290.0, 395.0]

    def test_k_gaps_give_k_plus_one_sorted_columns(self):
        header = [frag(f"h{i}", 100.0 * i, 20) for i in range(7)]
        columns = detect_columns([make_line(*header)])
        assert len(columns) == 7
        centers = [c.center_x for c in columns]
        assert centers == sorted(centers)
        for left, right in zip(columns, columns[1:]):
            assert left.start_x < left.end_x
            assert left.end_x == right.start_x

    def test_multi_word_header_stays_together(self):
        header = [
            frag("Item", 10, 24),
            frag("Description", 60, 66),
            frag("Qty", 200, 18),
            frag("Unit", 260, 24),
            frag("Price", 290, 30),
            frag("Total", 380, 30),
        ]
        columns = detect_columns([make_line(*header)])
        assert [c.header_text for c in columns] == ["Item", "Description", "Qty", "Unit Price", "Total"]

    def test_two_row_header_merges_into_same_columns(self):
        first = make_line(
            frag("Code", 10, 24),
            frag("Description", 60, 66),
            frag("Price", 200, 30),
            frag("Amount", 300, 36),
        )
        second = make_line(frag("Unit", 200, 24, y=110), frag("Total", 300, 30, y=110))
        columns = detect_columns([first, second])
        assert [c.header_text for c in columns] == ["Code", "Description", "Price Unit", "Amount Total"]

    def test_first_starts_at_zero_last_is_sentinel(self):
        config = ExtractionConfig(column_sentinel=5000)
        columns = detect_columns([make_line(*FIVE_HEADERS)], config)
        assert columns[0].start_x == 0
        assert columns[-1].end_x == 5000

    def test_empty_header(self):
        assert not detect_columns([])


class TestFindColumnIndex:

    def test_inside_band(self):
        columns = detect_columns([make_line(*FIVE_HEADERS)])
        assert find_column_index(93, columns) == 1
        assert find_column_index(300, columns) == 3

    def test_start_inclusive_end_exclusive(self):
        columns = detect_columns([make_line(*FIVE_HEADERS)])
        assert find_column_index(47.0, columns) == 1
        assert find_column_index(46.99, columns) == 0

    def test_beyond_sentinel_falls_in_last(self):
        columns = detect_columns([make_line(*FIVE_HEADERS)])
        assert find_column_index(20000, columns) == 4
