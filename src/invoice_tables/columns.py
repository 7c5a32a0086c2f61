"""Column detection from the spatial layout of the header row(s).

Only header fragments are considered; data rows never move a boundary.
Fragments are sorted by x and split into clusters wherever the horizontal
gap to the previous fragment exceeds a threshold derived from the header's
own gap distribution: ``max(min_gap, factor * P30(gaps))``.  Multi-word
headers with naturally wide spacing stay together while genuinely separate
columns split.
"""

import logging

from invoice_tables.config import DEFAULT_CONFIG, ExtractionConfig
from invoice_tables.schema import Column, Line, TextFragment

logger = logging.getLogger(__name__)


def positive_gaps(fragments: list[TextFragment]) -> list[float]:
    """Return the positive gaps between consecutive x-sorted fragments."""
    gaps: list[float] = []
    for prev, curr in zip(fragments, fragments[1:]):
        gap = curr.x - prev.right
        if gap > 0:
            gaps.append(gap)
    return gaps


def gap_threshold(fragments: list[TextFragment], config: ExtractionConfig = DEFAULT_CONFIG) -> float:
    """Return the gap above which two header fragments belong to different columns."""
    gaps = sorted(positive_gaps(fragments))
    if not gaps:
        return config.min_column_gap
    # Lower-index element of the percentile, no interpolation
    base_gap = gaps[int(len(gaps) * config.gap_percentile)]
    return max(config.min_column_gap, base_gap * config.gap_factor)


def cluster_fragments(fragments: list[TextFragment], threshold: float) -> list[list[TextFragment]]:
    """Split x-sorted fragments into clusters at gaps larger than *threshold*."""
    if not fragments:
        return []
    groups: list[list[TextFragment]] = [[fragments[0]]]
    for fragment in fragments[1:]:
        last_item = groups[-1][-1]
        if fragment.x - last_item.right <= threshold:
            groups[-1].append(fragment)
        else:
            groups.append([fragment])
    return groups


def _build_columns(groups: list[list[TextFragment]], sentinel: float) -> list[Column]:
    """Turn fragment clusters into adjacent column bands split at cluster midpoints."""
    columns: list[Column] = []
    for i, group in enumerate(groups):
        min_x = min(f.x for f in group)
        max_x = max(f.right for f in group)

        if i == 0:
            start_x = 0.0
        else:
            prev_max_x = max(f.right for f in groups[i - 1])
            start_x = (prev_max_x + min_x) / 2

        if i == len(groups) - 1:
            end_x = sentinel
        else:
            next_min_x = min(f.x for f in groups[i + 1])
            end_x = (max_x + next_min_x) / 2

        columns.append(
            Column(
                start_x=start_x,
                end_x=end_x,
                center_x=(min_x + max_x) / 2,
                header_text=" ".join(f.text for f in group),
            )
        )
    return columns


def detect_columns(header_lines: list[Line], config: ExtractionConfig = DEFAULT_CONFIG) -> list[Column]:
    """Return the columns implied by the header rows, left to right.

    Fragments of a folded second header row merge into the column above
    them because their gap to it is negative.  Returns [] for an empty header.
    """
    fragments = sorted((f for line in header_lines for f in line.items), key=lambda f: f.x)
    if not fragments:
        return []

    threshold = gap_threshold(fragments, config)
    groups = cluster_fragments(fragments, threshold)
    columns = _build_columns(groups, config.column_sentinel)
    logger.info(
        "Detected %d columns (gap threshold %.1f): %s",
        len(columns),
        threshold,
        " | ".join(c.header_text for c in columns),
    )
    return columns


def find_column_index(x: float, columns: list[Column]) -> int:
    """Return the index of the column whose band contains *x* (the last column otherwise)."""
    for i, column in enumerate(columns):
        if column.contains(x):
            return i
    return len(columns) - 1
