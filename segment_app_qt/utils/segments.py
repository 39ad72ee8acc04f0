"""
Run extraction for row-encoded segmentation masks.
"""

from typing import List, Sequence, Tuple


def extract_runs(columns: Sequence[int]) -> List[Tuple[int, int]]:
    """
    Split one row's occupied columns into maximal runs.

    Args:
        columns: Strictly increasing column indices of one mask row

    Returns:
        Closed intervals (start, end) in column order; empty for an empty row

    Example:
        >>> extract_runs([2, 3, 4, 7, 8, 10])
        [(2, 4), (7, 8), (10, 10)]
    """
    if len(columns) == 0:
        return []

    runs = []
    start = columns[0]
    for current, following in zip(columns[:-1], columns[1:]):
        if following != current + 1:
            runs.append((start, current))
            start = following
    runs.append((start, columns[-1]))
    return runs
