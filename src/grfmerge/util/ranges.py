#!/usr/bin/env python3

from collections.abc import Iterable


def coalesce_runs(indices: Iterable[int]) -> list[tuple[int, int]]:
    """Group ascending indices into maximal runs of consecutive values

    A run breaks whenever the next index is not exactly one greater than the
    previous one, so unsorted input produces more (shorter) runs rather than
    being reordered.
    """
    runs: list[tuple[int, int]] = []
    for idx in indices:
        if runs and idx == runs[-1][1] + 1:
            runs[-1] = (runs[-1][0], idx)
        else:
            runs.append((idx, idx))
    return runs


def format_runs(runs: Iterable[tuple[int, int]]) -> str:
    """Human readable run list, i.e. "5-7, 12, 20" """
    return ", ".join(str(first) if first == last else f"{first}-{last}" for first, last in runs)
