#!/usr/bin/env python3
"""
Sequence alignment for scraped listing fields.
- Inserts sentinel values (missing data) at given positions without mutating the input
- Drops one record from a field by index
- Assembles equal-length fields into a DataFrame
"""

import numbers
from collections import defaultdict
from typing import Any, Dict, List, Mapping, Sequence

import pandas as pd


# ============ ERRORS ============
class ListingError(Exception):
    """Base class for every fatal error of a listing scrape."""


class InvalidPosition(ListingError, IndexError):
    pass


class LengthMismatch(ListingError, ValueError):
    pass


# ============ ALIGNMENT ============
def _check_position(p, upper):
    if isinstance(p, bool) or not isinstance(p, numbers.Integral):
        raise InvalidPosition(f"position must be an integer, got {p!r}")
    if p < 0 or p > upper:
        raise InvalidPosition(f"position {p} outside [0, {upper}]")
    return int(p)


def insert_sentinels(values: Sequence[Any], positions: Sequence[int], sentinels: Sequence[Any]) -> List[Any]:
    """
    Return a new list with sentinels[k] placed right after original element positions[k]
    (position 0 = before the first element).

    Originals get keys 1..n; a sentinel gets positions[k] + j/m, where m is the number of
    requests sharing that position and j its rank among them in input order. Output is
    everything ordered by key, so ties keep input order and originals keep theirs.
    """
    if len(positions) != len(sentinels):
        raise LengthMismatch(f"{len(positions)} positions for {len(sentinels)} sentinels")
    n = len(values)
    positions = [_check_position(p, n) for p in positions]

    group_size = defaultdict(int)
    for p in positions:
        group_size[p] += 1

    seen = defaultdict(int)
    keyed = [(float(i), v) for i, v in enumerate(values, start=1)]
    for p, s in zip(positions, sentinels):
        keyed.append((p + seen[p] / group_size[p], s))
        seen[p] += 1

    # stable sort: original p stays ahead of the first sentinel keyed exactly p
    keyed.sort(key=lambda t: t[0])
    return [v for _, v in keyed]


def remove_at(values: Sequence[Any], index: int) -> List[Any]:
    """Return a copy of values without the element at 0-based index."""
    index = _check_position(index, len(values) - 1)
    return list(values[:index]) + list(values[index + 1:])


# ============ ASSEMBLY ============
def assemble(fields: Mapping[str, Sequence[Any]]) -> pd.DataFrame:
    lengths = {name: len(col) for name, col in fields.items()}
    if len(set(lengths.values())) > 1:
        raise LengthMismatch(f"fields differ in length: {lengths}")
    data: Dict[str, pd.Series] = {name: _column(col) for name, col in fields.items()}
    return pd.DataFrame(data, columns=list(data))


def _column(values: Sequence[Any]) -> pd.Series:
    values = list(values)
    # None sentinels would be coerced to NaN (and ints to floats) under inferred dtypes
    if any(v is None for v in values):
        return pd.Series(values, dtype=object)
    return pd.Series(values)
