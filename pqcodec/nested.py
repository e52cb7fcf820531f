"""Assembly of one-level list columns from repetition and definition levels."""

from __future__ import annotations

import struct
from typing import Iterable

from pqcodec.arrays import Array, ArrayKind

__all__ = ["compose_list", "read_int64_values"]

_INT64 = struct.Struct("<q")


def read_int64_values(data: bytes) -> list[int]:
    """Decode plain little-endian int64 values; trailing partial bytes are ignored."""
    data = bytes(data)
    usable = len(data) - len(data) % _INT64.size
    return [value for (value,) in _INT64.iter_unpack(data[:usable])]


def compose_list(
    rep_levels: Iterable[int],
    def_levels: Iterable[int],
    max_rep: int,
    max_def: int,
    values: Iterable[int],
) -> Array:
    """Build an optional list of optional int64 from levels and defined values.

    Only lists one level deep with optional items are supported
    (``max_rep == 1`` and ``max_def == 3``).
    """
    if max_rep != 1:
        raise ValueError(f"only max repetition level 1 is supported, got {max_rep}")
    if max_def != 3:
        raise ValueError(f"only max definition level 3 is supported, got {max_def}")
    values = iter(values)
    outer: list = []
    inner: list = []
    prev_def = 0
    for rep, definition in zip(rep_levels, def_levels):
        if rep == 0:
            if prev_def > 1:
                outer.append(Array(ArrayKind.INT64, inner))
                inner = []
        elif rep != 1:
            raise ValueError(f"invalid repetition level {rep}")
        if definition == 3:
            try:
                inner.append(next(values))
            except StopIteration:
                raise ValueError("more defined slots than values") from None
        elif definition == 2:
            inner.append(None)
        elif definition == 1:
            outer.append(Array(ArrayKind.INT64, []))
        elif definition == 0:
            outer.append(None)
        else:
            raise ValueError(f"invalid definition level {definition}")
        prev_def = definition
    outer.append(Array(ArrayKind.INT64, inner))
    return Array(ArrayKind.LIST, outer)