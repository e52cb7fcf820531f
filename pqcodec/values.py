"""Helpers that merge decoded values with definition levels."""

from __future__ import annotations

import itertools
from typing import Iterable, Iterator, Optional, TypeVar

__all__ = ["values_def", "is_set", "get_bit", "read_booleans"]

T = TypeVar("T")

_BIT_MASK = (1, 2, 4, 8, 16, 32, 64, 128)


def values_def(
    values: Iterable[T], def_levels: Iterable[int], max_def_level: int
) -> Iterator[Optional[T]]:
    """Yield one item per definition level.

    A level equal to ``max_def_level`` takes the next value (``None`` once the
    values run out); any other level yields ``None`` without consuming a value.
    """
    values = iter(values)
    for level in def_levels:
        if level == max_def_level:
            yield next(values, None)
        else:
            yield None


def is_set(byte: int, i: int) -> bool:
    """Whether bit ``i`` (0 = least significant) of ``byte`` is set."""
    if not 0 <= i < 8:
        raise IndexError(f"bit index {i} out of range")
    return (byte & _BIT_MASK[i]) != 0


def get_bit(data: bytes, i: int) -> bool:
    """Whether bit ``i`` of ``data`` is set.

    The most significant byte is the last one, and within each byte the
    most significant bit is the last one.
    """
    if i < 0:
        raise IndexError(f"bit index {i} out of range")
    byte_index = len(data) - 1 - i // 8
    if byte_index < 0:
        raise IndexError(f"bit index {i} out of range for {len(data)} bytes")
    return is_set(data[byte_index], i % 8)


def read_booleans(
    values: bytes,
    length: int,
    def_levels: Optional[Iterable[int]],
    max_def_level: int,
) -> list[Optional[bool]]:
    """Decode ``length`` plain booleans, applying the definition levels.

    With ``def_levels`` of ``None`` every slot is taken as defined.
    """
    if def_levels is None:
        def_levels = itertools.repeat(max_def_level, length)
    decoded = (get_bit(values, i) for i in range(length))
    return list(values_def(decoded, def_levels, max_def_level))