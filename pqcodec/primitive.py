"""Decoding of plain and dictionary-encoded pages of flat (non-nested) columns."""

from __future__ import annotations

import itertools
import struct
from typing import Any, Iterable, Iterator, Optional, Sequence

from pqcodec.arrays import ArrayKind
from pqcodec.values import values_def

__all__ = [
    "read_primitives",
    "read_dictionary",
    "read_binary_dictionary",
    "read_plain_binary",
]

_FORMATS = {
    ArrayKind.UINT32: struct.Struct("<I"),
    ArrayKind.INT32: struct.Struct("<i"),
    ArrayKind.INT64: struct.Struct("<q"),
    ArrayKind.INT96: struct.Struct("<3I"),
    ArrayKind.FLOAT32: struct.Struct("<f"),
    ArrayKind.FLOAT64: struct.Struct("<d"),
}

_LENGTH_PREFIX = struct.Struct("<I")


def _levels(
    def_levels: Optional[Iterable[int]], count: int, max_def_level: int
) -> Iterable[int]:
    if def_levels is None:
        return itertools.repeat(max_def_level, count)
    return def_levels


def read_primitives(
    kind: ArrayKind,
    values: bytes,
    def_levels: Optional[Iterable[int]],
    max_def_level: int,
) -> list[Any]:
    """Decode plain little-endian values of ``kind``, applying definition levels.

    With ``def_levels`` of ``None`` every value is taken as defined.
    """
    kind = ArrayKind(kind)
    layout = _FORMATS.get(kind)
    if layout is None:
        raise ValueError(f"{kind.value} is not a fixed-width primitive type")
    data = bytes(values)
    if len(data) % layout.size:
        raise ValueError(
            f"buffer of {len(data)} bytes is not a multiple of {layout.size} "
            f"for {kind.value}"
        )
    if kind is ArrayKind.INT96:
        decoded: Iterator[Any] = (tuple(words) for words in layout.iter_unpack(data))
    else:
        decoded = (item for (item,) in layout.iter_unpack(data))
    count = len(data) // layout.size
    return list(values_def(decoded, _levels(def_levels, count, max_def_level), max_def_level))


def read_dictionary(
    indices: Iterable[int],
    dictionary: Sequence[Any],
    def_levels: Optional[Iterable[int]],
    max_def_level: int,
) -> list[Any]:
    """Map dictionary ``indices`` to their entries, applying definition levels."""
    indices = list(indices)
    ids = values_def(indices, _levels(def_levels, len(indices), max_def_level), max_def_level)
    return [None if index is None else dictionary[index] for index in ids]


def read_binary_dictionary(
    indices: Iterable[int],
    dict_values: bytes,
    dict_offsets: Sequence[int],
    def_levels: Optional[Iterable[int]],
    max_def_level: int,
) -> list[Optional[bytes]]:
    """Map indices into a binary dictionary given as concatenated values and offsets.

    Entry ``i`` spans ``dict_values[dict_offsets[i]:dict_offsets[i + 1]]``.
    """
    data = bytes(dict_values)
    indices = list(indices)
    ids = values_def(indices, _levels(def_levels, len(indices), max_def_level), max_def_level)
    result: list[Optional[bytes]] = []
    for index in ids:
        if index is None:
            result.append(None)
            continue
        if not 0 <= index < len(dict_offsets) - 1:
            raise IndexError(f"dictionary index {index} out of range")
        result.append(data[dict_offsets[index] : dict_offsets[index + 1]])
    return result


def _plain_byte_arrays(data: bytes, count: int) -> Iterator[bytes]:
    pos = 0
    for _ in range(count):
        if pos + _LENGTH_PREFIX.size > len(data):
            raise ValueError("plain byte array buffer ends inside a length prefix")
        (size,) = _LENGTH_PREFIX.unpack_from(data, pos)
        pos += _LENGTH_PREFIX.size
        if pos + size > len(data):
            raise ValueError("plain byte array buffer ends inside a value")
        yield data[pos : pos + size]
        pos += size


def read_plain_binary(
    values: bytes,
    length: int,
    def_levels: Optional[Iterable[int]],
    max_def_level: int,
) -> list[Optional[bytes]]:
    """Decode ``length`` slots of plain, length-prefixed byte arrays."""
    if length < 0:
        raise ValueError("length must not be negative")
    decoded = _plain_byte_arrays(bytes(values), length)
    levels = itertools.islice(_levels(def_levels, length, max_def_level), length)
    return list(values_def(decoded, levels, max_def_level))