"""In-memory columns of optional values, used to hold decoded parquet pages."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator, Union

__all__ = ["ArrayKind", "Array", "StructArray"]


class ArrayKind(enum.Enum):
    """The type of the items held by an :class:`Array`."""

    UINT32 = "uint32"
    INT32 = "int32"
    INT64 = "int64"
    INT96 = "int96"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOLEAN = "boolean"
    BINARY = "binary"
    LIST = "list"


_INT_BOUNDS = {
    ArrayKind.UINT32: (0, 2**32 - 1),
    ArrayKind.INT32: (-(2**31), 2**31 - 1),
    ArrayKind.INT64: (-(2**63), 2**63 - 1),
}


def _check_int(value: Any, kind: ArrayKind) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{kind.value} item must be an int, got {type(value).__name__}")
    low, high = _INT_BOUNDS[kind]
    if not low <= value <= high:
        raise ValueError(f"{value} is out of range for {kind.value}")
    return value


def _check_int96(value: Any) -> tuple[int, int, int]:
    if not isinstance(value, (tuple, list)) or len(value) != 3:
        raise TypeError("int96 item must be a sequence of three 32-bit unsigned ints")
    return tuple(_check_int(word, ArrayKind.UINT32) for word in value)  # type: ignore[return-value]


def _check_float(value: Any, kind: ArrayKind) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{kind.value} item must be a number, got {type(value).__name__}")
    return float(value)


def _normalize(kind: ArrayKind, value: Any) -> Any:
    if value is None:
        return None
    if kind in _INT_BOUNDS:
        return _check_int(value, kind)
    if kind is ArrayKind.INT96:
        return _check_int96(value)
    if kind in (ArrayKind.FLOAT32, ArrayKind.FLOAT64):
        return _check_float(value, kind)
    if kind is ArrayKind.BOOLEAN:
        if not isinstance(value, bool):
            raise TypeError(f"boolean item must be a bool, got {type(value).__name__}")
        return value
    if kind is ArrayKind.BINARY:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"binary item must be bytes, got {type(value).__name__}")
        return bytes(value)
    if not isinstance(value, (Array, StructArray)):
        raise TypeError(f"list item must be an array, got {type(value).__name__}")
    return value


@dataclass
class Array:
    """A column of optional items of one kind; ``None`` marks a null slot."""

    kind: ArrayKind
    values: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.kind = ArrayKind(self.kind)
        self.values = [_normalize(self.kind, item) for item in self.values]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    @property
    def null_count(self) -> int:
        """Number of null slots."""
        return sum(item is None for item in self.values)


@dataclass
class StructArray:
    """A struct column: one child array per field and a validity per slot."""

    fields: list = field(default_factory=list)
    validity: list = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fields = list(self.fields)
        for child in self.fields:
            if not isinstance(child, (Array, StructArray)):
                raise TypeError(f"struct field must be an array, got {type(child).__name__}")
        self.validity = list(self.validity)
        for valid in self.validity:
            if not isinstance(valid, bool):
                raise TypeError("struct validity must hold bools")

    def __len__(self) -> int:
        return len(self.validity)

    @property
    def null_count(self) -> int:
        """Number of null struct slots."""
        return sum(not valid for valid in self.validity)


AnyArray = Union[Array, StructArray]