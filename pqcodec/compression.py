"""Block compression codecs used by parquet column chunks."""

from __future__ import annotations

import enum
import gzip
import zlib

import brotli
import lz4.frame
import zstandard

__all__ = [
    "Compression",
    "CompressionError",
    "compress",
    "decompress",
    "snappy_compress",
    "snappy_decompress",
]

_BROTLI_QUALITY = 1
_BROTLI_LG_WINDOW = 22
_GZIP_LEVEL = 6
_ZSTD_LEVEL = 1

_SNAPPY_MAX_OFFSET = 65535
_SNAPPY_MIN_MATCH = 4


class Compression(enum.IntEnum):
    """Compression codecs known to the parquet format."""

    UNCOMPRESSED = 0
    SNAPPY = 1
    GZIP = 2
    LZO = 3
    BROTLI = 4
    LZ4 = 5
    ZSTD = 6


class CompressionError(Exception):
    """Raised when data cannot be compressed or decompressed."""


def compress(compression: Compression, data: bytes) -> bytes:
    """Compress ``data`` with the given codec and return the compressed bytes."""
    compression = Compression(compression)
    data = bytes(data)
    try:
        if compression is Compression.BROTLI:
            return brotli.compress(data, quality=_BROTLI_QUALITY, lgwin=_BROTLI_LG_WINDOW)
        if compression is Compression.GZIP:
            return gzip.compress(data, compresslevel=_GZIP_LEVEL)
        if compression is Compression.SNAPPY:
            return snappy_compress(data)
        if compression is Compression.LZ4:
            return lz4.frame.compress(data)
        if compression is Compression.ZSTD:
            return zstandard.ZstdCompressor(level=_ZSTD_LEVEL).compress(data)
    except CompressionError:
        raise
    except Exception as exc:
        raise CompressionError(f"failed to compress with {compression.name}: {exc}") from exc
    if compression is Compression.UNCOMPRESSED:
        raise CompressionError("Compressing without compression is not valid")
    raise CompressionError(f"Compression {compression.name} is not supported")


def decompress(compression: Compression, data: bytes, uncompressed_size: int) -> bytes:
    """Decompress ``data`` into exactly ``uncompressed_size`` bytes.

    Raises :class:`CompressionError` when the stream is invalid or holds
    fewer bytes than requested.
    """
    compression = Compression(compression)
    if uncompressed_size < 0:
        raise ValueError("uncompressed_size must not be negative")
    data = bytes(data)

    if compression is Compression.SNAPPY:
        decoded = snappy_decompress(data)
        if len(decoded) > uncompressed_size:
            raise CompressionError(
                f"snappy data decompresses to {len(decoded)} bytes, "
                f"more than the {uncompressed_size} expected"
            )
        return decoded + bytes(uncompressed_size - len(decoded))

    try:
        if compression is Compression.BROTLI:
            decoded = brotli.decompress(data)
        elif compression is Compression.GZIP:
            decoded = zlib.decompressobj(wbits=31).decompress(data, uncompressed_size)
        elif compression is Compression.LZ4:
            decoded = lz4.frame.decompress(data)
        elif compression is Compression.ZSTD:
            decoded = zstandard.ZstdDecompressor().decompressobj().decompress(data)
        elif compression is Compression.UNCOMPRESSED:
            raise CompressionError("Compressing without compression is not valid")
        else:
            raise CompressionError(f"Compression {compression.name} is not yet supported")
    except CompressionError:
        raise
    except Exception as exc:
        raise CompressionError(f"failed to decompress with {compression.name}: {exc}") from exc

    if len(decoded) < uncompressed_size:
        raise CompressionError(
            f"unexpected end of stream: expected {uncompressed_size} bytes, got {len(decoded)}"
        )
    return decoded[:uncompressed_size]


def _varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _emit_literal(out: bytearray, literal: bytes) -> None:
    if not literal:
        return
    n = len(literal) - 1
    if n < 60:
        out.append(n << 2)
    else:
        width = (n.bit_length() + 7) // 8
        out.append((59 + width) << 2)
        out += n.to_bytes(width, "little")
    out += literal


def _emit_copy_chunk(out: bytearray, offset: int, length: int) -> None:
    if 4 <= length <= 11 and offset < 2048:
        out.append(0x01 | ((length - 4) << 2) | ((offset >> 8) << 5))
        out.append(offset & 0xFF)
    else:
        out.append(0x02 | ((length - 1) << 2))
        out += offset.to_bytes(2, "little")


def _emit_copy(out: bytearray, offset: int, length: int) -> None:
    while length >= 68:
        _emit_copy_chunk(out, offset, 64)
        length -= 64
    if length > 64:
        _emit_copy_chunk(out, offset, 60)
        length -= 60
    _emit_copy_chunk(out, offset, length)


def snappy_compress(data: bytes) -> bytes:
    """Encode ``data`` in the raw snappy block format."""
    data = bytes(data)
    size = len(data)
    if size >= 1 << 32:
        raise CompressionError("input too large for snappy")
    out = bytearray(_varint(size))
    table: dict[bytes, int] = {}
    literal_start = 0
    i = 0
    while i + _SNAPPY_MIN_MATCH <= size:
        key = data[i : i + _SNAPPY_MIN_MATCH]
        candidate = table.get(key)
        table[key] = i
        if candidate is None or i - candidate > _SNAPPY_MAX_OFFSET:
            i += 1
            continue
        length = _SNAPPY_MIN_MATCH
        while i + length < size and data[candidate + length] == data[i + length]:
            length += 1
        _emit_literal(out, data[literal_start:i])
        _emit_copy(out, i - candidate, length)
        i += length
        literal_start = i
    _emit_literal(out, data[literal_start:])
    return bytes(out)


def _read_varint(data: bytes) -> tuple[int, int]:
    value = 0
    for index, byte in enumerate(data[:5]):
        value |= (byte & 0x7F) << (7 * index)
        if not byte & 0x80:
            if value >= 1 << 32:
                break
            return value, index + 1
    raise CompressionError("invalid snappy length header")


def snappy_decompress(data: bytes) -> bytes:
    """Decode a raw snappy block."""
    data = bytes(data)
    expected, pos = _read_varint(data)
    out = bytearray()
    end = len(data)
    while pos < end:
        tag = data[pos]
        pos += 1
        kind = tag & 0x03
        if kind == 0:
            n = tag >> 2
            if n >= 60:
                width = n - 59
                if pos + width > end:
                    raise CompressionError("truncated snappy literal header")
                n = int.from_bytes(data[pos : pos + width], "little")
                pos += width
            length = n + 1
            if pos + length > end:
                raise CompressionError("snappy literal runs past end of input")
            out += data[pos : pos + length]
            pos += length
            continue
        if kind == 1:
            if pos + 1 > end:
                raise CompressionError("truncated snappy copy")
            length = ((tag >> 2) & 0x07) + 4
            offset = ((tag >> 5) << 8) | data[pos]
            pos += 1
        else:
            width = 2 if kind == 2 else 4
            if pos + width > end:
                raise CompressionError("truncated snappy copy")
            length = (tag >> 2) + 1
            offset = int.from_bytes(data[pos : pos + width], "little")
            pos += width
        if offset == 0 or offset > len(out):
            raise CompressionError("invalid snappy copy offset")
        start = len(out) - offset
        if offset >= length:
            out += out[start : start + length]
        else:
            period = bytes(out[start:])
            out += (period * (length // offset + 1))[:length]
        if len(out) > expected:
            raise CompressionError("snappy data exceeds declared length")
    if len(out) != expected:
        raise CompressionError(
            f"snappy data declares {expected} bytes but holds {len(out)}"
        )
    return bytes(out)