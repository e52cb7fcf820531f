import pytest

from pqcodec.compression import (
    Compression,
    CompressionError,
    compress,
    decompress,
    snappy_compress,
    snappy_decompress,
)

CODECS = [
    Compression.SNAPPY,
    Compression.GZIP,
    Compression.BROTLI,
    Compression.LZ4,
    Compression.ZSTD,
]


def _pattern(size):
    return bytes(x % 255 for x in range(size))


@pytest.mark.parametrize("codec", CODECS)
@pytest.mark.parametrize("size", [10000, 100000])
def test_codec_roundtrip(codec, size):
    data = _pattern(size)
    compressed = compress(codec, data)
    assert len(compressed) < len(data)
    assert decompress(codec, compressed, len(data)) == data


@pytest.mark.parametrize("codec", CODECS)
def test_roundtrip_after_prefix(codec):
    data = _pattern(10000)
    buffer = bytes([2, 2]) + compress(codec, data)
    assert decompress(codec, buffer[2:], len(data)) == data


@pytest.mark.parametrize("codec", [Compression.GZIP, Compression.BROTLI, Compression.LZ4, Compression.ZSTD])
def test_decompress_too_few_bytes_raises(codec):
    data = _pattern(1000)
    compressed = compress(codec, data)
    with pytest.raises(CompressionError):
        decompress(codec, compressed, len(data) + 1)


@pytest.mark.parametrize("codec", [Compression.GZIP, Compression.BROTLI, Compression.LZ4, Compression.ZSTD])
def test_decompress_reads_prefix(codec):
    data = _pattern(1000)
    compressed = compress(codec, data)
    assert decompress(codec, compressed, 100) == data[:100]


def test_uncompressed_is_rejected():
    with pytest.raises(CompressionError, match="without compression"):
        compress(Compression.UNCOMPRESSED, b"abc")
    with pytest.raises(CompressionError, match="without compression"):
        decompress(Compression.UNCOMPRESSED, b"abc", 3)


def test_lzo_is_not_supported():
    with pytest.raises(CompressionError, match="LZO"):
        compress(Compression.LZO, b"abc")
    with pytest.raises(CompressionError, match="LZO"):
        decompress(Compression.LZO, b"abc", 3)


def test_invalid_gzip_stream_raises():
    with pytest.raises(CompressionError):
        decompress(Compression.GZIP, b"not gzip at all", 10)


def test_snappy_empty_encoding():
    assert snappy_compress(b"") == b"\x00"
    assert snappy_decompress(b"\x00") == b""


def test_snappy_single_literal_encoding():
    assert snappy_compress(b"a") == b"\x01\x00a"
    assert snappy_decompress(b"\x01\x00a") == b"a"


def test_snappy_overlapping_copy():
    data = b"ab" * 500
    compressed = snappy_compress(data)
    assert len(compressed) < len(data)
    assert snappy_decompress(compressed) == data


def test_snappy_long_literal_roundtrip():
    data = bytes(range(256)) * 1
    assert snappy_decompress(snappy_compress(data)) == data


def test_snappy_length_mismatch_raises():
    with pytest.raises(CompressionError):
        snappy_decompress(b"\x05\x00a")


def test_snappy_bad_offset_raises():
    # copy with offset 1 before any output
    with pytest.raises(CompressionError):
        snappy_decompress(b"\x04\x01\x01")


def test_snappy_output_larger_than_size_raises():
    compressed = compress(Compression.SNAPPY, b"hello world")
    with pytest.raises(CompressionError):
        decompress(Compression.SNAPPY, compressed, 5)


def test_snappy_output_smaller_than_size_is_zero_filled():
    compressed = compress(Compression.SNAPPY, b"hello")
    assert decompress(Compression.SNAPPY, compressed, 7) == b"hello\x00\x00"