import pytest

from pqcodec.values import get_bit, is_set, read_booleans, values_def


def test_values_def_places_nulls():
    assert list(values_def([10, 20], [1, 0, 1], 1)) == [10, None, 20]


def test_values_def_all_defined_at_level_zero():
    assert list(values_def(iter("abc"), [0, 0, 0], 0)) == ["a", "b", "c"]


def test_values_def_yields_none_when_values_exhausted():
    assert list(values_def([5], [1, 1, 1], 1)) == [5, None, None]


def test_values_def_length_follows_levels():
    assert list(values_def(range(100), [2, 2], 2)) == [0, 1]
    assert list(values_def(range(100), [], 2)) == []


def test_values_def_does_not_consume_for_nulls():
    source = iter([1, 2, 3])
    out = list(values_def(source, [0, 1, 0], 1))
    assert out == [None, 1, None]
    assert list(source) == [2, 3]


def test_is_set_single_bits():
    for bit in range(8):
        for probe in range(8):
            assert is_set(1 << bit, probe) == (bit == probe)


@pytest.mark.parametrize("i", [-1, 8])
def test_is_set_rejects_bad_index(i):
    with pytest.raises(IndexError):
        is_set(0xFF, i)


def test_get_bit_most_significant_byte_is_last():
    data = bytes([0xFF, 0x00])
    assert not any(get_bit(data, i) for i in range(8))
    assert all(get_bit(data, i) for i in range(8, 16))


def test_get_bit_counts_all_set_bits():
    data = bytes([0x5A, 0x01, 0xF0])
    expected = sum(bin(b).count("1") for b in data)
    assert sum(get_bit(data, i) for i in range(len(data) * 8)) == expected


@pytest.mark.parametrize("data, i", [(b"", 0), (b"\x01", 8), (b"\x01", -1)])
def test_get_bit_out_of_range(data, i):
    with pytest.raises(IndexError):
        get_bit(data, i)


def test_read_booleans_required_matches_bits():
    data = bytes([0xA5])
    result = read_booleans(data, 8, None, 0)
    assert result == [get_bit(data, i) for i in range(8)]
    assert result.count(True) == 4


def test_read_booleans_with_def_levels():
    data = bytes([0xA5])
    required = read_booleans(data, 8, None, 0)
    levels = [1, 0, 1, 1, 0, 1, 0, 1]
    optional = read_booleans(data, 8, levels, 1)
    assert len(optional) == len(levels)
    assert [v for v, lvl in zip(optional, levels) if lvl == 0] == [None, None, None]
    assert [v for v in optional if v is not None] == required[: levels.count(1)]


def test_read_booleans_empty():
    assert read_booleans(b"", 0, None, 0) == []


def test_read_booleans_too_short_buffer():
    with pytest.raises(IndexError):
        read_booleans(b"\x01", 9, None, 0)