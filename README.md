# pqcodec

Building blocks for handling Parquet-style column data in pure Python:

- **Compression codecs** for data pages: Snappy, Gzip, Brotli, LZ4 and Zstd.
- **Value decoders** that combine decoded values with definition levels into
  nullable columns. They cover plain primitives, booleans, binary values,
  dictionary-encoded values and single-level nested lists.
- **An in-memory column representation** (`Array`, `StructArray`,
  `ArrayKind`) that checks the type and range of its items.

## Installation

```
pip install pqcodec
```

To run the tests, install the `test` extra:

```
pip install "pqcodec[test]"
```

## Compression

```python
from pqcodec.compression import Compression, compress, decompress

data = bytes(x % 255 for x in range(10_000))
packed = compress(Compression.ZSTD, data)
assert decompress(Compression.ZSTD, packed, len(data)) == data
```

`decompress` needs the uncompressed size, which a page header records. It
returns exactly that many bytes. It raises `CompressionError` if the stream
is invalid or holds fewer bytes than requested. Asking either function for
`Compression.UNCOMPRESSED` raises `CompressionError`. So does asking for
`Compression.LZO`, which is not supported.

The Snappy raw block format is written in pure Python. It is also available
as its own pair of functions, `snappy_compress` and `snappy_decompress`.

## Decoding column values

The functions in `pqcodec.values`, `pqcodec.primitive` and `pqcodec.nested`
work on definition and repetition levels that have already been decoded. A
value is present only where its definition level equals the column's maximum
definition level. Everywhere else the decoders yield `None`.

```python
import struct

from pqcodec.arrays import ArrayKind
from pqcodec.primitive import read_primitives
from pqcodec.values import values_def

list(values_def(iter([1, 2]), [1, 0, 1], 1))          # [1, None, 2]
read_primitives(ArrayKind.INT32, struct.pack("<2i", 4, 5), [1, 0, 1], 1)
# [4, None, 5]
```

What each module provides:

- `pqcodec.values`:
  - `values_def` merges values with definition levels.
  - `get_bit` and `is_set` test single bits.
  - `read_booleans` decodes plain bit-packed booleans.
- `pqcodec.primitive`:
  - `read_primitives` decodes plain little-endian ints, floats and int96.
  - `read_dictionary` and `read_binary_dictionary` map dictionary indices to
    entries.
  - `read_plain_binary` decodes length-prefixed byte arrays.
- `pqcodec.nested`:
  - `read_int64_values` decodes plain int64 values.
  - `compose_list` builds an optional list of optional int64 from repetition
    and definition levels. It supports only a maximum repetition level of 1
    and a maximum definition level of 3.

```python
from pqcodec.nested import compose_list

column = compose_list([0, 1, 0, 0, 1, 1], [3, 3, 0, 3, 2, 3], 1, 3, [0, 1, 2, 3])
# Array(LIST, [Array(INT64, [0, 1]), None, Array(INT64, [2, None, 3])])
```

In functions that accept `def_levels=None`, every slot is treated as defined.

## What this package does not do

`pqcodec` does not open or parse Parquet files. It does not read footers,
schemas, page headers or statistics, and it does not decode RLE or
bit-packed level streams. It has no reader for remote or ranged storage and
no command-line tool. The caller must supply the page bytes, the levels and
the dictionaries.