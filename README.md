# klibkit

A small toolkit in four parts:

- `klibkit.sorting`: in-place sorting and selection over mutable sequences.
- `klibkit.vector`: `Vector`, a growable array that keeps track of its own
  capacity.
- `klibkit.reader`: `UrlFile`, a buffered, seekable, read-only stream over a
  local file or a remote URL.
- `klibkit.s3`: builds the signed HTTPS request that is used to read
  `s3://bucket/object` URLs.

It also has a command, `urlcat`, that copies a file or URL, or a slice of one,
to standard output.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Sorting

Every function sorts or rearranges the sequence in place. The optional `lt`
argument is a function `lt(a, b)` that returns true when `a` orders strictly
before `b`. Without it, `<` is used.

```python
from klibkit.sorting import introsort, mergesort, ksmall

data = [5, 3, 9, 1, 7]
introsort(data)                    # [1, 3, 5, 7, 9]

records = [("b", 2), ("a", 2), ("c", 1)]
mergesort(records, lambda x, y: x[1] < y[1])
# [("c", 1), ("b", 2), ("a", 2)]; equal keys keep their order

values = [8, 2, 6, 4]
ksmall(values, 2)                  # 6, the third smallest; values is partly reordered
```

The functions:

- `introsort(items, lt)`: quicksort with median-of-three pivots. It switches
  to comb sort when the recursion gets too deep and finishes with an
  insertion sort.
- `combsort(items, lt)`: comb sort.
- `mergesort(items, lt)`: stable bottom-up merge sort.
- `heap_make(items, lt)` turns the sequence into a max-heap.
  `heapsort(items, lt)` then sorts a sequence that already holds such a heap,
  so call `heap_make` first. `heap_adjust(items, i, n, lt)` sifts `items[i]`
  down within the heap `items[:n]`.
- `ksmall(items, k, lt)`: returns the `k`-th smallest element, counting from
  0. It raises `IndexError` when `k` is out of range.
- `shuffle(items, rng)`: Fisher–Yates shuffle. `rng` is any object with a
  `random()` method, such as `random.Random(seed)`. The default is the
  `random` module.
- `sample(items, r, rng)`: moves a uniformly chosen subset of `r` elements to
  the front of `items`. The chosen elements keep their relative order. It
  raises `ValueError` when `r` is negative or larger than the sequence.
- `radix_sort(items, key, key_bytes)`: most-significant-digit radix sort on
  unsigned integer keys, one byte at a time.
  - `key` maps an element to an integer in `[0, 256 ** key_bytes)`. Without
    `key`, the elements themselves must be integers.
  - `key_bytes` defaults to 4.
  - Sequences of 64 elements or fewer are insertion-sorted.
  - A key out of range raises `ValueError`.

## Vector

```python
from klibkit.vector import Vector

v = Vector(fill=0)
v.push(10)        # capacity grows to 2, then doubles when full
v[5] = 4          # grows to 6 elements, padded with 0
v.capacity()      # 8: growing by index rounds the capacity up to a power of two
v.pop()           # 4
```

How the methods size the vector:

| Method | Effect |
| --- | --- |
| `at(index)` | Returns the element, growing the vector to cover `index` first. A negative index raises `IndexError`. |
| Assignment to a non-negative index | Grows the vector the same way as `at`. |
| `resize(capacity)` | Sets the capacity and drops any elements beyond it. |
| `copy_from(other)` | Replaces the contents with those of `other`. |

`len()`, iteration and indexing behave like a list.

## Reading local and remote files

```python
import os
from klibkit.reader import UrlFile

with UrlFile.open("data/input.bin") as f:
    header = f.read(16)
    f.seek(1024, os.SEEK_SET)
    chunk = f.read(4096)
    print(f.tell(), f.eof())
```

### Opening

- A string is treated as a URL when it has an alphanumeric scheme followed by
  `://`. `is_remote(url)` performs this test.
- Any other string is opened as a local path.
- `UrlFile.from_fd(fd)` wraps a descriptor that is already open. The
  descriptor is closed together with the stream.
- Opening fails if the source yields no data at all.

### Remote URLs

- Remote URLs are fetched with `urllib`.
- TLS certificates are not verified.
- `s3://bucket/object` URLs are rewritten to
  `https://bucket.s3.amazonaws.com/object` and sent with signed `Date` and
  `Authorization` headers.

### Methods

- `read(nbytes)` returns up to `nbytes` bytes. An empty result means the end of
  the data.
- `skip(nbytes)` advances without keeping the data and returns how many bytes
  were skipped.
- `seek(offset, whence)` accepts these `whence` values:
  - `os.SEEK_SET` and `os.SEEK_CUR` for any stream;
  - `os.SEEK_END` for local files only.
- Short forward seeks are served from the buffer or read through it. Backward
  seeks and long forward jumps reposition the source. For a remote URL, that
  means reconnecting with a `Range` header, and the server must answer
  `206 Partial Content`.
- `tell()` returns the current position.
- `eof()` is true once the buffer has run dry at the end of the data.
- `fileno()` returns the descriptor, or -1 for a remote or closed stream.
- `set_buffer_size(length)` asks for a larger buffer, rounded up to a power of
  two, and returns the size in effect. For remote streams, requests below
  32 KiB are ignored.
- `close()` releases the descriptor or connection. A `UrlFile` is also a
  context manager.

### Errors

- Errors specific to this stream are `UrlFileError` subclasses, which are
  `OSError`s:
  - `InvalidWhenceError` for an unsupported `whence`;
  - `SeekOutOfRangeError` for a negative or unreachable offset.
- A local path that cannot be opened raises the usual `OSError` from the
  operating system.
- The stream's `error` attribute records the code of the last seek failure.

### Credentials for `s3://` URLs

The key id and the secret can be passed through
`OpenOptions(s3_key_id=..., s3_secret_key=...)`. If either one is missing, both
are read from a credentials file:

- the file given as `OpenOptions(s3_key_file=...)`, or
- `$HOME/.awssecret` when no file is given.

The file holds the key id on its first line and the secret on its second:

```
placeholder
secret
```

The signing pieces can also be used directly:

| Function | Returns |
| --- | --- |
| `parse_s3_url(url, key_id, secret, secret_file, now)` | An `S3Request` holding `url`, `date` and `authorization`; its `headers` property gives them as a dict. |
| `sign(key, data)` | The base64 HMAC-SHA1 signature. |
| `hmac_sha1(key, data)` | The raw 20-byte digest. |
| `read_aws_secret(path)` | The `(key_id, secret)` pair from a credentials file. |

## Command line

```
urlcat [-c start] [-l length] [-a credentials_file] <url>
```

- `-c start`: begin reading at this byte offset.
- `-l length`: stop after this many bytes.
- `-a file`: read S3 credentials from this file.

The numbers for `-c` and `-l` may be written in decimal, `0x` hex, `0o` octal
or `0b` binary. The tool exits with these statuses:

| Status | Meaning |
| --- | --- |
| 0 | Success |
| 1 | No URL was given |
| 2 | The URL cannot be opened |
| 3 | The seek fails |

## What it does not do

- Streams are read-only. Nothing here writes to or uploads to a file, a URL or
  S3.
- Remote streams cannot seek relative to their end.
- S3 requests are signed once, when the stream is opened.
</br>