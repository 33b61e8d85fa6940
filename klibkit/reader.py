"""Buffered, seekable reading from local files and remote URLs."""

from __future__ import annotations

import os
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Optional

from .s3 import S3_SCHEME, parse_s3_url

DEFAULT_BUFFER_SIZE = 0x8000
MAX_SKIP = DEFAULT_BUFFER_SIZE << 1
REMOTE_CHUNK_SIZE = 16384
_TIMEOUT = 60.0


class UrlFileError(OSError):
    """Base error for ``UrlFile`` operations."""

    code = 1


class InvalidWhenceError(UrlFileError):
    """The ``whence`` argument of a seek is not supported for this file."""

    code = 2


class SeekOutOfRangeError(UrlFileError):
    """A seek went before the start or past the end of the data."""

    code = 3


class _NoAuthError(UrlFileError):
    code = 4


@dataclass
class OpenOptions:
    """Credentials used when opening ``s3://`` URLs."""

    s3_key_id: Optional[str] = None
    s3_secret_key: Optional[str] = None
    s3_key_file: Optional[str] = None


def is_remote(url: str) -> bool:
    """True when ``url`` has an alphanumeric scheme followed by ``://``."""
    scheme, sep, _ = url.partition("://")
    return bool(sep) and all(c.isascii() and c.isalnum() for c in scheme)


def _roundup_pow2(x: int) -> int:
    return 1 << (x - 1).bit_length() if x > 1 else 1


def _insecure_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class UrlFile:
    """A read-only stream over a local file or a remote URL.

    Data are read through an internal buffer; short forward seeks read
    through the buffer while long or backward seeks reposition the source.
    """

    def __init__(self, fd: int = -1, url: Optional[str] = None,
                 headers: Optional[dict] = None) -> None:
        self._fd = fd
        self._url = url
        self._remote = url is not None
        self._headers = dict(headers or {})
        self._response = None
        self._offset = 0
        self._buf = b""
        self._pos = 0
        self._done = False
        self._closed = False
        self.error = 0
        self._capacity = DEFAULT_BUFFER_SIZE
        if self._remote and self._capacity < REMOTE_CHUNK_SIZE * 2:
            self._capacity = REMOTE_CHUNK_SIZE * 2

    @classmethod
    def open(cls, url: str, options: Optional[OpenOptions] = None) -> "UrlFile":
        """Open a local path or a remote URL (``http``, ``https``, ``ftp``, ``s3``)."""
        if not is_remote(url):
            stream = cls(fd=os.open(url, os.O_RDONLY))
            try:
                if stream._fill() <= 0:
                    raise UrlFileError(f"{url}: no data")
            except BaseException:
                stream.close()
                raise
            return stream
        target, headers = url, {}
        if url.startswith(S3_SCHEME):
            options = options or OpenOptions()
            try:
                request = parse_s3_url(url, options.s3_key_id, options.s3_secret_key,
                                       options.s3_key_file)
            except (OSError, ValueError) as exc:
                raise _NoAuthError(f"{url}: cannot authorise request: {exc}") from exc
            target, headers = request.url, request.headers
        stream = cls(url=target, headers=headers)
        try:
            if not stream._prepare(seek=False) or stream._fill() <= 0:
                raise UrlFileError(f"{url}: cannot read")
        except BaseException:
            stream.close()
            raise
        return stream

    @classmethod
    def from_fd(cls, fd: int) -> "UrlFile":
        """Wrap an open file descriptor; it is closed with the stream."""
        stream = cls(fd=fd)
        try:
            if not stream._prepare(seek=False) or stream._fill() <= 0:
                raise UrlFileError(f"descriptor {fd}: no data")
        except BaseException:
            stream.close()
            raise
        return stream

    def _connect(self) -> bool:
        if self._response is not None:
            self._response.close()
            self._response = None
        headers = dict(self._headers)
        if self._offset:
            headers["Range"] = f"bytes={self._offset}-"
        request = urllib.request.Request(self._url, headers=headers)
        try:
            response = urllib.request.urlopen(request, timeout=_TIMEOUT,
                                              context=_insecure_context())
        except (urllib.error.URLError, OSError, ValueError):
            return False
        if self._offset and getattr(response, "status", None) != 206:
            response.close()
            return False
        self._response = response
        return True

    def _prepare(self, seek: bool) -> bool:
        if self._remote:
            if not self._connect():
                return False
        elif seek:
            try:
                if os.lseek(self._fd, self._offset, os.SEEK_SET) != self._offset:
                    return False
            except OSError:
                return False
        self._buf = b""
        self._pos = 0
        return True

    def _fill(self) -> int:
        self._offset += len(self._buf)
        self._buf = b""
        self._pos = 0
        if self._done:
            return 0
        chunks = []
        size = 0
        while size < self._capacity:
            if self._remote:
                chunk = self._response.read(self._capacity - size) if self._response else b""
            else:
                chunk = os.read(self._fd, self._capacity - size)
            if not chunk:
                break
            chunks.append(chunk)
            size += len(chunk)
        self._buf = b"".join(chunks)
        if size < self._capacity:
            self._done = True
        return size

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed file")

    def _consume(self, nbytes: int, keep: bool) -> bytes | int:
        self._check_open()
        if nbytes < 0:
            raise ValueError("byte count must not be negative")
        if not self._buf:
            return b"" if keep else 0
        parts = []
        rest = nbytes
        while rest:
            available = len(self._buf) - self._pos
            if available >= rest:
                if keep:
                    parts.append(self._buf[self._pos:self._pos + rest])
                self._pos += rest
                rest = 0
            else:
                if keep and available:
                    parts.append(self._buf[self._pos:])
                rest -= available
                self._pos = len(self._buf)
                if self._fill() <= 0:
                    break
        return b"".join(parts) if keep else nbytes - rest

    def read(self, nbytes: int) -> bytes:
        """Read up to ``nbytes`` bytes; an empty result means end of file."""
        return self._consume(nbytes, keep=True)

    def skip(self, nbytes: int) -> int:
        """Advance by up to ``nbytes`` bytes and return how many were skipped."""
        return self._consume(nbytes, keep=False)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move to a new position and return it."""
        self._check_open()
        current = self._offset + self._pos
        seek_end = False
        if whence == os.SEEK_SET:
            target = offset
        elif whence == os.SEEK_CUR:
            target = current + offset
        elif whence == os.SEEK_END and not self._remote:
            try:
                target = os.lseek(self._fd, offset, os.SEEK_END)
            except OSError:
                target = -1
            seek_end = True
        else:
            self.error = InvalidWhenceError.code
            raise InvalidWhenceError(f"unsupported whence {whence}")
        if target < 0:
            self.error = SeekOutOfRangeError.code
            raise SeekOutOfRangeError(f"negative offset {target}")
        if not seek_end and target >= current and target - current + self._pos < len(self._buf):
            self._pos += target - current
            return self._offset + self._pos
        if seek_end or target < current or target - current > MAX_SKIP:
            self._offset = target
            self._done = False
            failed = not self._prepare(seek=True) or self._fill() <= 0
        else:
            failed = self.skip(target - current) + current != target
        if failed:
            self.error = SeekOutOfRangeError.code
            self._buf = b""
            self._pos = 0
            raise SeekOutOfRangeError(f"offset {target} is out of range")
        return target

    def tell(self) -> int:
        """Return the current position."""
        return self._offset + self._pos

    def eof(self) -> bool:
        """True once the buffer has run dry at the end of the data."""
        return self._closed or not self._buf

    def fileno(self) -> int:
        """The underlying descriptor, or -1 for remote or closed streams."""
        return -1 if self._remote or self._closed else self._fd

    def set_buffer_size(self, length: int) -> int:
        """Request a buffer of at least ``length`` bytes; return the size in effect."""
        if length <= 0 or length < len(self._buf):
            return self._capacity
        if self._remote and length < REMOTE_CHUNK_SIZE * 2:
            return self._capacity
        self._capacity = _roundup_pow2(length)
        return self._capacity

    def close(self) -> None:
        """Release the descriptor or connection."""
        if self._closed:
            return
        self._closed = True
        if self._response is not None:
            self._response.close()
            self._response = None
        if not self._remote and self._fd >= 0:
            os.close(self._fd)
        self._buf = b""
        self._pos = 0

    def __enter__(self) -> "UrlFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()