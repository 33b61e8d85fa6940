"""Request signing for reading objects from Amazon S3 over HTTPS."""

from __future__ import annotations

import base64
import hashlib
import hmac
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple, Union

S3_SCHEME = "s3://"
S3_HOST_SUFFIX = ".s3.amazonaws.com"
SECRET_FILE_NAME = ".awssecret"
_SECRET_READ_LIMIT = 127
_NEWLINE = b"\n"
_NUL = b"\0"

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

BytesLike = Union[str, bytes]


def _as_bytes(value: BytesLike) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


@dataclass(frozen=True)
class S3Request:
    """An HTTPS URL for an S3 object together with its signed headers."""

    url: str
    date: str
    authorization: str

    @property
    def headers(self) -> dict:
        """The HTTP headers that authorise the request."""
        return {"Date": self.date, "Authorization": self.authorization}


def hmac_sha1(key: BytesLike, data: BytesLike) -> bytes:
    """Return the 20-byte HMAC-SHA1 digest of ``data`` under ``key``."""
    return hmac.new(_as_bytes(key), _as_bytes(data), hashlib.sha1).digest()


def sign(key: BytesLike, data: BytesLike) -> str:
    """Return the base64-encoded HMAC-SHA1 signature of ``data``."""
    return base64.b64encode(hmac_sha1(key, data)).decode("ascii")


def read_aws_secret(path: Optional[str] = None) -> Tuple[str, str]:
    """Read a key id and a secret key from the first two lines of a file.

    Without ``path`` the file ``~/.awssecret`` (under ``$HOME``) is used.
    Raises ``OSError`` when the file cannot be read and ``ValueError`` when
    it does not hold a key id line.
    """
    if path is None:
        home = os.environ.get("HOME")
        if not home:
            raise FileNotFoundError("HOME is not set; cannot locate the secret file")
        path = os.path.join(home, SECRET_FILE_NAME)
    with open(path, "rb") as handle:
        data = handle.read(_SECRET_READ_LIMIT)
    data = data.split(_NUL, 1)[0]
    if _NEWLINE not in data:
        raise ValueError(f"{path}: expected a key id line followed by a secret line")
    first_line, _, rest = data.partition(_NEWLINE)
    second_line = rest.split(_NEWLINE, 1)[0]
    return first_line.decode("utf-8"), second_line.decode("utf-8")


def _http_date(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return (f"{_DAYS[moment.weekday()]}, {moment.day:02d} {_MONTHS[moment.month - 1]} "
            f"{moment.year:04d} {moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} +0000")


def parse_s3_url(
    url: str,
    key_id: Optional[str] = None,
    secret: Optional[str] = None,
    secret_file: Optional[str] = None,
    now: Optional[datetime] = None,
) -> S3Request:
    """Turn ``s3://bucket/object`` into a signed HTTPS request.

    When either ``key_id`` or ``secret`` is missing, both are read from
    ``secret_file`` (see ``read_aws_secret``).
    """
    if not url.startswith(S3_SCHEME):
        raise ValueError(f"not an S3 URL: {url!r}")
    path = url[len(S3_SCHEME):]
    slash = path.find("/")
    if slash < 0:
        raise ValueError(f"S3 URL names no object: {url!r}")
    bucket, obj = path[:slash], path[slash:]
    if key_id is None or secret is None:
        key_id, secret = read_aws_secret(secret_file)
    https_url = "https://" + bucket + S3_HOST_SUFFIX + obj
    date = _http_date(now if now is not None else datetime.now(timezone.utc))
    to_sign = "GET\n\n\n" + date + "\n" + "/" + path
    signature = sign(secret, to_sign)
    authorization = " ".join(("AWS", key_id + ":" + signature))
    return S3Request(url=https_url, date=date, authorization=authorization)