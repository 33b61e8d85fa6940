import base64
from datetime import datetime, timezone

import pytest

from klibkit.s3 import S3Request, hmac_sha1, parse_s3_url, read_aws_secret, sign

NOW = datetime(2011, 4, 10, 12, 0, 0, tzinfo=timezone.utc)


def test_hmac_sha1_rfc2202_short_key():
    digest = hmac_sha1(b"Jefe", b"what do ya want for nothing?")
    assert digest.hex() == "effcdf6ae5eb2fa2d27416d5f184df9c259a7c79"


def test_hmac_sha1_rfc2202_key_longer_than_block():
    digest = hmac_sha1(b"\xaa" * 80, b"Test Using Larger Than Block-Size Key - Hash Key First")
    assert digest.hex() == "aa4ae5e15272d00e95705637ce8a3b55ed402112"


def test_hmac_sha1_accepts_text_and_bytes_alike():
    assert hmac_sha1("Jefe", "what do ya want for nothing?") == hmac_sha1(
        b"Jefe", b"what do ya want for nothing?"
    )
    assert len(hmac_sha1("k", "d")) == 20


def test_sign_is_base64_of_digest():
    signature = sign("secret", "payload")
    assert len(signature) == 28
    assert signature.endswith("=")
    assert base64.b64decode(signature) == hmac_sha1("secret", "payload")


def test_read_aws_secret_from_file(tmp_path):
    path = tmp_path / "creds"
    path.write_text("keyid\nsecret\n")
    assert read_aws_secret(str(path)) == ("keyid", "secret")


def test_read_aws_secret_without_trailing_newline(tmp_path):
    path = tmp_path / "creds"
    path.write_text("keyid\nsecret")
    assert read_aws_secret(str(path)) == ("keyid", "secret")


def test_read_aws_secret_needs_two_lines(tmp_path):
    path = tmp_path / "creds"
    path.write_text("keyid")
    with pytest.raises(ValueError):
        read_aws_secret(str(path))


def test_read_aws_secret_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_aws_secret(str(tmp_path / "absent"))


def test_read_aws_secret_uses_home(tmp_path, monkeypatch):
    (tmp_path / ".awssecret").write_text("keyid\nsecret\n")
    monkeypatch.setenv("HOME", str(tmp_path))
    assert read_aws_secret() == ("keyid", "secret")


def test_parse_s3_url_builds_request():
    request = parse_s3_url("s3://bucket/dir/obj.txt", "keyid", "secret", now=NOW)
    assert isinstance(request, S3Request)
    assert request.url == "https://bucket.s3.amazonaws.com/dir/obj.txt"
    assert request.date == "Sun, 10 Apr 2011 12:00:00 +0000"
    expected_sig = sign("secret", "GET\n\n\n" + request.date + "\n/bucket/dir/obj.txt")
    assert request.authorization == "AWS keyid:" + expected_sig
    assert request.headers == {"Date": request.date, "Authorization": request.authorization}


def test_parse_s3_url_reads_secret_file(tmp_path):
    path = tmp_path / "creds"
    path.write_text("keyid\nsecret\n")
    from_file = parse_s3_url("s3://bucket/obj", secret_file=str(path), now=NOW)
    explicit = parse_s3_url("s3://bucket/obj", "keyid", "secret", now=NOW)
    assert from_file == explicit


def test_parse_s3_url_naive_time_is_utc():
    naive = parse_s3_url("s3://b/o", "keyid", "secret", now=NOW.replace(tzinfo=None))
    aware = parse_s3_url("s3://b/o", "keyid", "secret", now=NOW)
    assert naive == aware


def test_parse_s3_url_rejects_other_schemes():
    with pytest.raises(ValueError):
        parse_s3_url("https://bucket/obj", "keyid", "secret")


def test_parse_s3_url_requires_object():
    with pytest.raises(ValueError):
        parse_s3_url("s3://bucket", "keyid", "secret")