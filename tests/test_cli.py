import pytest

from klibkit.cli import main

PAYLOAD = bytes(range(256)) * 300


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(PAYLOAD)
    return str(path)


def test_copies_whole_file(data_file, capsysbinary):
    assert main([data_file]) == 0
    assert capsysbinary.readouterr().out == PAYLOAD


def test_start_and_length(data_file, capsysbinary):
    assert main(["-c", "10", "-l", "20", data_file]) == 0
    assert capsysbinary.readouterr().out == PAYLOAD[10:30]


def test_hex_start(data_file, capsysbinary):
    assert main(["-c", "0x100", "-l", "4", data_file]) == 0
    assert capsysbinary.readouterr().out == PAYLOAD[256:260]


def test_length_beyond_end(data_file, capsysbinary):
    assert main(["-c", "70000", "-l", "100000", data_file]) == 0
    assert capsysbinary.readouterr().out == PAYLOAD[70000:]


def test_usage_without_url(capsysbinary):
    assert main([]) == 1
    assert b"Usage" in capsysbinary.readouterr().err


def test_missing_file(tmp_path, capsysbinary):
    assert main([str(tmp_path / "absent")]) == 2
    assert b"fail to open" in capsysbinary.readouterr().err


def test_seek_past_end(tmp_path, capsysbinary):
    path = tmp_path / "small"
    path.write_bytes(b"y" * 100)
    assert main(["-c", "200", str(path)]) == 3
    captured = capsysbinary.readouterr()
    assert b"fail to seek" in captured.err
    assert captured.out == b""