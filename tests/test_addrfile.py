import json

import pytest

from lanchat.addrfile import ensure_file, read_address, write_address


def test_round_trip_ipv4(tmp_path):
    path = tmp_path / "socket.json"
    write_address(path, ("127.0.0.1", 8080))
    assert read_address(path) == ("127.0.0.1", 8080)


def test_file_holds_json_string(tmp_path):
    path = tmp_path / "socket.json"
    write_address(path, ("127.0.0.1", 8080))
    assert json.loads(path.read_text()) == "127.0.0.1:8080"


def test_round_trip_ipv6(tmp_path):
    path = tmp_path / "socket.json"
    write_address(path, ("::1", 9000))
    assert json.loads(path.read_text()) == "[::1]:9000"
    assert read_address(path) == ("::1", 9000)


def test_write_accepts_longer_socket_tuples(tmp_path):
    path = tmp_path / "socket.json"
    write_address(path, ("::1", 4000, 0, 0))
    assert read_address(path) == ("::1", 4000)


def test_write_overwrites_previous(tmp_path):
    path = tmp_path / "socket.json"
    write_address(path, ("127.0.0.1", 1000))
    write_address(path, ("127.0.0.1", 2000))
    assert read_address(path) == ("127.0.0.1", 2000)


def test_read_missing_file_creates_it(tmp_path):
    path = tmp_path / "socket.json"
    assert read_address(path) is None
    assert path.exists()
    assert path.read_text() == ""


def test_ensure_file_keeps_existing_content(tmp_path):
    path = tmp_path / "socket.json"
    path.write_text("keep")
    ensure_file(path)
    assert path.read_text() == "keep"


def test_ensure_file_creates_empty(tmp_path):
    path = tmp_path / "new.json"
    ensure_file(path)
    assert path.is_file()
    assert path.read_text() == ""


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        '"localhost:80"',
        '"127.0.0.1:99999"',
        '"127.0.0.1"',
        '"[::1:80"',
        '"::1:80"',
        "12",
    ],
)
def test_read_rejects_invalid_content(tmp_path, content):
    path = tmp_path / "socket.json"
    path.write_text(content)
    with pytest.raises(ValueError):
        read_address(path)


def test_write_rejects_hostname(tmp_path):
    with pytest.raises(ValueError):
        write_address(tmp_path / "socket.json", ("localhost", 80))


def test_write_rejects_bad_port(tmp_path):
    with pytest.raises(ValueError):
        write_address(tmp_path / "socket.json", ("127.0.0.1", 70000))