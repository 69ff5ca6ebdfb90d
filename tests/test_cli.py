import pytest

from lanchat.addrfile import write_address
from lanchat.cli import InitMode, init_on_mode, main, parse_mode
from lanchat.server import Server


@pytest.mark.parametrize(
    "arg, expected",
    [
        ("client", InitMode.CLIENT),
        ("CLIENT", InitMode.CLIENT),
        ("Server", InitMode.SERVER),
        ("default", InitMode.DEFAULT),
    ],
)
def test_parse_mode(arg, expected):
    assert parse_mode(arg) is expected


def test_parse_mode_invalid():
    with pytest.raises(ValueError, match="server\\|client\\|default"):
        parse_mode("bogus")


def test_client_mode_without_server(tmp_path, capsys):
    init_on_mode(InitMode.CLIENT, tmp_path / "socket.json")
    assert "Não há nenhum servidor ativo!" in capsys.readouterr().out


def test_server_mode_with_server_running(tmp_path, capsys):
    path = tmp_path / "socket.json"
    with Server() as server:
        write_address(path, server.address())
        init_on_mode(InitMode.SERVER, path)
    assert "Já há um servidor online" in capsys.readouterr().out


def test_main_rejects_unknown_mode(capsys):
    with pytest.raises(SystemExit, match="Selecione o modo"):
        main(["bogus"])
    assert "Starting" in capsys.readouterr().out


def test_main_client_mode_without_server(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["client"]) == 0
    out = capsys.readouterr().out
    assert "Não há nenhum servidor ativo!" in out
    assert (tmp_path / "socket.json").exists()