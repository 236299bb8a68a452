import json

import pytest

from tuono.config import (
    Config,
    Mode,
    ServerConfig,
    get_global_config,
    get_global_mode,
    set_global_config,
    set_global_mode,
    tuono_print,
)


def _write_config(base, content):
    path = base / ".tuono" / "config" / "config.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture(autouse=True)
def _reset_globals():
    yield
    set_global_config(None)
    set_global_mode(None)


def test_config_default():
    config = Config()
    assert config.server.host == "localhost"
    assert config.server.origin is None
    assert config.server.port == 3000


def test_should_correctly_read_the_config_file(tmp_path):
    _write_config(tmp_path, '{ "server": {"host": "localhost", "port": 3000}}')
    config = Config.get(tmp_path)
    assert config.server.host == "localhost"
    assert config.server.origin is None
    assert config.server.port == 3000


def test_should_correctly_read_the_config_file_with_origin(tmp_path):
    _write_config(
        tmp_path,
        '{ "server": {"host": "localhost", "origin": "https://tuono.localhost", "port": 3000}}',
    )
    config = Config.get(tmp_path)
    assert config.server.host == "localhost"
    assert config.server.origin == "https://tuono.localhost"
    assert config.server.port == 3000


def test_reads_from_current_directory_by_default(tmp_path, monkeypatch):
    _write_config(tmp_path, '{"server": {"host": "127.0.0.1", "port": 0}}')
    monkeypatch.chdir(tmp_path)
    config = Config.get()
    assert config.server == ServerConfig(host="127.0.0.1", origin=None, port=0)


def test_should_fail_if_the_file_does_not_exist(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.get(tmp_path)


def test_should_fail_if_the_file_is_not_json(tmp_path):
    _write_config(tmp_path, "INVALID JSON")
    with pytest.raises(ValueError):
        Config.get(tmp_path)


@pytest.mark.parametrize(
    "content",
    [
        "{}",
        '{"server": {"host": "localhost"}}',
        '{"server": {"port": 3000}}',
        '{"server": {"host": "localhost", "port": 70000}}',
        '{"server": {"host": "localhost", "port": "3000"}}',
    ],
)
def test_rejects_invalid_config_content(tmp_path, content):
    _write_config(tmp_path, content)
    with pytest.raises(ValueError):
        Config.get(tmp_path)


def test_to_dict_round_trips_through_json(tmp_path):
    config = Config(ServerConfig(host="0.0.0.0", origin="https://app.example.com", port=8080))
    _write_config(tmp_path, json.dumps(config.to_dict()))
    assert Config.get(tmp_path) == config
    assert config.to_dict() == {
        "server": {"host": "0.0.0.0", "origin": "https://app.example.com", "port": 8080}
    }


def test_tuono_print_indents_message(capsys):
    tuono_print("Ready")
    assert capsys.readouterr().out == "  Ready\n"


def test_mode_serialises_by_name():
    assert json.dumps(Mode.DEV) == '"Dev"'
    assert Mode("Prod") is Mode.PROD


def test_global_config_round_trip():
    with pytest.raises(RuntimeError):
        get_global_config()
    config = Config(ServerConfig(port=4000))
    set_global_config(config)
    assert get_global_config().server.port == 4000


def test_global_mode_round_trip():
    with pytest.raises(RuntimeError):
        get_global_mode()
    set_global_mode(Mode.PROD)
    assert get_global_mode() is Mode.PROD