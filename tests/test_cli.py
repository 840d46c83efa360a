"""Tests for the CLI seed/list/init commands."""

import json

import pytest

from todoserver.cli import main


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "todoserver.config.yaml"
    path.write_text(f"database:\n  sqlite_path: {tmp_path / 'todos.db'}\nlogging:\n  level: WARNING\n", encoding="utf-8")
    return path


def _seed(tmp_path, config_path, entries):
    seed_file = tmp_path / "seed.json"
    seed_file.write_text(json.dumps(entries), encoding="utf-8")
    return main(["--config", str(config_path), "seed", str(seed_file)])


def test_init_creates_database(tmp_path, config_path, capsys):
    assert main(["--config", str(config_path), "init"]) == 0
    assert (tmp_path / "todos.db").exists()
    assert "Initialized database" in capsys.readouterr().out


def test_seed_then_list_with_filters(tmp_path, config_path, capsys):
    entries = [
        {"owner": "Chris", "status": True, "body": "UMM homework", "category": "homework"},
        {"owner": "Jamie", "status": True, "body": "OHMNET project", "category": "software design"},
        {"owner": "Sam", "status": False, "body": "Frogs project", "category": "software design"},
    ]
    assert _seed(tmp_path, config_path, entries) == 0
    assert "Seeded 3 of 3" in capsys.readouterr().out

    assert main(["--config", str(config_path), "list", "--body", "project", "--sortorder", "desc"]) == 0
    out = capsys.readouterr().out
    assert out.index("Sam") < out.index("Jamie")
    assert "Chris" not in out
    assert "2 shown, 3 total" in out


def test_seed_skips_invalid_entries(tmp_path, config_path, capsys):
    entries = [
        {"owner": "Ana", "body": "Buy milk", "category": "groceries"},
        {"owner": "", "body": "Nothing", "category": "groceries"},
    ]
    assert _seed(tmp_path, config_path, entries) == 1
    assert "Seeded 1 of 2" in capsys.readouterr().out


def test_list_invalid_status_exits_nonzero(config_path, capsys):
    assert main(["--config", str(config_path), "list", "--status", "maybe"]) == 2
    assert "status" in capsys.readouterr().err


def test_serve_passes_host_and_port_overrides(config_path, monkeypatch):
    calls = []
    monkeypatch.setattr("todoserver.server.run_server", lambda config: calls.append(config))

    assert main(["--config", str(config_path), "serve", "--host", "0.0.0.0", "--port", "8123"]) == 0
    assert len(calls) == 1
    assert calls[0]["server"]["host"] == "0.0.0.0"
    assert calls[0]["server"]["port"] == 8123


def test_serve_without_overrides_uses_config(config_path, monkeypatch):
    calls = []
    monkeypatch.setattr("todoserver.server.run_server", lambda config: calls.append(config))

    assert main(["--config", str(config_path), "serve"]) == 0
    assert calls[0]["server"]["host"] == "127.0.0.1"
    assert calls[0]["server"]["port"] == 4567
