"""Tests for config loading and validation."""

import pytest

from todoserver.config.loader import load_config


def test_defaults_when_no_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config()
    assert config["query"]["default_sort_key"] == "owner"
    assert config["query"]["sort_key_params"] == ["sortby", "orderBy"]
    assert config["query"]["category_case_sensitive"] is True
    assert config["server"]["api_prefix"] == ""


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_user_values_merge_over_defaults(tmp_path):
    path = tmp_path / "todoserver.config.yaml"
    path.write_text(
        "server:\n  port: 8080\n  api_prefix: /api\nquery:\n  category_case_sensitive: false\nlogging:\n  level: debug\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config["server"]["port"] == 8080
    assert config["server"]["host"] == "127.0.0.1"
    assert config["server"]["api_prefix"] == "/api"
    assert config["query"]["category_case_sensitive"] is False
    assert config["query"]["default_sort_key"] == "owner"
    assert config["logging"]["level"] == "DEBUG"


@pytest.mark.parametrize(
    "yaml_text",
    [
        "server:\n  port: 0\n",
        "server:\n  api_prefix: api/\n",
        "query:\n  default_sort_key: password\n",
        "query:\n  sort_key_params: []\n",
        "query:\n  category_case_sensitive: sometimes\n",
        "logging:\n  level: LOUD\n",
        "unknown:\n  key: 1\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_config_rejected(tmp_path, yaml_text):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml_text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
