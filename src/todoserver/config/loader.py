import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("todoserver.config.yaml")

SORTABLE_FIELDS = ("owner", "status", "body", "category", "id")

BASE_CONFIG: Dict[str, Dict[str, Any]] = {
    "database": {
        "sqlite_path": "todos.db",
    },
    "server": {
        "host": "127.0.0.1",
        "port": 4567,
        "api_prefix": "",
    },
    "query": {
        "default_sort_key": "owner",
        "sort_key_params": ["sortby", "orderBy"],
        "category_case_sensitive": True,
    },
    "logging": {
        "level": "INFO",
    },
}


def default_config() -> Dict[str, Any]:
    return deepcopy(BASE_CONFIG)


def _merge_sections(user_config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay user sections on the built-in defaults, one section at a time."""
    merged = default_config()
    for section, values in user_config.items():
        if section not in merged:
            raise ValueError(f"Unknown config section: {section}")
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{section}' must be a dictionary")
        merged[section].update(values)
    return merged


def _validate(config: Dict[str, Any]) -> None:
    port = config["server"]["port"]
    if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
        raise ValueError(f"server.port must be an integer between 1 and 65535, got {port!r}")

    prefix = config["server"]["api_prefix"] or ""
    if not isinstance(prefix, str):
        raise ValueError(f"server.api_prefix must be a string, got {prefix!r}")
    if prefix and (not prefix.startswith("/") or prefix.endswith("/")):
        raise ValueError(f"server.api_prefix must start with '/' and not end with one, got {prefix!r}")
    config["server"]["api_prefix"] = prefix

    query = config["query"]
    if query["default_sort_key"] not in SORTABLE_FIELDS:
        raise ValueError(
            f"query.default_sort_key must be one of {', '.join(SORTABLE_FIELDS)}, "
            f"got {query['default_sort_key']!r}"
        )
    params = query["sort_key_params"]
    if not isinstance(params, list) or not params or not all(isinstance(p, str) and p for p in params):
        raise ValueError("query.sort_key_params must be a non-empty list of parameter names")
    if not isinstance(query["category_case_sensitive"], bool):
        raise ValueError("query.category_case_sensitive must be true or false")

    level = str(config["logging"]["level"]).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"logging.level is not a known level: {config['logging']['level']!r}")
    config["logging"]["level"] = level


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load configuration from YAML and merge it over the built-in defaults.

    Args:
        path: Optional explicit config path. An explicit path must exist; when
            omitted, todoserver.config.yaml in the working directory is used if
            present and the defaults otherwise.

    Returns:
        Fully populated configuration dictionary

    Raises:
        FileNotFoundError: If an explicit config path doesn't exist
        ValueError: If the config structure or a value is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        config = default_config()
        _validate(config)
        return config

    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError("Config must be a dictionary")

    config = _merge_sections(raw)
    _validate(config)
    return config
