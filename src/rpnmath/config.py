"""Project-level configuration loaded from ``rpnmath.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from rpnmath.numeric import get_domain

CONFIG_FILENAME = "rpnmath.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "domain": "real",
    "logging_fsync": False,
    "logging_tail_bytes": 2_097_152,  # 2 MB
}

CONFIG_TEMPLATE = """\
# rpnmath configuration
# domain: real            # real | complex
# logging_fsync: false
# logging_tail_bytes: 2097152
"""


class ConfigError(Exception):
    """Invalid configuration file or value."""


def load_config(project_dir: Path) -> dict[str, Any]:
    """Load configuration from ``rpnmath.yaml``, with defaults.

    Args:
        project_dir: Directory that may contain ``rpnmath.yaml``.

    Returns:
        Merged configuration dict.

    Raises:
        ConfigError: If the file is not a YAML mapping.
    """
    config = dict(DEFAULT_CONFIG)
    config_path = Path(project_dir) / CONFIG_FILENAME
    if config_path.exists():
        try:
            user_config = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Cannot parse {config_path}: {exc}") from exc
        if not isinstance(user_config, dict):
            raise ConfigError(f"{config_path} must contain a mapping, got {type(user_config).__name__}")
        config.update(user_config)
    return config


def table_from_config(config: dict[str, Any]) -> Any:
    """Build a fresh :class:`~rpnmath.functions.registry.SymbolTable` for *config*.

    Raises:
        ConfigError: If ``domain`` names an unknown numeric domain.
    """
    from rpnmath.functions.registry import SymbolTable

    name = str(config.get("domain", DEFAULT_CONFIG["domain"]))
    try:
        domain = get_domain(name)
    except KeyError as exc:
        raise ConfigError(str(exc.args[0])) from None
    return SymbolTable(domain)


def write_default_config(project_dir: Path) -> Path:
    """Write a commented ``rpnmath.yaml`` into *project_dir* if absent."""
    path = Path(project_dir) / CONFIG_FILENAME
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(CONFIG_TEMPLATE)
    return path
