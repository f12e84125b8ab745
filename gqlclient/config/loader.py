"""
Configuration loader for gqlclient.

A configuration is built from at most one file (YAML or JSON) overlaid with
``GQLCLIENT_*`` environment variables.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import yaml

from .models import GlobalConfig

PathLike = Union[str, Path]

_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}

# variable suffix -> (section, field)
ENV_FIELDS: Dict[str, Tuple[str, str]] = {
    "ENDPOINT": ("client", "endpoint"),
    "TIMEOUT": ("client", "timeout"),
    "CONNECT_TIMEOUT": ("client", "connect_timeout"),
    "MAX_CONNECTIONS": ("client", "max_connections"),
    "VERIFY_SSL": ("client", "verify_ssl"),
    "USER_AGENT": ("client", "user_agent"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FILE": ("logging", "file_path"),
    "LOG_FORMAT": ("logging", "format"),
    "LOG_STRUCTURED": ("logging", "enable_structured"),
}


def default_search_paths() -> List[Path]:
    """Files tried, in order, when no config file is named explicitly."""
    local = [Path(f"gqlclient{suffix}") for suffix in (".yaml", ".yml", ".json")]
    user_dir = Path.home() / ".gqlclient"
    return local + [user_dir / f"config{suffix}" for suffix in (".yaml", ".yml", ".json")]


def coerce_env_value(value: str) -> Any:
    """Turn an environment string into a bool, int or float where it looks like one."""
    flag = value.strip().lower()
    if flag in ("true", "yes", "on"):
        return True
    if flag in ("false", "no", "off"):
        return False

    for number in (int, float):
        try:
            return number(value)
        except ValueError:
            continue
    return value


def merge_sections(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` updated with ``overlay``, merging nested mappings key by key."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_sections(current, value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Builds a :class:`GlobalConfig` from a file and the environment."""

    def __init__(
        self,
        env_prefix: str = "GQLCLIENT_",
        search_paths: Optional[List[Path]] = None,
    ) -> None:
        self.env_prefix = env_prefix
        self.search_paths = search_paths if search_paths is not None else default_search_paths()

    def load_config(self, config_file: Optional[PathLike] = None) -> GlobalConfig:
        """
        Load configuration from all available sources.

        Environment variables override values read from the file.

        Args:
            config_file: File to read instead of searching the default locations

        Returns:
            GlobalConfig instance with merged configuration

        Raises:
            ValueError: If the config file is missing, unreadable or invalid
        """
        data = self.read_file(config_file)
        data = merge_sections(data, self.read_environment())
        return GlobalConfig(**data)

    def read_file(self, config_file: Optional[PathLike] = None) -> Dict[str, Any]:
        """Read the named file, or the first existing default one, as a mapping."""
        if config_file:
            path = Path(config_file)
            if not path.exists():
                raise ValueError(f"Config file not found: {path}")
            return self._parse(path)

        found = next((path for path in self.search_paths if path.exists()), None)
        return self._parse(found) if found is not None else {}

    def _parse(self, path: Path) -> Dict[str, Any]:
        parser = _PARSERS.get(path.suffix.lower())
        if parser is None:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        try:
            data = parser(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ValueError(f"Failed to parse config file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    def read_environment(self) -> Dict[str, Any]:
        """Collect ``<prefix><SUFFIX>`` variables into config sections."""
        sections: Dict[str, Dict[str, Any]] = {}
        for suffix, (section, field) in ENV_FIELDS.items():
            raw = os.environ.get(self.env_prefix + suffix)
            if raw is not None:
                sections.setdefault(section, {})[field] = coerce_env_value(raw)
        return sections


def load_config(config_file: Optional[PathLike] = None) -> GlobalConfig:
    """Load configuration with the default loader."""
    return ConfigLoader().load_config(config_file)
