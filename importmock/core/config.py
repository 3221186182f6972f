"""YAML/environment configuration for importmock.

Configuration is layered, later layers winning:

1. Built-in defaults
2. YAML file: ``$IMPORTMOCK_CONFIG`` if set, else ``.importmock.yaml`` in the
   current working directory (optional)
3. Environment variables: ``IMPORTMOCK_DEBUG``, ``IMPORTMOCK_COLOR``,
   ``IMPORTMOCK_STACK`` and ``NO_COLOR``

The shared interceptor used by ``mock_load`` reads the configuration once,
when it is first created; later changes to the file or the environment apply
to new processes.

Example ``.importmock.yaml``::

    debug: true
    color: never
    stack: false
"""

import functools
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from importmock.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "IMPORTMOCK_CONFIG"
DEFAULT_CONFIG_FILE = ".importmock.yaml"

COLOR_MODES = ("auto", "always", "never")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


@dataclass
class ImportMockConfig:
    """
    Runtime configuration.

    Attributes:
        debug: Emit a diagnostic trace for every intercepted import
        color: Colour mode for the trace ('auto', 'always', 'never')
        stack: Append the filtered call sites to each trace message
    """

    debug: bool = False
    color: str = "auto"
    stack: bool = True


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
    raise ConfigurationError(f"'{key}' must be a boolean, got {value!r}")


def _parse_color(value: Any, key: str) -> str:
    if isinstance(value, bool):
        return "always" if value else "never"
    if isinstance(value, str) and value.strip().lower() in COLOR_MODES:
        return value.strip().lower()
    raise ConfigurationError(
        f"'{key}' must be one of {', '.join(COLOR_MODES)}, got {value!r}"
    )


def load_config_file(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load the YAML configuration file.

    Args:
        config_file: Path to the YAML file
        required: If True, raise if the file doesn't exist

    Returns:
        Configuration mapping (empty if the file is absent and not required)

    Raises:
        ConfigurationError: If the file is required but missing, is not valid
            YAML, or is not a mapping
    """
    if not config_file.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration in {config_file} must be a mapping, got {type(data).__name__}"
        )
    return data


def build_config(
    data: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None
) -> ImportMockConfig:
    """
    Build a configuration from file data and environment variables.

    Args:
        data: Mapping loaded from the YAML file
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Fully resolved ImportMockConfig

    Raises:
        ConfigurationError: If a value has the wrong type or an unknown key is present
    """
    if environ is None:
        environ = os.environ

    unknown = set(data) - {"debug", "color", "stack"}
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration key(s): {', '.join(sorted(unknown))}"
        )

    config = ImportMockConfig()
    if "debug" in data:
        config.debug = _parse_bool(data["debug"], "debug")
    if "color" in data:
        config.color = _parse_color(data["color"], "color")
    if "stack" in data:
        config.stack = _parse_bool(data["stack"], "stack")

    # Any non-empty value other than an explicit "false" turns the trace on
    debug_env = environ.get("IMPORTMOCK_DEBUG")
    if debug_env is not None:
        config.debug = debug_env.strip().lower() not in _FALSY

    if "IMPORTMOCK_COLOR" in environ:
        config.color = _parse_color(environ["IMPORTMOCK_COLOR"], "IMPORTMOCK_COLOR")
    if "IMPORTMOCK_STACK" in environ:
        config.stack = _parse_bool(environ["IMPORTMOCK_STACK"], "IMPORTMOCK_STACK")

    # https://no-color.org: any non-empty value disables colour
    if environ.get("NO_COLOR"):
        config.color = "never"

    return config


def find_config_file(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Locate the configuration file (it may not exist)."""
    if environ is None:
        environ = os.environ
    explicit = environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit)
    return Path.cwd() / DEFAULT_CONFIG_FILE


@functools.lru_cache(maxsize=1)
def load_config() -> ImportMockConfig:
    """
    Load the process configuration (cached).

    Returns:
        ImportMockConfig built from defaults, the YAML file and the environment

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    config_file = find_config_file()
    required = bool(os.environ.get(CONFIG_ENV_VAR))
    data = load_config_file(config_file, required=required)
    return build_config(data)


def clear_config_cache() -> None:
    """Forget the cached configuration so the next load re-reads it."""
    load_config.cache_clear()


__all__ = [
    "ImportMockConfig",
    "COLOR_MODES",
    "load_config",
    "load_config_file",
    "build_config",
    "find_config_file",
    "clear_config_cache",
]
