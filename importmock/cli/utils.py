"""
Shared utilities for CLI commands.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from importmock.core.config import ImportMockConfig, build_config, load_config, load_config_file

logger = logging.getLogger(__name__)


def load_cli_config(config_file: Optional[Path] = None) -> ImportMockConfig:
    """
    Load configuration for a CLI run.

    Args:
        config_file: Explicit ``--config`` path (must exist), or None to use
            the regular lookup

    Returns:
        Resolved configuration

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    if config_file is None:
        return load_config()
    return build_config(load_config_file(config_file, required=True))


def prepend_search_paths(paths: Optional[Iterable[Path]]) -> None:
    """
    Put directories at the front of ``sys.path`` so their modules resolve.

    Args:
        paths: Directories from ``--path`` options (None for none)
    """
    for path in reversed(list(paths or [])):
        path_str = str(Path(path).resolve())
        if path_str not in sys.path:
            sys.path.insert(0, path_str)
            logger.debug(f"Added {path_str} to sys.path")


__all__ = ["load_cli_config", "prepend_search_paths"]
