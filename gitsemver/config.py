"""Locate and load the gitsemver configuration file."""

import logging
import os
import platform
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from gitsemver.model.configuration import Configuration
from gitsemver.versioning.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

APP_NAME = "gitsemver"

CONFIG_FILE_NAMES = ("gitsemver.yml", "gitsemver.yaml", "GitVersion.yml")

_home = os.path.expanduser("~")


def get_user_config_dir() -> Path:
    """Directory for the per-user configuration file."""
    if platform.system() == "Darwin":
        return Path("~/Library/Application Support").expanduser() / APP_NAME
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(
        _home, ".config"
    )
    return Path(xdg_config_home) / APP_NAME


def find_config_file(repo_root: Optional[Path] = None) -> Optional[Path]:
    """
    Find the configuration file that applies to a repository.

    The repository root is searched first, then the user configuration
    directory.

    Args:
        repo_root: Working tree root of the repository

    Returns:
        Path to the configuration file, or None if there is none
    """
    search_dirs = []
    if repo_root is not None:
        search_dirs.append(Path(repo_root))
    search_dirs.append(get_user_config_dir())

    for directory in search_dirs:
        for name in CONFIG_FILE_NAMES:
            candidate = directory / name
            if candidate.is_file():
                logger.debug(f"Using configuration file {candidate}")
                return candidate
    return None


def _format_validation_error(error: PydanticValidationError) -> str:
    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        message = detail.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def parse_configuration(text: str, path: Optional[str] = None) -> Configuration:
    """
    Parse configuration YAML text.

    An empty document yields the default configuration.

    Raises:
        ConfigurationError: On YAML syntax errors or invalid values
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"YAML syntax error: {e}", path) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("top level must be a mapping", path)

    try:
        return Configuration.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(_format_validation_error(e), path) from e


def load_configuration(
    path: Optional[Union[str, Path]] = None,
    repo_root: Optional[Union[str, Path]] = None,
) -> Configuration:
    """
    Load the configuration from ``path`` or the first file found for ``repo_root``.

    Without any configuration file the defaults apply.

    Raises:
        ConfigurationError: If an explicit path does not exist or the file is invalid
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigurationError("file does not exist", str(config_path))
    else:
        config_path = find_config_file(Path(repo_root) if repo_root else None)
        if config_path is None:
            logger.debug("No configuration file found, using defaults")
            return Configuration()

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"cannot read file: {e}", str(config_path)) from e

    return parse_configuration(text, str(config_path))


def dump_configuration(configuration: Configuration) -> str:
    """Render a configuration as YAML with kebab-case keys."""
    return yaml.safe_dump(configuration.to_yaml_dict(), sort_keys=False)
