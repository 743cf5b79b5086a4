import logging
from pathlib import Path

import platformdirs
import yaml

from ..constants import CONFIG_FILE_NAME, PROGRAM_NAME
from ..exceptions import ConfigurationError
from ..models.config import NprocSettings

__all__ = [
    "default_config_files",
    "load_settings",
    "merge_config_dicts",
    "read_and_merge_config_files",
    "site_config_path",
    "user_config_path",
]

log = logging.getLogger(__name__)


def merge_config_dicts(a: dict, b: dict) -> dict:
    """Merge two flat configuration dictionaries.

    Keys from ``b`` replace those in ``a``, except where the value in ``b`` is ``None``.

    :param a: The lower-priority dictionary.
    :param b: The higher-priority dictionary.
    :return: A new merged dictionary; neither input is modified.
    """
    overrides = {key: value for key, value in b.items() if value is not None}
    for key in overrides.keys() & a.keys():
        log.debug(f"Overriding configuration key {key} with value: {overrides[key]}")
    return {**a, **overrides}


def read_and_merge_config_files(config_files: list[Path]) -> dict:
    """
    Read and merge multiple configuration files in YAML format.

    Later files take precedence over earlier ones. Empty files are skipped.

    :param config_files: Paths of the YAML files, lowest priority first.
    :return: Merged configuration dictionary.
    :raises ConfigurationError: If any of the files cannot be read or merged.
    """
    configuration: dict[str, object] = {}
    for curr_config_file in config_files:
        try:
            with open(curr_config_file) as fd:
                curr_config = yaml.safe_load(fd) or {}
            if not isinstance(curr_config, dict):
                raise ValueError(f"expected a mapping, got {type(curr_config).__name__}")

            configuration = merge_config_dicts(configuration, curr_config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Error reading configuration file: '{curr_config_file}'") from e

    return configuration


def site_config_path() -> Path:
    return Path(platformdirs.site_config_dir(PROGRAM_NAME)) / CONFIG_FILE_NAME


def user_config_path() -> Path:
    return Path(platformdirs.user_config_dir(PROGRAM_NAME)) / CONFIG_FILE_NAME


def default_config_files() -> list[Path]:
    """Site-wide and per-user config files that exist, lowest priority first."""
    return [path for path in (site_config_path(), user_config_path()) if path.is_file()]


def load_settings(config_files: list[Path] | None = None) -> NprocSettings:
    """
    Build the settings from config files and ``NPROC_*`` environment variables.

    :param config_files: Files to read; defaults to the existing site and user config files.
    """
    if config_files is None:
        config_files = default_config_files()
    log.debug(f"Configuration files to load: {[str(p) for p in config_files]}")

    return NprocSettings(**read_and_merge_config_files(config_files))
