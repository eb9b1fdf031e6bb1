"""Handles loading configuration from YAML files."""

import yaml
import os
import logging
from typing import Optional
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SUBTRACK_CONFIG"

DEFAULT_CONFIG = {
    'public_dir': 'public',
    'upload_dir': os.path.join('public', 'uploads', 'subtitles'),
    'upload_base_url': '/uploads/subtitles',
    'fetch_timeout': 10.0,
    'cache_max_age': 3600,
    'log_dir': 'logs',
    'log_file': 'subtrack.log',
    'host': '127.0.0.1',
    'port': 8000,
}

class ConfigLoader:
    """Loads configuration settings from a YAML file."""

    def load_config(self, config_path: str) -> dict:
        """
        Loads configuration from the specified YAML file path.

        Args:
            config_path: The path to the YAML configuration file.

        Returns:
            A dictionary containing the loaded configuration settings.

        Raises:
            FileNotFoundError: If the configuration file does not exist.
            ConfigurationError: If the file cannot be parsed as YAML or
                              if there are other reading errors.
        """
        logger.info(f"Attempting to load configuration from: {config_path}")
        if not os.path.exists(config_path):
            logger.error(f"Configuration file not found at path: {config_path}")
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        if not os.path.isfile(config_path):
             logger.error(f"Configuration path is not a file: {config_path}")
             raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Invalid YAML format in {config_path}: {e}") from e
        except IOError as e:
            logger.error(f"Error reading configuration file {config_path}: {e}", exc_info=True)
            raise ConfigurationError(f"Could not read configuration file {config_path}: {e}") from e

        if config is None:
            # An empty file is a valid, if useless, configuration
            config = {}
        if not isinstance(config, dict):
            logger.error(f"Configuration file {config_path} did not load as a dictionary (root object).")
            raise ConfigurationError(f"Invalid YAML structure in {config_path}. Root must be a mapping (dictionary).")
        logger.info(f"Configuration loaded successfully from {config_path}")
        return config


def load_settings(config_path: Optional[str] = None) -> dict:
    """
    Returns DEFAULT_CONFIG overlaid with the YAML file, if one is given.

    When no path is passed, the SUBTRACK_CONFIG environment variable is
    consulted; with neither, the defaults are returned as is.

    Raises:
        FileNotFoundError: If an explicitly named file does not exist.
        ConfigurationError: If the file is not a valid YAML mapping.
    """
    settings = dict(DEFAULT_CONFIG)
    config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if config_path:
        settings.update(ConfigLoader().load_config(config_path))
    return settings
