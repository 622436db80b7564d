# tcprobe/configuration.py

"""
Configuration loader for tcprobe.

Defaults can be overridden from a YAML file named by --config or the
TCPROBE_CONFIG environment variable. Without either, the built-in
defaults are used. The file is only ever read.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TCPROBE_CONFIG"

# Defaults used when neither the command line nor the config file sets a value.
DEFAULT_CONFIG: Dict[str, Any] = {
    'count': 4,
    'interval_seconds': 1.0,
    'timeout_seconds': 2.0,
    'port': '80',
    'ip_family': 'any',        # Options: any, ipv4, ipv6
    'log_level': 'WARNING',
}

_EXPECTED_TYPES = {
    'count': (int,),
    'interval_seconds': (int, float),
    'timeout_seconds': (int, float),
    'port': (str, int),
    'ip_family': (str,),
    'log_level': (str,),
}


def get_config_path(explicit_path: Optional[str] = None) -> Optional[str]:
    """Returns the config file to read, or None when no file was requested."""
    return explicit_path or os.environ.get(CONFIG_ENV_VAR) or None


def _validate(user_config: Dict[str, Any], config_path: str) -> Dict[str, Any]:
    validated = {}
    for key, value in user_config.items():
        if key not in DEFAULT_CONFIG:
            logger.warning("Ignoring unknown setting '%s' in '%s'", key, config_path)
            continue
        if isinstance(value, bool) or not isinstance(value, _EXPECTED_TYPES[key]):
            raise ConfigurationError(f"Invalid value for '{key}' in '{config_path}': {value!r}")
        validated[key] = str(value) if key == 'port' else value
    return validated


def load_config(explicit_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads configuration, merging the optional YAML file over the defaults.

    Raises ConfigurationError if a requested file is missing or invalid.
    """
    config = DEFAULT_CONFIG.copy()
    config_path = get_config_path(explicit_path)
    if config_path is None:
        return config

    try:
        with open(config_path, 'r') as f:
            user_config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file '{config_path}' not found")
    except IOError as e:
        raise ConfigurationError(f"Could not read configuration file '{config_path}': {e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing '{config_path}': {e}")

    if user_config is None:
        logger.info("Configuration file '%s' is empty, using defaults", config_path)
        return config
    if not isinstance(user_config, dict):
        raise ConfigurationError(f"'{config_path}' must contain a mapping of settings")

    config.update(_validate(user_config, config_path))
    logger.info("Loaded configuration from %s", config_path)
    return config
