"""
Configuration management for NewsLive.
"""
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

# Configure logging
logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

ENV_PREFIX = 'NEWSLIVE_'

# Default configuration
DEFAULT_CONFIG = {
    "api": {
        "base_url": "https://newsapi.org/v2/",
        "key": None,
        "timeout_seconds": 30,
        "default_country": "us"
    },
    "store": {
        "path": "cache/newslive.db"
    },
    "preferences": {
        "path": "preferences.yaml"
    }
}


class Config:
    """
    Configuration manager for NewsLive.
    """
    def __init__(self, config_path: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        """
        Initialize the Config.

        Args:
            config_path: Path to a YAML or JSON configuration file
            environ: Environment mapping to read overrides from (defaults to os.environ)
        """
        self.config_path = config_path
        self.environ = os.environ if environ is None else environ
        self.config = self._load_config()

    def _load_config(self) -> Dict:
        """
        Load configuration from file or use defaults.

        Returns:
            Configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path:
            try:
                user_config = load_mapping(Path(self.config_path))
                if user_config:
                    self._update_dict(config, user_config)
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.error(f"Error loading config from {self.config_path}: {e}")
                logger.warning("Using default configuration")

        # Override with environment variables
        self._override_from_env(config)

        return config

    def _update_dict(self, target: Dict, source: Dict) -> None:
        """
        Recursively update a dictionary.

        Args:
            target: Target dictionary to update
            source: Source dictionary with new values
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict):
                if isinstance(value, dict):
                    self._update_dict(target[key], value)
                else:
                    logger.warning(f"Ignoring config section '{key}': expected a mapping, got {value!r}")
            else:
                target[key] = value

    def _override_from_env(self, config: Dict, prefix: str = ENV_PREFIX) -> None:
        """
        Override configuration with environment variables.

        Nesting levels are separated by a double underscore, so
        NEWSLIVE_API__BASE_URL sets ``api.base_url``.

        Args:
            config: Configuration dictionary to update
            prefix: Prefix for environment variables
        """
        if self.environ.get('NEWSAPI_KEY'):
            config['api']['key'] = self.environ['NEWSAPI_KEY']

        for key, value in self.environ.items():
            if not key.startswith(prefix) or key == f'{prefix}CONFIG_PATH':
                continue

            parts = key[len(prefix):].lower().split('__')

            # Navigate to the right place in the config
            current = config
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]

            try:
                # Try to parse as JSON
                current[parts[-1]] = json.loads(value)
            except json.JSONDecodeError:
                # If not valid JSON, use as string
                current[parts[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-separated key path (e.g., 'api.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        current = self.config

        for part in key.split('.'):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current


def load_mapping(path: Path) -> Optional[Dict]:
    """
    Read a YAML or JSON file into a dictionary.

    Args:
        path: File to read

    Returns:
        The decoded mapping, or None if the file does not exist
    """
    if not path.exists():
        return None

    suffix = path.suffix.lower()
    with open(path, 'r', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        elif suffix == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def dump_mapping(path: Path, data: Dict) -> None:
    """
    Write a dictionary to a YAML or JSON file, chosen by suffix.

    Args:
        path: File to write
        data: Mapping to serialize
    """
    suffix = path.suffix.lower()
    if suffix not in ['.yaml', '.yml', '.json']:
        raise ValueError(f"Unsupported config file format: {path.suffix}")

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        if suffix == '.json':
            json.dump(data, f, indent=2)
        else:
            yaml.dump(data, f, default_flow_style=False)
