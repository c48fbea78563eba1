"""
Configuration management for compgen.
"""
import copy
from typing import Any

from compgen.core.error_handling import ConfigurationError

_DEFAULTS = {
    'markdown': {
        'fence_languages': ('tsx', 'ts', 'jsx', 'js'),
        'fence_aware_split': False,
    },
    'synthesis': {
        'default_component_name': 'Component',
        'grammar': 'tsx',
    },
    'stream': {
        'suppress_duplicates': True,
    },
    'logging': {
        'level': 'WARNING',
    },
}


class Configuration:
    """Configuration manager for compgen."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Configuration, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize the configuration with defaults."""
        self._config = copy.deepcopy(_DEFAULTS)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        try:
            return self._config[section][key]
        except KeyError:
            return default

    def set(self, section: str, key: str, value: Any):
        """Set a configuration value."""
        if section == 'synthesis' and key == 'default_component_name':
            if not isinstance(value, str) or not value.isidentifier():
                raise ConfigurationError(f'{section}.{key}', value, 'must be a valid identifier')
        if section not in self._config:
            self._config[section] = {}
        self._config[section][key] = value

    def reset(self):
        """Restore every section to its default values."""
        self._initialize()

# Initialize configuration
config = Configuration()
