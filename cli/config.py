"""
Configuration for the Aruba invoice extractor CLI.

Settings come from three layers, later layers winning:
built-in defaults, an optional JSON config file, and environment variables
named ``ARUBA_EXTRACTOR_<KEY>`` (e.g. ``ARUBA_EXTRACTOR_LOG_LEVEL``).
"""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from cli.exceptions import ConfigurationError


ENV_PREFIX = 'ARUBA_EXTRACTOR_'
CONFIG_FILE_ENV = f'{ENV_PREFIX}CONFIG'

OUTPUT_FORMATS = ('table', 'json', 'csv')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


@dataclass(frozen=True)
class ConfigOption:
    """Definition of one configuration key."""
    key: str
    default: Any
    data_type: str
    description: str
    choices: Tuple[str, ...] = ()

    def convert(self, value: Any) -> Any:
        """
        Convert a raw value to this option's type.

        Raises:
            ConfigurationError: If the value cannot be converted or is not allowed
        """
        if self.data_type == 'boolean':
            if isinstance(value, bool):
                return value
            text = str(value).strip().lower()
            if text in ('true', '1', 'yes', 'on'):
                return True
            if text in ('false', '0', 'no', 'off'):
                return False
            raise ConfigurationError(f"Cannot convert '{value}' to boolean for {self.key}")

        text = str(value).strip()
        if self.key == 'log_level':
            text = text.upper()
        elif self.choices:
            text = text.lower()
        if self.choices and text not in self.choices:
            raise ConfigurationError(
                f"Invalid value '{value}' for {self.key}; expected one of: {', '.join(self.choices)}"
            )
        return text


CONFIG_OPTIONS: Dict[str, ConfigOption] = {
    'default_output_format': ConfigOption(
        key='default_output_format',
        default='table',
        data_type='string',
        description='Output format used when --format is not given',
        choices=OUTPUT_FORMATS
    ),
    'log_level': ConfigOption(
        key='log_level',
        default='INFO',
        data_type='string',
        description='Log level when neither --verbose nor --quiet is given',
        choices=LOG_LEVELS
    ),
    'show_failures': ConfigOption(
        key='show_failures',
        default=True,
        data_type='boolean',
        description='List files that could not be processed after a batch run'
    ),
}


@dataclass
class ExtractorConfig:
    """Resolved configuration values and where each one came from."""
    default_output_format: str = 'table'
    log_level: str = 'INFO'
    show_failures: bool = True
    sources: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Configuration values keyed by option name."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name in CONFIG_OPTIONS}


def _read_config_file(config_file: Path) -> Dict[str, Any]:
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {config_file}: {e}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {config_file} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_file} must contain a JSON object")

    unknown = sorted(set(data) - set(CONFIG_OPTIONS))
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys in {config_file}: {', '.join(unknown)}")
    return data


def load_config(config_file: Optional[Union[str, Path]] = None,
                environ: Optional[Mapping[str, str]] = None) -> ExtractorConfig:
    """
    Load configuration from defaults, config file and environment.

    Args:
        config_file: Optional JSON config file; falls back to ARUBA_EXTRACTOR_CONFIG
        environ: Environment mapping, defaults to os.environ

    Returns:
        ExtractorConfig with typed values

    Raises:
        ConfigurationError: If the file or any value is invalid
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {key: option.default for key, option in CONFIG_OPTIONS.items()}
    sources = {key: 'default' for key in CONFIG_OPTIONS}

    config_file = config_file or environ.get(CONFIG_FILE_ENV)
    if config_file:
        for key, value in _read_config_file(Path(config_file)).items():
            values[key] = CONFIG_OPTIONS[key].convert(value)
            sources[key] = str(config_file)

    for key, option in CONFIG_OPTIONS.items():
        env_name = f'{ENV_PREFIX}{key.upper()}'
        if env_name in environ:
            values[key] = option.convert(environ[env_name])
            sources[key] = env_name

    return ExtractorConfig(sources=sources, **values)
