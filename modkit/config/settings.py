"""
Container Settings Loader

Reads container configuration from the environment.

Load order:
    1. .env file (environment variables, via python-dotenv)
    2. Process environment overrides

Variables:
    MODKIT_DEBUG            Enable debug logging of the container (bool)
    MODKIT_LOG_LEVEL        DEBUG, INFO, WARNING, ERROR, CRITICAL
    MODKIT_LOG_FORMAT       text | json
    MODKIT_LOG_FILE         Optional log file path
    MODKIT_SCAN_PACKAGES    Comma-separated packages scanned for modules
    MODKIT_STRICT_SCAN      Fail discovery on import errors (bool)

Usage:
    from modkit.config import load_settings
    settings = load_settings()
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
LOG_FORMATS = ['text', 'json']

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


class ConfigurationError(ValueError):
    """Raised when a configuration value is invalid."""

    def __init__(self, key: str, value: str, reason: str):
        self.key = key
        self.value = value
        super().__init__(f"Invalid value for {key}={value!r}: {reason}")


@dataclass
class ContainerSettings:
    """Module container configuration."""
    debug: bool = False
    log_level: str = 'INFO'
    log_format: str = 'text'
    log_file: Optional[str] = None
    scan_packages: List[str] = field(default_factory=list)
    strict_scan: bool = False

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError('MODKIT_LOG_LEVEL', self.log_level, f"must be one of {LOG_LEVELS}")
        self.log_format = self.log_format.lower()
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError('MODKIT_LOG_FORMAT', self.log_format, f"must be one of {LOG_FORMATS}")
        # debug forces DEBUG level
        if self.debug:
            self.log_level = 'DEBUG'

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    def to_dict(self) -> Dict[str, object]:
        return {
            'debug': self.debug,
            'log_level': self.log_level,
            'log_format': self.log_format,
            'log_file': self.log_file,
            'scan_packages': list(self.scan_packages),
            'strict_scan': self.strict_scan,
        }


def _parse_bool(key: str, value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(key, value, "expected a boolean")


def _parse_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def load_settings(environ: Optional[Mapping[str, str]] = None, dotenv_path: Optional[str] = None) -> ContainerSettings:
    """Load settings from the environment.

    Args:
        environ: Mapping to read instead of os.environ (the .env file is not loaded then)
        dotenv_path: Explicit .env path (default: search from the working directory)

    Returns:
        Validated ContainerSettings
    """
    if environ is None:
        load_dotenv(dotenv_path)
        environ = os.environ

    settings = ContainerSettings(
        debug=_parse_bool('MODKIT_DEBUG', environ.get('MODKIT_DEBUG'), False),
        log_level=environ.get('MODKIT_LOG_LEVEL', 'INFO'),
        log_format=environ.get('MODKIT_LOG_FORMAT', 'text'),
        log_file=environ.get('MODKIT_LOG_FILE') or None,
        scan_packages=_parse_list(environ.get('MODKIT_SCAN_PACKAGES')),
        strict_scan=_parse_bool('MODKIT_STRICT_SCAN', environ.get('MODKIT_STRICT_SCAN'), False),
    )
    logger.debug(f"Loaded container settings: {settings.to_dict()}")
    return settings
