"""
Configuration package.
"""

from .settings import ConfigurationError, ContainerSettings, load_settings

__all__ = ['ConfigurationError', 'ContainerSettings', 'load_settings']
