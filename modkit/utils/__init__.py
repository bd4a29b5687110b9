"""
Utility package.
"""

from .log_utils import JSONFormatter, get_logger, setup_logging

__all__ = ['JSONFormatter', 'get_logger', 'setup_logging']
