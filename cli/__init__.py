"""
modkit command line interface.
"""

from modkit import __version__

__all__ = ['__version__']
