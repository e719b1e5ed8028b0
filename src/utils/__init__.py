"""
Utility functions and classes for KosmoKorn.
"""

from .exceptions import ConfigurationError, InvalidInputError
from .config import Configuration, DEFAULT_CONFIGURATION
from .visualization import Visualizer

__all__ = ['Configuration', 'DEFAULT_CONFIGURATION', 'ConfigurationError',
           'InvalidInputError', 'Visualizer']
