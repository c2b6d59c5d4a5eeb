"""
Logging Configuration
=====================

Responsibility:
- Console logging (optionally coloured) and rotating UTF-8 file logging
  for the library's logger hierarchy.
"""

from .logging_config import LoggingConfigurator, ColoredFormatter

__all__ = ['LoggingConfigurator', 'ColoredFormatter']
