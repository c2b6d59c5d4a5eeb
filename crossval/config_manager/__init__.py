"""
Configuration Manager Module
============================

Responsibility:
- Loading and validation of JSON search configuration.
- Enforcement of schema constraints and logical bounds.
- Translation into search options, dispatcher and seeded random generator.
"""

from .config_manager import ConfigurationManager, CONFIG_SCHEMA, DEFAULT_CONFIG

__all__ = ['ConfigurationManager', 'CONFIG_SCHEMA', 'DEFAULT_CONFIG']
