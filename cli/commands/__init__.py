"""
CLI command modules for the Aruba invoice extractor.

- extract_commands: Invoice extraction operations
- config_commands: Configuration display
"""

from . import (
    extract_commands,
    config_commands
)

__all__ = [
    'extract_commands',
    'config_commands'
]
