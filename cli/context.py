"""
CLI Context module for the Aruba invoice extractor.

This module provides the shared context and decorators used across CLI commands,
preventing circular imports between cli.main and command modules.
"""

import click

from cli.config import ExtractorConfig, load_config


class CLIContext:
    """Context object to share state between CLI commands."""

    def __init__(self):
        self.verbose = False
        self.quiet = False
        self.config_file = None
        self._config = None

    def get_config(self) -> ExtractorConfig:
        """Get or load the extractor configuration."""
        if self._config is None:
            self._config = load_config(self.config_file)
        return self._config

    def resolve_output_format(self, output_format: str = None) -> str:
        """Explicit --format wins over the configured default."""
        return output_format or self.get_config().default_output_format


# Pass context between commands
pass_context = click.make_pass_decorator(CLIContext, ensure=True)
