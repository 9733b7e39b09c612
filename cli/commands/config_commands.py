"""
Configuration commands for the CLI interface.

This module implements configuration-related commands:
- show: Display the effective configuration and where each value came from
- options: List the available configuration keys
"""

import click

from cli.config import CONFIG_OPTIONS, ENV_PREFIX
from cli.context import pass_context
from cli.formatters import format_json


@click.group(name='config')
def config_group():
    """Configuration commands."""
    pass


@config_group.command()
@click.option('--format', '-f', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@pass_context
def show(ctx, output_format):
    """
    Show the effective configuration.

    Examples:
        aruba-extractor --config-file settings.json config show
    """
    config = ctx.get_config()

    if output_format == 'json':
        click.echo(format_json({
            key: {'value': value, 'source': config.sources.get(key, 'default')}
            for key, value in config.to_dict().items()
        }))
        return

    click.echo("\nEffective Configuration")
    click.echo("=" * 23)
    for key, value in config.to_dict().items():
        click.echo(f"  {key:24} {str(value):10} ({config.sources.get(key, 'default')})")


@config_group.command()
def options():
    """List available configuration keys and their environment variables."""
    for key, option in CONFIG_OPTIONS.items():
        click.echo(f"{key}")
        click.echo(f"  {option.description}")
        click.echo(f"  default: {option.default}  env: {ENV_PREFIX}{key.upper()}")
        if option.choices:
            click.echo(f"  choices: {', '.join(option.choices)}")
