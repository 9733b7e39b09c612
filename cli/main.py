"""
Main CLI entry point for the Aruba invoice extractor.

This module provides the command-line interface with its global options and
registers the extraction and configuration commands.
"""

import logging
import sys

import click

from cli.commands import config_commands, extract_commands
from cli.context import CLIContext, pass_context
from cli.exceptions import CLIError
from cli.formatters import display_summary, format_json, setup_logging
from cli.version import get_version, get_version_info


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-essential output')
@click.option('--config-file', type=click.Path(exists=True, dir_okay=False),
              help='JSON configuration file')
@click.version_option(version=get_version(), prog_name="aruba-extractor")
@click.pass_context
def cli(ctx, verbose, quiet, config_file):
    """
    Aruba Invoice Extractor - CLI Tool

    Extracts product line items (identifier, description, quantity, weight,
    unit and total value, page) from Aruba shipping invoice PDFs.

    Examples:
        # Show the products of one invoice
        aruba-extractor extract "John Doe.pdf"

        # Export a whole shipment to CSV
        aruba-extractor batch ./invoices --format csv --output shipment.csv
    """
    cli_ctx = CLIContext()
    cli_ctx.verbose = verbose
    cli_ctx.quiet = quiet
    cli_ctx.config_file = config_file
    ctx.obj = cli_ctx

    setup_logging(verbose, quiet, cli_ctx.get_config().log_level)


cli.add_command(extract_commands.extract)
cli.add_command(extract_commands.batch)
cli.add_command(extract_commands.extract_text)
cli.add_command(extract_commands.parse_text)
cli.add_command(config_commands.config_group)


@cli.command()
@click.option('--format', '-f', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@pass_context
def version(ctx, output_format):
    """Show version information."""
    info = get_version_info()
    if output_format == 'json':
        click.echo(format_json(info))
    else:
        display_summary(f"Aruba Invoice Extractor {info['version']}", info)


def main():
    """Main entry point for the CLI application."""
    try:
        cli(standalone_mode=False)
    except CLIError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)
    except click.exceptions.Abort:
        click.echo("\nOperation cancelled by user.", err=True)
        sys.exit(1)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.", err=True)
        sys.exit(1)
    except Exception as e:
        logger = logging.getLogger(__name__)
        logger.exception("Unexpected error occurred")
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
