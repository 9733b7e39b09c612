"""
Output helpers for aruba-extractor: logging setup, JSON and CSV writers,
the rich products table and the coloured status lines.

Status lines (warnings, errors) go to stderr so JSON or CSV written to stdout
stays machine readable.
"""

import csv
import json
import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Union

import click
from rich.console import Console
from rich.table import Table

from extraction.models import ExtractedInvoiceData


PRODUCT_CSV_HEADERS = [
    'clientName', 'identifier', 'description', 'quantity',
    'totalNetWeight', 'unitValue', 'totalUnitValue', 'pageNumber'
]


def setup_logging(verbose: bool = False, quiet: bool = False, level: str = 'INFO') -> None:
    """
    Setup logging configuration for the CLI application.

    Args:
        verbose: Enable verbose (DEBUG) logging
        quiet: Suppress non-essential output (WARNING+ only)
        level: Log level name used when neither flag is set
    """
    if quiet:
        log_level = logging.WARNING
    elif verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        force=True
    )

    # pdfminer is very chatty at DEBUG level
    if not verbose:
        logging.getLogger('pdfminer').setLevel(logging.WARNING)


def format_currency(amount: Union[Decimal, float, int, None]) -> str:
    """USD amount with two decimals, "N/A" when missing."""
    if amount is None:
        return "N/A"
    return f"${float(amount):.2f}"


def truncate_text(text: Optional[str], max_length: int = 50) -> str:
    """Shorten long descriptions for table cells."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def format_json(data: Any, indent: int = 2) -> str:
    """
    Serialize to JSON; Decimals become floats, datetimes ISO strings, and
    objects with ``to_dict`` are expanded.
    """
    def json_serializer(obj):
        if isinstance(obj, Decimal):
            return float(obj)
        elif isinstance(obj, datetime):
            return obj.isoformat()
        elif hasattr(obj, 'to_dict'):
            return obj.to_dict()
        raise TypeError(f"Object of type {type(obj)} is not JSON serializable")

    return json.dumps(data, indent=indent, default=json_serializer, ensure_ascii=False)


def invoices_to_rows(invoices: List[ExtractedInvoiceData]) -> List[Dict[str, Any]]:
    """Flatten invoices into one row per product, tagged with the client name."""
    rows = []
    for invoice in invoices:
        for product in invoice.products:
            rows.append({
                'clientName': invoice.client_name,
                'identifier': product.identifier,
                'description': product.description,
                'quantity': product.quantity,
                'totalNetWeight': product.total_net_weight,
                'unitValue': product.unit_value,
                'totalUnitValue': product.total_unit_value,
                'pageNumber': product.page_number,
            })
    return rows


def write_csv(data: List[Dict[str, Any]], output_file: Union[str, Path, TextIO],
              headers: Optional[List[str]] = None) -> None:
    """
    Write rows to a CSV file or file object.

    Args:
        data: List of dictionaries containing row data
        output_file: Output file path or file object
        headers: Optional list of column headers
    """
    if headers is None:
        headers = list(data[0].keys()) if data else []

    if isinstance(output_file, (str, Path)):
        with open(output_file, 'w', newline='', encoding='utf-8') as f:
            _write_csv_to_file(data, f, headers)
    else:
        _write_csv_to_file(data, output_file, headers)


def _write_csv_to_file(data: List[Dict[str, Any]], file_obj: TextIO, headers: List[str]) -> None:
    writer = csv.DictWriter(file_obj, fieldnames=headers, lineterminator='\n')
    writer.writeheader()

    for row in data:
        csv_row = {}
        for header in headers:
            value = row.get(header)
            if isinstance(value, Decimal):
                csv_row[header] = f"{value:.2f}"
            elif value is None:
                csv_row[header] = ""
            else:
                csv_row[header] = value
        writer.writerow(csv_row)


def render_products_table(invoice: ExtractedInvoiceData, console: Optional[Console] = None) -> None:
    """
    Print an invoice's products as a rich table.

    Args:
        invoice: Extraction result to display
        console: Optional rich console (a new one is created if omitted)
    """
    console = console or Console()
    title = f"{invoice.client_name} ({len(invoice.products)} products)"
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Page", justify="right")
    table.add_column("Identifier", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Qty", justify="right")
    table.add_column("Net Weight", justify="right")
    table.add_column("Unit Value", justify="right")
    table.add_column("Total Value", justify="right", style="green")

    for product in invoice.products:
        table.add_row(
            str(product.page_number),
            product.identifier,
            truncate_text(product.description, 60),
            str(product.quantity),
            f"{product.total_net_weight:.2f}",
            format_currency(product.unit_value),
            format_currency(product.total_unit_value),
        )

    console.print(table)

    details = [f"Total value: {format_currency(invoice.get_total_value())}"]
    if invoice.consignee_name:
        details.append(f"Consignee: {invoice.consignee_name}")
    if invoice.freight_charge is not None:
        details.append(f"Freight charge: {format_currency(invoice.freight_charge)}")
    console.print("  ".join(details))


def print_success(message: str) -> None:
    click.echo(click.style(f"✓ {message}", fg='green'))


def print_warning(message: str) -> None:
    """Yellow warning on stderr."""
    click.echo(click.style(f"⚠ Warning: {message}", fg='yellow'), err=True)


def print_error(message: str) -> None:
    """Red error line on stderr."""
    click.echo(click.style(f"✗ Error: {message}", fg='red'), err=True)


def print_info(message: str) -> None:
    click.echo(click.style(f"ℹ {message}", fg='blue'))


def display_summary(title: str, stats: Dict[str, Any]) -> None:
    """
    Print an underlined title followed by one "Key: value" line per entry.

    Args:
        title: Summary title
        stats: snake_case keys are shown title-cased
    """
    click.echo(f"\n{title}")
    click.echo("=" * len(title))

    for key, value in stats.items():
        formatted_key = key.replace('_', ' ').title()
        if isinstance(value, bool):
            formatted_value = "Yes" if value else "No"
        else:
            formatted_value = str(value)
        click.echo(f"  {formatted_key}: {formatted_value}")
