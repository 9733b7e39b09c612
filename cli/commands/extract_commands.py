"""
Invoice extraction commands for the CLI interface.

This module implements the extraction commands:
- extract: Extract products from one or more invoice PDFs
- batch: Extract products from every PDF in a directory
- extract-text: Dump the flattened PDF text used by the parser
- parse-text: Run the product parser over an already extracted text file
"""

import io
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click

from cli.context import pass_context
from cli.exceptions import InputFileError, ProcessingError, ValidationError
from cli.formatters import (
    PRODUCT_CSV_HEADERS, display_summary, format_json, invoices_to_rows,
    print_error, print_info, print_success, print_warning, render_products_table, write_csv
)
from extraction.exceptions import PDFProcessingError
from extraction.integration import BatchResult, InvoiceBatchProcessor, find_pdf_files
from extraction.models import ExtractedInvoiceData
from extraction.pdf_processor import PDFProcessor, extract_consignee_name, extract_freight_charge
from extraction.product_extractor import derive_client_name, extract_products_from_text


logger = logging.getLogger(__name__)

FORMAT_OPTION = click.Choice(['table', 'json', 'csv'])


def _emit_invoices(invoices: List[ExtractedInvoiceData], output_format: str,
                   output: Optional[str]) -> None:
    """Write extraction results in the requested format."""
    if output_format == 'table':
        if output:
            raise ValidationError("Table output cannot be written to a file; use --format json or csv")
        if not invoices:
            print_info("No invoices to display.")
        for invoice in invoices:
            render_products_table(invoice)
        return

    if output_format == 'json':
        payload = format_json({
            'groups': [invoice.to_dict() for invoice in invoices],
            'totalGroups': len(invoices),
        })
        if output:
            Path(output).write_text(payload + "\n", encoding='utf-8')
        else:
            click.echo(payload)
    else:
        rows = invoices_to_rows(invoices)
        if output:
            write_csv(rows, output, headers=PRODUCT_CSV_HEADERS)
        else:
            buffer = io.StringIO()
            write_csv(rows, buffer, headers=PRODUCT_CSV_HEADERS)
            click.echo(buffer.getvalue(), nl=False)

    if output:
        print_success(f"Results written to: {output}")


def _report_failures(ctx, result: BatchResult) -> None:
    if not result.failures:
        return
    print_warning(f"{len(result.failures)} file(s) could not be processed")
    if ctx.get_config().show_failures:
        for file_path, error in result.failures:
            print_error(f"{file_path}: {error}")


@click.command(name='extract')
@click.argument('pdf_files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--format', '-f', 'output_format', type=FORMAT_OPTION,
              help='Output format (defaults to the configured format)')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write results to this file')
@pass_context
def extract(ctx, pdf_files, output_format, output):
    """
    Extract product line items from Aruba invoice PDFs.

    Each PDF is processed independently; a file that cannot be read does not
    stop the others.

    Examples:
        # Show products as a table
        aruba-extractor extract "John Doe.pdf"

        # Export several invoices as CSV
        aruba-extractor extract a.pdf b.pdf --format csv --output products.csv
    """
    output_format = ctx.resolve_output_format(output_format)
    logger.debug(f"Extracting {len(pdf_files)} file(s) as {output_format}")
    result = InvoiceBatchProcessor().process_files([Path(p) for p in pdf_files])

    if not result.invoices:
        _report_failures(ctx, result)
        raise ProcessingError("No invoices could be processed", result.failures)

    _emit_invoices(result.invoices, output_format, output)
    _report_failures(ctx, result)


@click.command(name='batch')
@click.argument('directory', type=click.Path(exists=True, file_okay=False))
@click.option('--format', '-f', 'output_format', type=FORMAT_OPTION,
              help='Output format (defaults to the configured format)')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write results to this file')
@pass_context
def batch(ctx, directory, output_format, output):
    """
    Extract products from every PDF invoice in a directory.

    Examples:
        aruba-extractor batch ./invoices --format json --output shipment.json
    """
    output_format = ctx.resolve_output_format(output_format)
    directory = Path(directory)
    pdf_files = find_pdf_files(directory)
    if not pdf_files:
        print_warning(f"No PDF files found in {directory}")
        return

    processor = InvoiceBatchProcessor()
    with click.progressbar(length=len(pdf_files), label='Processing invoices',
                           file=sys.stderr) as bar:
        def on_progress(progress):
            if progress.processed_files > bar.pos:
                bar.update(progress.processed_files - bar.pos)

        result = processor.process_files(pdf_files, progress_callback=on_progress)
        bar.update(len(pdf_files) - bar.pos)

    if result.invoices:
        _emit_invoices(result.invoices, output_format, output)
    _report_failures(ctx, result)

    if not ctx.quiet and (output or output_format == 'table'):
        display_summary("Batch Summary", result.get_summary())

    if not result.invoices:
        raise ProcessingError(f"No invoices in {directory} could be processed", result.failures)


@click.command(name='extract-text')
@click.argument('pdf_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(dir_okay=False), required=True,
              help='Output file for extracted text')
@pass_context
def extract_text(ctx, pdf_file, output):
    """
    Extract the flattened text of an invoice PDF.

    The same text is what the product parser reads, which makes this the
    first stop when an invoice yields fewer products than expected.
    """
    try:
        page_text = PDFProcessor().extract_text_with_page_mapping(Path(pdf_file))
    except PDFProcessingError as e:
        raise ProcessingError(str(e))

    Path(output).write_text(page_text.text, encoding='utf-8')
    print_success(f"Extracted text saved to: {output}")
    if not ctx.quiet:
        for offset, page_number in sorted(page_text.page_map.items()):
            print_info(f"Page {page_number} starts at offset {offset}")


@click.command(name='parse-text')
@click.argument('text_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--client-name', type=str, help='Client name (defaults to the file name)')
@click.option('--format', '-f', 'output_format', type=FORMAT_OPTION,
              help='Output format (defaults to the configured format)')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Write results to this file')
@pass_context
def parse_text(ctx, text_file, client_name, output_format, output):
    """
    Parse products from a text file produced by extract-text.

    The whole file is attributed to page 1.
    """
    output_format = ctx.resolve_output_format(output_format)
    try:
        text = Path(text_file).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(text_file, str(e))

    invoice = ExtractedInvoiceData(
        client_name=client_name or derive_client_name(Path(text_file).stem),
        products=extract_products_from_text(text, {0: 1}),
        consignee_name=extract_consignee_name(text),
        freight_charge=extract_freight_charge(text),
        source_path=str(text_file),
        page_count=1,
    )
    if not invoice.products:
        print_warning(f"No products found in {text_file}")
    _emit_invoices([invoice], output_format, output)
