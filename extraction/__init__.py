"""
Invoice extraction package for Aruba shipping invoices.

This package turns the text layer of an Aruba invoice PDF into structured
product records: table location, line classification, numeric decomposition
of the run-together data columns and page attribution.
"""

from .models import ExtractedProduct, ExtractedInvoiceData, ProductAccumulator, PageMap
from .exceptions import PDFProcessingError, PDFReadabilityError, TextExtractionError
from .table_locator import TableLine, TableRegion, locate_table
from .numeric_decomposition import NumericFields, decompose_numbers
from .page_resolver import resolve_page_number
from .line_classifier import ParserMode, ParserState, step, finish
from .product_extractor import ProductExtractor, extract_products_from_text, derive_client_name
from .pdf_processor import PDFProcessor, extract_invoice_data
from .integration import InvoiceBatchProcessor, BatchResult, BatchProgress

__all__ = [
    'ExtractedProduct',
    'ExtractedInvoiceData',
    'ProductAccumulator',
    'PageMap',
    'PDFProcessingError',
    'PDFReadabilityError',
    'TextExtractionError',
    'TableLine',
    'TableRegion',
    'locate_table',
    'NumericFields',
    'decompose_numbers',
    'resolve_page_number',
    'ParserMode',
    'ParserState',
    'step',
    'finish',
    'ProductExtractor',
    'extract_products_from_text',
    'derive_client_name',
    'PDFProcessor',
    'extract_invoice_data',
    'InvoiceBatchProcessor',
    'BatchResult',
    'BatchProgress',
]
