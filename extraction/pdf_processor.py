"""
PDF processing for Aruba invoices.

This module provides the PDFProcessor class that reads an invoice PDF with
pdfplumber, flattens its text while recording where each page starts, and
runs the product parser plus the header lookups (consignee, freight charge)
over the result.
"""

import io
import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional, Union

import pdfplumber

from .exceptions import PDFProcessingError, PDFReadabilityError, TextExtractionError
from .models import ExtractedInvoiceData, PageMap
from .product_extractor import ProductExtractor, derive_client_name


logger = logging.getLogger(__name__)

PDFSource = Union[str, Path, bytes]

CONSIGNEE_PATTERN = re.compile(r'CONSIGNEE\s+([^\n]+)', re.IGNORECASE)
FREIGHT_CHARGE_PATTERN = re.compile(r'FREIGHT\s+CHARGE\s+([\d.]+)', re.IGNORECASE)


@dataclass
class PageText:
    """
    Flattened PDF text with page boundaries.

    Attributes:
        text: Text of all pages joined by newlines
        page_map: Offset where each page's text starts -> 1-based page number
        page_count: Number of pages in the PDF
    """
    text: str
    page_map: PageMap = field(default_factory=dict)
    page_count: int = 0


def extract_consignee_name(text: str) -> Optional[str]:
    """
    Extract the consignee name printed after the CONSIGNEE heading.

    Args:
        text: Complete flattened document text

    Returns:
        Consignee name, or None if the heading is absent
    """
    match = CONSIGNEE_PATTERN.search(text)
    if not match:
        logger.warning("Could not extract consignee name")
        return None
    name = match.group(1).strip()
    logger.info(f"Found consignee name: {name}")
    return name


def extract_freight_charge(text: str) -> Optional[Decimal]:
    """
    Extract the freight charge amount.

    Args:
        text: Complete flattened document text

    Returns:
        Freight charge, or None if absent or not a number
    """
    match = FREIGHT_CHARGE_PATTERN.search(text)
    if not match:
        logger.warning("Could not extract freight charge")
        return None
    try:
        charge = Decimal(match.group(1))
    except InvalidOperation:
        logger.warning(f"Freight charge is not a number: {match.group(1)}")
        return None
    logger.info(f"Found freight charge: {charge}")
    return charge


class PDFProcessor:
    """
    Reads Aruba invoice PDFs and extracts their structured data.

    The workflow is:
    - open the PDF with pdfplumber (path or in-memory bytes)
    - flatten the page texts and record each page's start offset
    - extract products from the product table
    - look up consignee name and freight charge
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 product_extractor: Optional[ProductExtractor] = None):
        """
        Initialize PDFProcessor.

        Args:
            logger: Optional logger instance. Defaults to the module logger.
            product_extractor: Optional extractor, e.g. with custom strategies
        """
        self.logger = logger or logging.getLogger(__name__)
        self.product_extractor = product_extractor or ProductExtractor(logger=self.logger)

    def extract_invoice_data(self, source: PDFSource,
                             file_name: Optional[str] = None) -> ExtractedInvoiceData:
        """
        Process a PDF invoice and extract structured data.

        An invoice without a recognizable product table yields zero products;
        that is not an error.

        Args:
            source: Path to the PDF or its raw bytes
            file_name: Original file name used for the client name. Required
                for bytes input; defaults to the path's name otherwise.

        Returns:
            ExtractedInvoiceData for the invoice

        Raises:
            PDFReadabilityError: If the PDF cannot be found or opened
            TextExtractionError: If the PDF yields no usable text
        """
        source_path = None if isinstance(source, bytes) else str(source)
        if file_name is None:
            if source_path is None:
                raise ValueError("file_name is required when source is bytes")
            file_name = Path(source_path).name

        client_name = derive_client_name(file_name)
        self.logger.info(f"Starting PDF processing for: {client_name}")

        page_text = self.extract_text_with_page_mapping(source)
        products = self.product_extractor.extract(page_text.text, page_text.page_map)

        invoice_data = ExtractedInvoiceData(
            client_name=client_name,
            products=products,
            consignee_name=extract_consignee_name(page_text.text),
            freight_charge=extract_freight_charge(page_text.text),
            source_path=source_path,
            page_count=page_text.page_count,
        )
        invoice_data.add_processing_note(
            f"Extracted {len(products)} products from {page_text.page_count} pages"
        )
        if not products:
            invoice_data.add_processing_note("No products found in product table")

        self.logger.info(f"Extracted {len(products)} products from {client_name}")
        return invoice_data

    def extract_text_with_page_mapping(self, source: PDFSource) -> PageText:
        """
        Extract the text of every page and map page start offsets.

        Every page gets a page-map entry at the current end of the text;
        pages without text contribute no characters.

        Args:
            source: Path to the PDF or its raw bytes

        Returns:
            PageText with the flattened text and page map

        Raises:
            PDFReadabilityError: If the PDF cannot be found or opened
            TextExtractionError: If no page yields any text
        """
        pdf_path = None if isinstance(source, bytes) else str(source)
        if pdf_path is not None:
            path = Path(pdf_path)
            if not path.exists():
                raise PDFReadabilityError(f"PDF file not found: {path}", pdf_path=pdf_path)
            if not path.is_file():
                raise PDFReadabilityError(f"Path is not a file: {path}", pdf_path=pdf_path)

        try:
            pdf = pdfplumber.open(io.BytesIO(source) if pdf_path is None else pdf_path)
        except Exception as e:
            raise PDFReadabilityError(
                f"Error opening PDF: {e}",
                pdf_path=pdf_path,
                original_error=e
            ) from e

        full_text = ""
        page_map: PageMap = {}
        try:
            with pdf:
                page_count = len(pdf.pages)
                if page_count == 0:
                    raise PDFReadabilityError("PDF contains no pages", pdf_path=pdf_path)

                for page_number, page in enumerate(pdf.pages, 1):
                    page_map[len(full_text)] = page_number
                    try:
                        page_text = page.extract_text()
                    except Exception as e:
                        self.logger.error(f"Failed to extract text from page {page_number}: {e}")
                        continue
                    if page_text and page_text.strip():
                        full_text += page_text + "\n"
                        self.logger.debug(f"Page {page_number}: extracted {len(page_text)} characters")
                    else:
                        self.logger.warning(f"Page {page_number}: no text extracted")
        except PDFProcessingError:
            raise
        except Exception as e:
            raise TextExtractionError(
                f"Error during text extraction: {e}",
                pdf_path=pdf_path,
                extraction_method="pdfplumber"
            ) from e

        full_text = full_text.rstrip()
        if not full_text:
            raise TextExtractionError(
                "No text could be extracted from PDF",
                pdf_path=pdf_path,
                extraction_method="pdfplumber"
            )

        self.logger.info(f"Extracted {len(full_text)} characters from {page_count} pages")
        return PageText(text=full_text, page_map=page_map, page_count=page_count)


def extract_invoice_data(source: PDFSource, file_name: Optional[str] = None) -> ExtractedInvoiceData:
    """Convenience wrapper around ``PDFProcessor().extract_invoice_data``."""
    return PDFProcessor().extract_invoice_data(source, file_name)
