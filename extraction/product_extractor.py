"""
Product extraction from Aruba invoice text.

This module ties the parser stages together: it locates the product table,
feeds each table line through the line state machine, and turns every closed
record into an ``ExtractedProduct`` with its source page. Malformed input
never raises; records that cannot be completed are logged and dropped so one
bad line item does not cost the rest of the invoice.
"""

import logging
import re
from pathlib import PurePath
from typing import List, Optional, Sequence

from .line_classifier import INITIAL_STATE, finish, step
from .models import ExtractedProduct, PageMap, ProductAccumulator
from .numeric_decomposition import DEFAULT_STRATEGIES, DecompositionStrategy
from .page_resolver import resolve_page_number
from .table_locator import locate_table


_PDF_SUFFIX = re.compile(r'\.pdf$', re.IGNORECASE)


def derive_client_name(file_name: str) -> str:
    """
    Derive the client name from an uploaded invoice file name.

    Args:
        file_name: File name or path, e.g. "John Doe.pdf"

    Returns:
        File name without directories and without a trailing ".pdf"
    """
    name = PurePath(file_name.replace('\\', '/')).name
    return _PDF_SUFFIX.sub('', name)


class ProductExtractor:
    """
    Extracts product records from the flattened text of an Aruba invoice.

    Instances hold no per-parse state, so one extractor can be shared by
    concurrent callers.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 strategies: Sequence[DecompositionStrategy] = DEFAULT_STRATEGIES):
        """
        Initialize ProductExtractor.

        Args:
            logger: Optional logger instance. Defaults to the module logger.
            strategies: Ordered numeric decomposition strategies
        """
        self.logger = logger or logging.getLogger(__name__)
        self.strategies = tuple(strategies)

    def extract(self, text: str, page_map: Optional[PageMap] = None) -> List[ExtractedProduct]:
        """
        Extract all complete products from invoice text.

        Args:
            text: Complete flattened document text
            page_map: Page start offset -> page number; treated as read-only

        Returns:
            Products in the order their identifier lines appear

        Raises:
            TypeError: If text is not a string
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be a str, not {type(text).__name__}")
        page_map = page_map or {}

        region = locate_table(text)
        if region is None:
            self.logger.warning("Could not find product table headers in invoice text")
            self.logger.debug(f"Text preview: {text[:500]}")
            return []

        self.logger.info(
            f"Found product table at offsets {region.start}-{region.end} "
            f"({len(region.text)} characters)"
        )

        products: List[ExtractedProduct] = []
        state = INITIAL_STATE
        line_count = 0
        for line in region.iter_lines():
            line_count += 1
            state, closed = step(state, line, self.strategies)
            if closed is not None:
                self._flush(closed, page_map, products)

        closed = finish(state)
        if closed is not None:
            self._flush(closed, page_map, products)

        self.logger.info(f"Extraction complete: {len(products)} products from {line_count} lines")
        return products

    def _flush(self, accumulator: ProductAccumulator, page_map: PageMap,
               products: List[ExtractedProduct]) -> None:
        page_number = resolve_page_number(accumulator.identifier_offset, page_map)
        product = accumulator.to_product(page_number)
        if product is None:
            self.logger.warning(
                f"Incomplete product skipped: {accumulator.identifier} "
                f"(missing {', '.join(accumulator.missing_fields())})"
            )
            return
        self.logger.debug(f"Saved product {product.identifier} from page {page_number}")
        products.append(product)


def extract_products_from_text(text: str, page_map: Optional[PageMap] = None) -> List[ExtractedProduct]:
    """
    Extract products from Aruba invoice text with the default strategies.

    Args:
        text: Complete flattened document text
        page_map: Page start offset -> page number

    Returns:
        Complete products in table order; empty if no table is found
    """
    return ProductExtractor().extract(text, page_map)
