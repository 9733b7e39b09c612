"""
Data models for extracted invoice information.

This module defines the structures produced by the Aruba invoice parser:
the finished product record, the in-progress accumulator used while walking
the product table, and the per-invoice result handed to downstream consumers.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Dict, Any


# Offset of each page's first character in the flattened text -> 1-based page.
PageMap = Dict[int, int]


@dataclass(frozen=True)
class ExtractedProduct:
    """
    A single complete line item from the invoice product table.

    Attributes:
        identifier: ASIN-like code (e.g., B00YJJG39A) or ISBN-10
        description: Item description, continuation lines space-joined
        quantity: Number of units
        total_net_weight: Net weight of the line
        unit_value: Price per unit in USD
        total_unit_value: Extended price in USD
        page_number: 1-based page on which the identifier line appeared
    """
    identifier: str
    description: str
    quantity: int
    total_net_weight: Decimal
    unit_value: Decimal
    total_unit_value: Decimal
    page_number: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert product to dictionary for serialization."""
        return {
            'identifier': self.identifier,
            'description': self.description,
            'quantity': self.quantity,
            'totalNetWeight': float(self.total_net_weight),
            'unitValue': float(self.unit_value),
            'totalUnitValue': float(self.total_unit_value),
            'pageNumber': self.page_number,
        }


@dataclass(frozen=True)
class ProductAccumulator:
    """
    A product record being assembled across several table lines.

    Instances are immutable; the parser replaces them as lines are consumed
    so each transition can be tested on its own.

    Attributes:
        identifier: Code that opened this record
        identifier_offset: Absolute text offset of the identifier line
        description_buffer: Description text gathered so far, in source order
        quantity: Quantity once a data line has been decomposed
        total_net_weight: Net weight once a data line has been decomposed
        unit_value: Unit price once a data line has been decomposed
        total_unit_value: Extended price once a data line has been decomposed
    """
    identifier: str
    identifier_offset: int = 0
    description_buffer: str = ""
    quantity: Optional[int] = None
    total_net_weight: Optional[Decimal] = None
    unit_value: Optional[Decimal] = None
    total_unit_value: Optional[Decimal] = None

    @property
    def description(self) -> str:
        """Description with surrounding and repeated whitespace collapsed."""
        return " ".join(self.description_buffer.split())

    def append_description(self, text: str) -> 'ProductAccumulator':
        """Return a copy with ``text`` space-joined onto the description."""
        text = text.strip()
        if not text:
            return self
        if not self.description_buffer:
            return replace(self, description_buffer=text)
        return replace(self, description_buffer=f"{self.description_buffer} {text}")

    def with_numbers(self, numbers) -> 'ProductAccumulator':
        """Return a copy carrying the four decomposed numeric fields."""
        return replace(
            self,
            quantity=numbers.quantity,
            total_net_weight=numbers.total_net_weight,
            unit_value=numbers.unit_value,
            total_unit_value=numbers.total_unit_value,
        )

    def missing_fields(self) -> List[str]:
        """Names of the fields that still prevent this record from completing."""
        missing = []
        if not self.identifier:
            missing.append('identifier')
        if not self.description:
            missing.append('description')
        if not isinstance(self.quantity, int):
            missing.append('quantity')
        if not isinstance(self.total_net_weight, Decimal):
            missing.append('total_net_weight')
        if not isinstance(self.unit_value, Decimal):
            missing.append('unit_value')
        if not isinstance(self.total_unit_value, Decimal):
            missing.append('total_unit_value')
        return missing

    def is_complete(self) -> bool:
        """Check whether every field of the finished record is available."""
        return not self.missing_fields()

    def to_product(self, page_number: int) -> Optional[ExtractedProduct]:
        """
        Build the finished record.

        Args:
            page_number: Page resolved for this record's identifier line

        Returns:
            ExtractedProduct, or None if the record is incomplete
        """
        if not self.is_complete():
            return None
        return ExtractedProduct(
            identifier=self.identifier,
            description=self.description,
            quantity=self.quantity,
            total_net_weight=self.total_net_weight,
            unit_value=self.unit_value,
            total_unit_value=self.total_unit_value,
            page_number=page_number,
        )


@dataclass
class ExtractedInvoiceData:
    """
    Represents the extraction result for one invoice PDF.

    Attributes:
        client_name: Name derived from the source file name
        products: Complete product records in table order
        consignee_name: Name printed under the CONSIGNEE heading, if found
        freight_charge: Value of the FREIGHT CHARGE line, if found
        source_path: Path of the source PDF (None for in-memory input)
        page_count: Number of pages in the PDF
        extraction_timestamp: When the data was extracted
        processing_notes: Notes gathered during processing
    """
    client_name: str
    products: List[ExtractedProduct] = field(default_factory=list)
    consignee_name: Optional[str] = None
    freight_charge: Optional[Decimal] = None
    source_path: Optional[str] = None
    page_count: Optional[int] = None
    extraction_timestamp: Optional[datetime] = None
    processing_notes: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Set extraction timestamp if not provided."""
        if self.extraction_timestamp is None:
            self.extraction_timestamp = datetime.now()

    def add_processing_note(self, note: str) -> None:
        """Add a processing note."""
        self.processing_notes.append(note)

    def get_total_value(self) -> Decimal:
        """Sum of the extended prices of all products."""
        return sum((product.total_unit_value for product in self.products), Decimal('0.00'))

    def to_dict(self) -> Dict[str, Any]:
        """Convert invoice data to dictionary for serialization."""
        return {
            'clientName': self.client_name,
            'consigneeName': self.consignee_name,
            'freightCharge': float(self.freight_charge) if self.freight_charge is not None else None,
            'sourcePath': self.source_path,
            'pageCount': self.page_count,
            'extractionTimestamp': (
                self.extraction_timestamp.isoformat() if self.extraction_timestamp else None
            ),
            'products': [product.to_dict() for product in self.products],
            'totalValue': float(self.get_total_value()),
            'processingNotes': self.processing_notes,
        }
