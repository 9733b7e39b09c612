"""
Unit tests for extraction data models.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime
from decimal import Decimal

import pytest

from extraction.exceptions import PDFProcessingError, PDFReadabilityError, TextExtractionError
from extraction.models import ExtractedInvoiceData, ExtractedProduct, ProductAccumulator
from extraction.numeric_decomposition import NumericFields


def make_product(identifier="B00YJJG39A", total="17.59", page=1):
    return ExtractedProduct(
        identifier=identifier,
        description="Dog Water Fountain",
        quantity=1,
        total_net_weight=Decimal('0.38'),
        unit_value=Decimal('17.59'),
        total_unit_value=Decimal(total),
        page_number=page,
    )


class TestExtractedProduct:
    """Test cases for ExtractedProduct."""

    def test_to_dict(self):
        data = make_product().to_dict()
        assert data == {
            'identifier': 'B00YJJG39A',
            'description': 'Dog Water Fountain',
            'quantity': 1,
            'totalNetWeight': 0.38,
            'unitValue': 17.59,
            'totalUnitValue': 17.59,
            'pageNumber': 1,
        }

    def test_is_immutable(self):
        product = make_product()
        with pytest.raises(FrozenInstanceError):
            product.quantity = 3


class TestProductAccumulator:
    """Test cases for ProductAccumulator."""

    def setup_method(self):
        self.numbers = NumericFields(2, Decimal('5.00'), Decimal('19.99'), Decimal('19.99'))

    def test_append_description_space_joins(self):
        accumulator = ProductAccumulator("B012345678").append_description("Wireless Mouse")
        accumulator = accumulator.append_description("  Black color ")
        assert accumulator.description == "Wireless Mouse Black color"

    def test_append_empty_text_is_noop(self):
        accumulator = ProductAccumulator("B012345678", description_buffer="Mouse")
        assert accumulator.append_description("   ") is accumulator

    def test_description_collapses_whitespace(self):
        accumulator = ProductAccumulator("B012345678", description_buffer="  Wireless   Mouse ")
        assert accumulator.description == "Wireless Mouse"

    def test_append_returns_new_instance(self):
        original = ProductAccumulator("B012345678")
        updated = original.append_description("Mouse")
        assert original.description == ""
        assert updated.description == "Mouse"

    def test_missing_fields(self):
        accumulator = ProductAccumulator("B012345678")
        assert accumulator.missing_fields() == [
            'description', 'quantity', 'total_net_weight', 'unit_value', 'total_unit_value'
        ]
        assert not accumulator.is_complete()

    def test_complete_record(self):
        accumulator = ProductAccumulator("B012345678", identifier_offset=40) \
            .append_description("Wireless Mouse") \
            .with_numbers(self.numbers)

        assert accumulator.is_complete()
        product = accumulator.to_product(page_number=3)
        assert product.identifier == "B012345678"
        assert product.description == "Wireless Mouse"
        assert product.quantity == 2
        assert product.total_net_weight == Decimal('5.00')
        assert product.page_number == 3

    def test_incomplete_record_has_no_product(self):
        accumulator = ProductAccumulator("B012345678").with_numbers(self.numbers)
        assert accumulator.to_product(page_number=1) is None

    def test_wrong_numeric_types_are_incomplete(self):
        accumulator = ProductAccumulator(
            "B012345678", description_buffer="Mouse", quantity="2",
            total_net_weight=Decimal('5.00'), unit_value=19.99, total_unit_value=Decimal('19.99'),
        )
        assert accumulator.missing_fields() == ['quantity', 'unit_value']


class TestExtractedInvoiceData:
    """Test cases for ExtractedInvoiceData."""

    def test_timestamp_defaults_to_now(self):
        invoice = ExtractedInvoiceData(client_name="John Doe")
        assert isinstance(invoice.extraction_timestamp, datetime)

    def test_total_value(self):
        invoice = ExtractedInvoiceData(
            client_name="John Doe",
            products=[make_product(total="17.59"), make_product("B012345678", total="19.99")],
        )
        assert invoice.get_total_value() == Decimal('37.58')

    def test_total_value_without_products(self):
        assert ExtractedInvoiceData(client_name="John Doe").get_total_value() == Decimal('0.00')

    def test_to_dict(self):
        invoice = ExtractedInvoiceData(
            client_name="John Doe",
            products=[make_product(page=2)],
            consignee_name="Alexander Vrolijk",
            freight_charge=Decimal('29.92'),
            source_path="invoices/John Doe.pdf",
            page_count=2,
            extraction_timestamp=datetime(2024, 5, 1, 12, 30),
        )
        invoice.add_processing_note("Extracted 1 products from 2 pages")

        data = invoice.to_dict()
        assert data['clientName'] == "John Doe"
        assert data['consigneeName'] == "Alexander Vrolijk"
        assert data['freightCharge'] == 29.92
        assert data['sourcePath'] == "invoices/John Doe.pdf"
        assert data['pageCount'] == 2
        assert data['extractionTimestamp'] == "2024-05-01T12:30:00"
        assert data['products'][0]['pageNumber'] == 2
        assert data['totalValue'] == 17.59
        assert data['processingNotes'] == ["Extracted 1 products from 2 pages"]

    def test_to_dict_without_freight(self):
        assert ExtractedInvoiceData(client_name="John Doe").to_dict()['freightCharge'] is None


class TestExtractionExceptions:
    """Test cases for the PDF exception hierarchy."""

    def test_message_includes_pdf_path(self):
        error = PDFProcessingError("Cannot read", pdf_path="a.pdf")
        assert str(error) == "Cannot read (PDF: a.pdf)"

    def test_message_without_path(self):
        assert str(PDFProcessingError("Cannot read")) == "Cannot read"

    def test_readability_error_details(self):
        error = PDFReadabilityError("Error opening PDF", "a.pdf", original_error=OSError("denied"))
        assert error.details == {'original_error': 'denied', 'error_type': 'OSError'}

    def test_text_extraction_error_details(self):
        error = TextExtractionError("No text", "a.pdf", page_number=2, extraction_method="pdfplumber")
        assert error.details == {'page_number': 2, 'extraction_method': 'pdfplumber'}
        assert isinstance(error, PDFProcessingError)
