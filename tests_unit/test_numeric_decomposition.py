"""
Unit tests for numeric blob decomposition.
"""

from decimal import Decimal
from unittest.mock import Mock

from extraction.numeric_decomposition import (
    DEFAULT_STRATEGIES,
    FixedShapeStrategy,
    NumericFields,
    PriceTokenScanStrategy,
    decompose_numbers,
)


class TestFixedShapeStrategy:
    """Test cases for the quantity + single-digit weight shape."""

    def setup_method(self):
        self.strategy = FixedShapeStrategy()

    def test_splits_concatenated_columns(self):
        fields = self.strategy.decompose("25.0019.9919.99")
        assert fields == NumericFields(2, Decimal('5.00'), Decimal('19.99'), Decimal('19.99'))

    def test_real_invoice_samples(self):
        assert self.strategy.decompose("40.362.7410.96") == NumericFields(
            4, Decimal('0.36'), Decimal('2.74'), Decimal('10.96'))
        assert self.strategy.decompose("11.4554.9554.95") == NumericFields(
            1, Decimal('1.45'), Decimal('54.95'), Decimal('54.95'))
        assert self.strategy.decompose("20.2620.9941.98") == NumericFields(
            2, Decimal('0.26'), Decimal('20.99'), Decimal('41.98'))

    def test_quantity_is_an_int(self):
        fields = self.strategy.decompose("20.2620.9941.98")
        assert isinstance(fields.quantity, int)
        assert isinstance(fields.total_net_weight, Decimal)

    def test_rejects_spaced_blob(self):
        assert self.strategy.decompose("1 1.45 54.95 54.95") is None

    def test_rejects_trailing_garbage(self):
        assert self.strategy.decompose("25.0019.9919.991") is None

    def test_rejects_too_few_values(self):
        assert self.strategy.decompose("25.0019.99") is None


class TestPriceTokenScanStrategy:
    """Test cases for the price token scan fallback."""

    def setup_method(self):
        self.strategy = PriceTokenScanStrategy()

    def test_spaced_columns(self):
        fields = self.strategy.decompose("1 1.45 54.95 54.95")
        assert fields == NumericFields(1, Decimal('1.45'), Decimal('54.95'), Decimal('54.95'))

    def test_heavy_weight_with_separated_quantity(self):
        fields = self.strategy.decompose("2 12.50 19.99 39.98")
        assert fields == NumericFields(2, Decimal('12.50'), Decimal('19.99'), Decimal('39.98'))

    def test_extra_tokens_are_ignored(self):
        fields = self.strategy.decompose("3 1.00 2.00 6.00 9.99")
        assert fields == NumericFields(3, Decimal('1.00'), Decimal('2.00'), Decimal('6.00'))

    def test_requires_three_price_tokens(self):
        assert self.strategy.decompose("2 5.00 19.99") is None

    def test_requires_leading_quantity(self):
        assert self.strategy.decompose("0.50 19.99 39.98") is None

    def test_concatenated_blob_has_no_separate_quantity(self):
        # The first price token swallows the quantity digits.
        assert self.strategy.decompose("25.0019.9919.99") is None


class TestDecomposeNumbers:
    """Test cases for the strategy chain."""

    def test_primary_strategy_wins(self):
        fields = decompose_numbers("25.0019.9919.99")
        assert fields.quantity == 2
        assert fields.total_net_weight == Decimal('5.00')

    def test_falls_back_when_primary_fails(self):
        fields = decompose_numbers("2 12.50 19.99 39.98")
        assert fields == NumericFields(2, Decimal('12.50'), Decimal('19.99'), Decimal('39.98'))

    def test_failure_returns_none(self):
        assert decompose_numbers("25.0") is None
        assert decompose_numbers("") is None

    def test_strategies_tried_in_order(self):
        first = Mock()
        first.name = "first"
        first.decompose.return_value = None
        second = Mock()
        second.name = "second"
        expected = NumericFields(1, Decimal('1.00'), Decimal('2.00'), Decimal('2.00'))
        second.decompose.return_value = expected

        assert decompose_numbers("blob", [first, second]) is expected
        first.decompose.assert_called_once_with("blob")
        second.decompose.assert_called_once_with("blob")

    def test_later_strategies_skipped_after_success(self):
        first = Mock()
        first.name = "first"
        first.decompose.return_value = NumericFields(1, Decimal('1.00'), Decimal('2.00'), Decimal('2.00'))
        second = Mock()
        second.name = "second"

        decompose_numbers("blob", [first, second])
        second.decompose.assert_not_called()

    def test_default_chain_order(self):
        assert [s.name for s in DEFAULT_STRATEGIES] == ['fixed_shape', 'price_token_scan']
