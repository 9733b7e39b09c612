"""
Numeric decomposition of Aruba invoice data lines.

The PDF text layer drops the column separators between quantity, net weight,
unit value and total value, so a data line ends in a blob such as
``25.0019.9919.99``. This module splits that blob back into its four fields
using an ordered chain of strategies; the first strategy that succeeds wins.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumericFields:
    """The four numeric columns of a product data line."""
    quantity: int
    total_net_weight: Decimal
    unit_value: Decimal
    total_unit_value: Decimal


class DecompositionStrategy(ABC):
    """
    Base class for numeric blob decomposition strategies.

    Strategies either return all four fields or None; they never return a
    partial result.
    """

    name = "base"

    @abstractmethod
    def decompose(self, blob: str) -> Optional[NumericFields]:
        """
        Split a numeric blob into its four fields.

        Args:
            blob: Digits and dots following the country code

        Returns:
            NumericFields, or None if this strategy cannot split the blob
        """
        pass

    @staticmethod
    def _build(quantity: str, weight: str, unit: str, total: str) -> Optional[NumericFields]:
        try:
            return NumericFields(
                quantity=int(quantity),
                total_net_weight=Decimal(weight),
                unit_value=Decimal(unit),
                total_unit_value=Decimal(total),
            )
        except (ValueError, InvalidOperation):
            return None


class FixedShapeStrategy(DecompositionStrategy):
    """
    Quantity prefix, single-digit weight, then unit and total price.

    Covers the common case of a line weighing under 10 kg, e.g.
    ``25.0019.9919.99`` -> 2, 5.00, 19.99, 19.99.
    """

    name = "fixed_shape"
    PATTERN = re.compile(r'(\d+)(\d\.\d{2})(\d+\.\d{2})(\d+\.\d{2})')

    def decompose(self, blob: str) -> Optional[NumericFields]:
        match = self.PATTERN.fullmatch(blob.strip())
        if not match:
            return None
        return self._build(*match.groups())


class PriceTokenScanStrategy(DecompositionStrategy):
    """
    Scan for price-shaped tokens and take the leading digits as quantity.

    Needs at least three ``digits.dd`` tokens and a bare integer before the
    first of them. Tokens beyond the third are ignored.
    """

    name = "price_token_scan"
    PRICE_TOKEN = re.compile(r'\d+\.\d{2}')
    QUANTITY_PREFIX = re.compile(r'\s*(\d+)\s*')

    def decompose(self, blob: str) -> Optional[NumericFields]:
        tokens = list(self.PRICE_TOKEN.finditer(blob))
        if len(tokens) < 3:
            return None

        quantity_match = self.QUANTITY_PREFIX.fullmatch(blob[:tokens[0].start()])
        if not quantity_match:
            return None

        weight, unit, total = (token.group(0) for token in tokens[:3])
        return self._build(quantity_match.group(1), weight, unit, total)


DEFAULT_STRATEGIES = (FixedShapeStrategy(), PriceTokenScanStrategy())


def decompose_numbers(blob: str,
                      strategies: Sequence[DecompositionStrategy] = DEFAULT_STRATEGIES
                      ) -> Optional[NumericFields]:
    """
    Decompose a numeric blob by trying each strategy in order.

    Args:
        blob: Digits and dots following a data line's country code
        strategies: Ordered strategies to try

    Returns:
        NumericFields from the first successful strategy, or None
    """
    for strategy in strategies:
        fields = strategy.decompose(blob)
        if fields is not None:
            logger.debug(f"Decomposed '{blob}' with {strategy.name}: {fields}")
            return fields
    return None
