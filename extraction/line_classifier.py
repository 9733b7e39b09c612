"""
Line classification and record accumulation for the Aruba product table.

The product table arrives as one text line per visual row. A product starts
with an identifier line (ASIN or ISBN-10 plus the start of the description),
may continue with more description lines, and carries a data line with the
product group, HS code, export control, country of origin and the four
numeric columns run together. A "Seller of Record:" line and the seller name
after it can appear anywhere inside the table and are skipped.

Parsing is a small explicit state machine: ``step`` takes the current
``ParserState`` and one line and returns the next state plus the record that
was closed by that line, if any. ``finish`` closes the last record.
"""

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from .models import ProductAccumulator
from .numeric_decomposition import DEFAULT_STRATEGIES, DecompositionStrategy, decompose_numbers
from .table_locator import TableLine


logger = logging.getLogger(__name__)


SELLER_OF_RECORD_MARKER = "Seller of Record:"

# ASIN: letter + 9 letters/digits with at least one digit (B00YJJG39A).
# ISBN-10: 9 digits + check digit or X (141978269X).
# A dot right after the code means a product group + HS code, not an item.
IDENTIFIER_PATTERN = re.compile(
    r'(?P<identifier>[A-Z](?=[A-Z0-9]{0,8}\d)[A-Z0-9]{9}|\d{9}[\dX])'
    r'(?P<remainder>(?!\.).*)'
)

# TOY9505.90.6000EAR99CN20.8413.4926.98
# OFFICE PRODUCT7326.90.6000EAR99CN10.6031.9931.99
# BOOK 4901.99.0050 EAR99 US 1 1.45 54.95 54.95
DATA_LINE_PATTERN = re.compile(
    r'(?P<product_group>[A-Z][A-Z ]{1,24}?)\s*'
    r'(?P<hs_code>\d+(?:\.\d+)+)\s*'
    r'(?P<export_control>[A-Z0-9]+?)\s*'
    r'(?P<country_code>[A-Z]{2})\s*'
    r'(?P<numbers>\d[\d. ]*)'
)

CATEGORY_FRAGMENT_PATTERN = re.compile(r'[A-Z][A-Z ]+')


@dataclass(frozen=True)
class IdentifierMatch:
    identifier: str
    remainder: str


@dataclass(frozen=True)
class DataLineMatch:
    product_group: str
    hs_code: str
    export_control: str
    country_code: str
    numbers: str


def is_seller_directive(line: str) -> bool:
    """Check for the "Seller of Record:" line that precedes a seller name."""
    return SELLER_OF_RECORD_MARKER in line


def match_data_line(line: str) -> Optional[DataLineMatch]:
    """
    Match a product data line.

    Args:
        line: Stripped table line

    Returns:
        DataLineMatch with the numeric blob after the country code, or None
    """
    match = DATA_LINE_PATTERN.fullmatch(line.strip())
    if not match:
        return None
    return DataLineMatch(
        product_group=match.group('product_group').strip(),
        hs_code=match.group('hs_code'),
        export_control=match.group('export_control'),
        country_code=match.group('country_code'),
        numbers=match.group('numbers').strip(),
    )


def match_identifier(line: str) -> Optional[IdentifierMatch]:
    """
    Match a line that opens a new product.

    Args:
        line: Stripped table line

    Returns:
        IdentifierMatch with the code and the rest of the line, or None
    """
    line = line.strip()
    match = IDENTIFIER_PATTERN.fullmatch(line)
    if not match or match_data_line(line) is not None:
        return None
    return IdentifierMatch(match.group('identifier'), match.group('remainder').strip())


def is_category_fragment(line: str) -> bool:
    """
    Check for an uppercase-only line.

    Long product groups ("MUSICAL INSTRUMENTS") are sometimes wrapped so the
    data line starts on the following line.
    """
    return CATEGORY_FRAGMENT_PATTERN.fullmatch(line.strip()) is not None


class ParserMode(Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"
    SKIPPING_SELLER_NAME = "skipping_seller_name"


@dataclass(frozen=True)
class ParserState:
    """
    Parser state between two lines.

    Attributes:
        mode: Current mode
        accumulator: Record being assembled, if any
        category_fragment: Uppercase-only text held back because it may be the
            first part of a wrapped data line
    """
    mode: ParserMode = ParserMode.IDLE
    accumulator: Optional[ProductAccumulator] = None
    category_fragment: Optional[str] = None


INITIAL_STATE = ParserState()


def _resume(accumulator: Optional[ProductAccumulator]) -> ParserState:
    if accumulator is None:
        return ParserState(ParserMode.IDLE)
    return ParserState(ParserMode.ACCUMULATING, accumulator)


def _release_fragment(state: ParserState) -> Optional[ProductAccumulator]:
    """Return the accumulator with any held fragment added to its description."""
    if state.accumulator is None or state.category_fragment is None:
        return state.accumulator
    return state.accumulator.append_description(state.category_fragment)


def _apply_data_line(accumulator: ProductAccumulator, data: DataLineMatch,
                     strategies: Sequence[DecompositionStrategy]) -> ParserState:
    logger.debug(f"Found data line for {accumulator.identifier}: {data}")
    numbers = decompose_numbers(data.numbers, strategies)
    if numbers is None:
        logger.warning(
            f"Could not decompose numbers '{data.numbers}' for {accumulator.identifier}"
        )
        return _resume(accumulator)
    return _resume(accumulator.with_numbers(numbers))


def step(state: ParserState, line: Union[TableLine, str],
         strategies: Sequence[DecompositionStrategy] = DEFAULT_STRATEGIES
         ) -> Tuple[ParserState, Optional[ProductAccumulator]]:
    """
    Consume one table line.

    Args:
        state: State before the line
        line: Table line (a plain string is treated as a line at offset 0)
        strategies: Numeric decomposition strategies for data lines

    Returns:
        Tuple of (next state, accumulator closed by this line or None)
    """
    if isinstance(line, str):
        line = TableLine(line.strip(), 0)
    text = line.text

    if state.mode is ParserMode.SKIPPING_SELLER_NAME:
        logger.debug(f"Skipping seller name line: {text}")
        return _resume(state.accumulator), None

    if is_seller_directive(text):
        logger.debug("Skipping 'Seller of Record' line")
        return ParserState(ParserMode.SKIPPING_SELLER_NAME, _release_fragment(state)), None

    if state.category_fragment is not None:
        if match_data_line(text) is None:
            if is_category_fragment(text):
                return replace(state, category_fragment=f"{state.category_fragment} {text}"), None
            combined = match_data_line(f"{state.category_fragment} {text}")
            if combined is not None:
                return _apply_data_line(state.accumulator, combined, strategies), None
        state = _resume(_release_fragment(state))

    identifier = match_identifier(text)
    if identifier is not None:
        logger.debug(f"Found new product identifier: {identifier.identifier}")
        accumulator = ProductAccumulator(
            identifier=identifier.identifier,
            identifier_offset=line.offset,
        ).append_description(identifier.remainder)
        return ParserState(ParserMode.ACCUMULATING, accumulator), state.accumulator

    if state.accumulator is None:
        logger.debug(f"Ignoring line outside a product: {text}")
        return state, None

    data = match_data_line(text)
    if data is not None:
        return _apply_data_line(state.accumulator, data, strategies), None

    if is_category_fragment(text):
        return replace(state, category_fragment=text), None

    return _resume(state.accumulator.append_description(text)), None


def finish(state: ParserState) -> Optional[ProductAccumulator]:
    """Close the parse and return the last open accumulator, if any."""
    return _release_fragment(state)
