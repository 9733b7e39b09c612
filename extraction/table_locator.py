"""
Locates the product table inside the flattened text of an Aruba invoice.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional


TABLE_START_PATTERN = re.compile(
    r'ASIN[\s\S]*?DESCRIPTION[\s\S]*?TOTAL\s+UNIT[\s\S]*?VALUE[\s\S]*?\(USD\)',
    re.IGNORECASE
)
TABLE_END_PATTERN = re.compile(r'TOTAL\s+ITEM\s+VALUE', re.IGNORECASE)

_LINE_PATTERN = re.compile(r'[^\n]+')


@dataclass(frozen=True)
class TableLine:
    """A non-blank, stripped table line and the absolute offset of its first character."""
    text: str
    offset: int


@dataclass(frozen=True)
class TableRegion:
    """
    The slice of the document holding the product line items.

    Attributes:
        text: Raw text between the header and the totals marker
        start: Absolute offset of ``text`` in the full document
        end: Absolute offset just past ``text``
    """
    text: str
    start: int
    end: int

    def iter_lines(self) -> Iterator[TableLine]:
        """Yield every non-blank line with surrounding whitespace removed."""
        for match in _LINE_PATTERN.finditer(self.text):
            raw = match.group(0)
            stripped = raw.strip()
            if not stripped:
                continue
            leading = len(raw) - len(raw.lstrip())
            yield TableLine(stripped, self.start + match.start() + leading)


def locate_table(text: str) -> Optional[TableRegion]:
    """
    Find the product table region.

    The region begins right after the ``ASIN ... DESCRIPTION ... TOTAL UNIT
    ... VALUE ... (USD)`` header and ends right before the first
    ``TOTAL ITEM VALUE`` that follows it, or at the end of the text.

    Args:
        text: Complete flattened document text

    Returns:
        TableRegion, or None if the header cannot be found
    """
    start_match = TABLE_START_PATTERN.search(text)
    if not start_match:
        return None

    start = start_match.end()
    end_match = TABLE_END_PATTERN.search(text, start)
    end = end_match.start() if end_match else len(text)
    return TableRegion(text=text[start:end], start=start, end=end)
