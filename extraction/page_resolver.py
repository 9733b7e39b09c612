"""Resolves text offsets to source PDF page numbers."""

from bisect import bisect_right

from .models import PageMap


def resolve_page_number(position: int, page_map: PageMap) -> int:
    """
    Return the page of the last page-map entry at or before ``position``.

    Args:
        position: Absolute offset in the flattened text
        page_map: Page start offset -> 1-based page number

    Returns:
        Page number, or 1 if the map is empty or the position precedes it
    """
    if not page_map:
        return 1

    offsets = sorted(page_map)
    index = bisect_right(offsets, position)
    if index == 0:
        return 1
    return page_map[offsets[index - 1]]
