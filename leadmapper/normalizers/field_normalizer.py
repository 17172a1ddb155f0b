"""
Basic field normalization

Handles cell cleaning shared by every loader:
- Trim whitespace
- None / NaN become empty strings
- Integral floats lose their ".0" (spreadsheet numbers)
- A quote left at either end of a cell is removed
"""

import math
from typing import Any


QUOTE_CHARS = ('"', "'")


def normalize_cell(value: Any) -> str:
    """
    Coerce a single cell value to a trimmed string.

    Args:
        value: Raw cell value (str, number, None, NaN...)

    Returns:
        Normalized string value
    """
    if value is None:
        return ''

    if isinstance(value, float):
        if math.isnan(value):
            return ''
        if value.is_integer():
            return str(int(value))

    return str(value).strip()


def strip_wrapping_quotes(text: str, keep_first: bool = False, keep_last: bool = False) -> str:
    """
    Remove a leading and a trailing quote character, each on its own.

    keep_first / keep_last protect an end character that belongs to the
    value (a quote decoded from a doubled "" escape).

    Examples:
        >>> strip_wrapping_quotes("'Rennes'")
        "Rennes"

        >>> strip_wrapping_quotes("'Durand")
        "Durand"

        >>> strip_wrapping_quotes('"Brest\'')
        "Brest"
    """
    start, end = 0, len(text)
    if start < end and text[start] in QUOTE_CHARS and not keep_first:
        start += 1
    if start < end and text[end - 1] in QUOTE_CHARS and not keep_last:
        end -= 1
    return text[start:end]


def is_blank_row(cells) -> bool:
    return not any(cell.strip() for cell in cells)


def is_name_present(name: str) -> bool:
    return bool(name and name.strip())
