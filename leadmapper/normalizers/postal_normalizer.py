"""
Postal code validation

French postal codes ending in 000 (75000, 35000...) are city-level
placeholders and are treated as generic.
"""

import re
from typing import List, Optional, Sequence, Union


WHITESPACE = re.compile(r'\s')
GENERIC_POSTAL = re.compile(r'[0-9]{2}000')


def is_valid_postal_code(postal_code: str) -> bool:
    """
    Reject generic postal codes.

    Empty codes are valid: emptiness is not this check's concern.

    Examples:
        >>> is_valid_postal_code("35200")
        True

        >>> is_valid_postal_code("35 000")
        False
    """
    if not postal_code:
        return True

    cleaned = WHITESPACE.sub('', postal_code)
    return not GENERIC_POSTAL.fullmatch(cleaned)


def parse_prefixes(prefixes: Optional[Union[str, Sequence[str]]]) -> List[str]:
    """
    Parse an allowed-prefix list.

    Accepts the raw comma-separated string typed by the operator
    ("35, 56,29") or an already split sequence. Blank entries are dropped,
    order is kept.
    """
    if not prefixes:
        return []
    if isinstance(prefixes, str):
        prefixes = prefixes.split(',')
    return [p.strip() for p in prefixes if p and p.strip()]


def is_postal_allowed(postal_code: str, prefixes: Sequence[str]) -> bool:
    """True when no prefix is given, or the code starts with one of them."""
    if not prefixes:
        return True
    code = postal_code or ''
    return any(code.startswith(prefix.strip()) for prefix in prefixes)
