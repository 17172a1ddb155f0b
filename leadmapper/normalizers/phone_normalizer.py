"""
French phone number normalization

Canonicalizes numbers to the national 10-digit form:
- Strip spaces, dots, dashes, parentheses
- Drop +33 / 0033 / 33 country prefixes
- Restore the leading 0 on 9-digit numbers
"""

import re


SEPARATORS = re.compile(r'[\s\-.()]')
MOBILE_PATTERN = re.compile(r'0[67][0-9]{8}')


def clean_phone_number(phone: str) -> str:
    """
    Normalize a French phone number.

    The result is not validated: a malformed input comes back cleaned
    but still malformed.

    Examples:
        >>> clean_phone_number("+33 6 48 75 39 60")
        "0648753960"

        >>> clean_phone_number("0033712345678")
        "0712345678"

        >>> clean_phone_number("06.12.34.56.78")
        "0612345678"
    """
    if not phone:
        return ''

    cleaned = SEPARATORS.sub('', phone)

    if cleaned.startswith('+33'):
        cleaned = cleaned[3:]
    elif cleaned.startswith('0033'):
        cleaned = cleaned[4:]
    elif cleaned.startswith('33') and len(cleaned) >= 9:
        cleaned = cleaned[2:]

    if not cleaned.startswith('0') and len(cleaned) == 9:
        cleaned = '0' + cleaned

    return cleaned


def is_portable_number(phone: str) -> bool:
    """
    Check for a French mobile number (06 or 07, 10 digits).

    Args:
        phone: Raw or already cleaned phone number

    Returns:
        True if the cleaned number is a mobile number
    """
    if not phone:
        return False
    return bool(MOBILE_PATTERN.fullmatch(clean_phone_number(phone)))


def is_phone_present(phone: str) -> bool:
    return bool(phone and phone.strip())
