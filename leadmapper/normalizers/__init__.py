"""
Data normalizers for Lead Mapper
"""

from .field_normalizer import normalize_cell, strip_wrapping_quotes, is_blank_row, is_name_present
from .phone_normalizer import clean_phone_number, is_portable_number, is_phone_present
from .postal_normalizer import is_valid_postal_code, is_postal_allowed, parse_prefixes

__all__ = [
    'normalize_cell',
    'strip_wrapping_quotes',
    'is_blank_row',
    'is_name_present',
    'clean_phone_number',
    'is_portable_number',
    'is_phone_present',
    'is_valid_postal_code',
    'is_postal_allowed',
    'parse_prefixes',
]
