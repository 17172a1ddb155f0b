"""
Field mappers for Lead Mapper
"""

from .field_mapper import FieldMapper, value_of, combine, extract_records
from .auto_mapper import AutoMapper
from .interactive_mapper import InteractiveMapper

__all__ = ['FieldMapper', 'value_of', 'combine', 'extract_records', 'AutoMapper', 'InteractiveMapper']
