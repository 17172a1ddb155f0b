"""
Source loaders for Lead Mapper
"""

from typing import Dict

from core.errors import UnsupportedFormatError
from core.models import RawFile, TabularSource
from .base import SourceLoader
from .delimited_loader import DelimitedLoader, TabularParser, ParsedTable, detect_delimiter, decode_text
from .workbook_loader import WorkbookLoader

DELIMITED_EXTENSIONS = {'csv', 'txt'}
WORKBOOK_EXTENSIONS = {'xlsx', 'xls'}


def get_loader(raw: RawFile, strict: bool = False) -> SourceLoader:
    """
    Pick a loader from the file extension.

    Raises:
        UnsupportedFormatError: For any extension other than csv/txt/xlsx/xls
    """
    extension = raw.extension
    if extension in DELIMITED_EXTENSIONS:
        return DelimitedLoader(raw.name, raw.data, strict=strict)
    if extension in WORKBOOK_EXTENSIONS:
        if isinstance(raw.data, str):
            raise UnsupportedFormatError(f"Workbook {raw.name} must be supplied as bytes")
        return WorkbookLoader(raw.name, raw.data)
    raise UnsupportedFormatError(f"Unsupported file format: {raw.name}")


def load_source(raw: RawFile, strict: bool = False) -> Dict[str, TabularSource]:
    """Parse one file into its tables (one per sheet for workbooks)."""
    return get_loader(raw, strict=strict).load()


__all__ = [
    'SourceLoader', 'DelimitedLoader', 'WorkbookLoader',
    'TabularParser', 'ParsedTable', 'detect_delimiter', 'decode_text',
    'get_loader', 'load_source',
]
