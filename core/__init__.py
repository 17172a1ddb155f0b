"""Lead Mapper Core"""

from ._version import __version__
from .config import MapperConfig, get_config, reload_config
from .errors import (
    LeadMapperError,
    EmptyInputError,
    UnsupportedFormatError,
    NoSheetsError,
    ParseError,
    ParseTimeoutError,
)
from .models import (
    FieldKind,
    FieldMapping,
    TabularSource,
    ExtractedRecord,
    FilterConfig,
    FilterStats,
    ExportOptions,
    RawFile,
    FileResult,
)

__all__ = [
    'MapperConfig', 'get_config', 'reload_config',
    'LeadMapperError', 'EmptyInputError', 'UnsupportedFormatError',
    'NoSheetsError', 'ParseError', 'ParseTimeoutError',
    'FieldKind', 'FieldMapping', 'TabularSource', 'ExtractedRecord',
    'FilterConfig', 'FilterStats', 'ExportOptions', 'RawFile', 'FileResult',
]
