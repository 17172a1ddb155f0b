"""
Lead Mapper error taxonomy

All ingestion failures are per-file: the batch pipeline catches
LeadMapperError for one file and reports it next to the files that
succeeded.
"""


class LeadMapperError(Exception):
    """Base class for every ingestion error."""


class EmptyInputError(LeadMapperError):
    """The file contains no non-blank line."""


class UnsupportedFormatError(LeadMapperError):
    """Unknown file extension, or a workbook that cannot be decoded."""


class NoSheetsError(LeadMapperError):
    """The workbook decoded but holds no sheet with a header row."""


class ParseError(LeadMapperError):
    """Malformed row data (only raised by a strict parser)."""

    def __init__(self, message: str, line_number: int = 0):
        super().__init__(message)
        self.line_number = line_number


class ParseTimeoutError(LeadMapperError):
    """Parsing one file exceeded its wall-clock limit."""
