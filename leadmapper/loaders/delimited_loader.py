"""
Delimited text loader with auto-delimiter detection

Loads CSV/TXT exports with automatic detection of:
- Delimiter (comma, semicolon, tab, pipe)
- Encoding (UTF-8, cp1252, latin1)
- Quoted fields, including doubled-quote escapes
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

from core.errors import EmptyInputError, ParseError
from core.models import TabularSource
from ..normalizers import strip_wrapping_quotes, is_blank_row
from .base import SourceLoader


logger = logging.getLogger(__name__)

# Ordered by priority: ties go to the earlier delimiter
DELIMITERS = [',', ';', '\t', '|']
ENCODINGS = ['utf-8-sig', 'cp1252', 'latin-1']
LINE_BREAK = re.compile(r'\r?\n')


@dataclass
class ParsedTable:
    """Header row plus data rows of one delimited text."""
    headers: List[str]
    rows: List[List[str]]
    delimiter: str = ','
    warnings: List[str] = field(default_factory=list)


def decode_text(data: Union[bytes, str]) -> str:
    """
    Decode raw file bytes.

    Tries UTF-8 (BOM tolerant) first, then cp1252 and latin1 for
    exports from older spreadsheet tools. latin1 never fails.
    """
    if isinstance(data, str):
        return data.lstrip('\ufeff')

    for encoding in ENCODINGS[:-1]:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue

    return data.decode(ENCODINGS[-1])


def detect_delimiter(line: str) -> str:
    """
    Pick the delimiter that splits the header line into the most columns.

    Args:
        line: First non-blank line of the file

    Returns:
        Detected delimiter character
    """
    best_delimiter = DELIMITERS[0]
    max_columns = 0

    for delimiter in DELIMITERS:
        columns = len(line.split(delimiter))
        if columns > max_columns:
            max_columns = columns
            best_delimiter = delimiter

    return best_delimiter


def _finish_cell(chars: List[str], escaped: List[bool]) -> str:
    """Trim a scanned cell, then drop a stray quote left at either end."""
    text = ''.join(chars)
    start = len(text) - len(text.lstrip())
    end = len(text.rstrip())
    if start >= end:
        return ''
    return strip_wrapping_quotes(text[start:end], keep_first=escaped[start], keep_last=escaped[end - 1])


class TabularParser:
    """
    Quote-aware delimited text parser.

    Example:
        table = TabularParser().parse('Nom;Ville\\n"Durand";Rennes')
        table.headers  # ['Nom', 'Ville']

    An unterminated quote is closed at the end of its line and reported in
    ParsedTable.warnings. With strict=True it raises ParseError instead.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def parse(self, text: str) -> ParsedTable:
        """
        Parse one table.

        Raises:
            EmptyInputError: If no non-blank line remains
            ParseError: On an unterminated quote in strict mode
        """
        lines = [
            (number, line)
            for number, line in enumerate(LINE_BREAK.split(text), 1)
            if line.strip()
        ]
        if not lines:
            raise EmptyInputError("Empty file")

        delimiter = detect_delimiter(lines[0][1])
        warnings: List[str] = []

        parsed = [self._parse_row(line, number, delimiter, warnings) for number, line in lines]

        headers = parsed[0]
        rows = [row for row in parsed[1:] if not is_blank_row(row)]

        return ParsedTable(headers=headers, rows=rows, delimiter=delimiter, warnings=warnings)

    def _parse_row(self, line: str, number: int, delimiter: str, warnings: List[str]) -> List[str]:
        """Single left-to-right scan with an in-quote flag."""
        cells: List[str] = []
        current: List[str] = []
        escaped: List[bool] = []
        in_quote = False
        i = 0

        while i < len(line):
            char = line[i]

            if char == '"':
                if in_quote and i + 1 < len(line) and line[i + 1] == '"':
                    current.append('"')
                    escaped.append(True)
                    i += 1
                else:
                    in_quote = not in_quote
            elif char == delimiter and not in_quote:
                cells.append(_finish_cell(current, escaped))
                current, escaped = [], []
            else:
                current.append(char)
                escaped.append(False)
            i += 1

        if in_quote:
            if self.strict:
                raise ParseError(f"Unterminated quote on line {number}", line_number=number)
            warnings.append(f"line {number}: unterminated quote closed at end of line")
            logger.debug("Unterminated quote on line %d closed at end of line", number)

        cells.append(_finish_cell(current, escaped))
        return cells


class DelimitedLoader(SourceLoader):
    """
    Load a CSV/TXT file held in memory.

    Example:
        loader = DelimitedLoader("contacts.csv", raw_bytes)
        tables = loader.load()
    """

    kind = 'delimited-text'

    def __init__(self, name: str, data: Union[bytes, str], strict: bool = False):
        """
        Initialize delimited loader.

        Args:
            name: Original file name
            data: Raw bytes or already decoded text
            strict: Raise on unterminated quotes instead of recovering
        """
        size = len(data) if isinstance(data, bytes) else len(data.encode('utf-8'))
        super().__init__(name, size)
        self.data = data
        self.parser = TabularParser(strict=strict)

    def load(self) -> Dict[str, TabularSource]:
        table = self.parser.parse(decode_text(self.data))

        if table.warnings:
            logger.warning("%s: %d malformed line(s) recovered", self.name, len(table.warnings))

        source = TabularSource(
            name=self.name,
            headers=tuple(table.headers),
            rows=tuple(tuple(row) for row in table.rows),
            size=self.size,
            kind='delimited-text',
            warnings=tuple(table.warnings),
        )
        logger.debug(
            "%s: delimiter %r, %d columns, %d rows",
            self.name, table.delimiter, len(source.headers), source.row_count,
        )
        return {self.name: source}

    def get_info(self) -> dict:
        """
        Get metadata about the file.

        Returns:
            Dict with file info (row_count, column_count, delimiter, etc.)
        """
        table = self.parser.parse(decode_text(self.data))
        return {
            'file_name': self.name,
            'file_size': self.size,
            'row_count': len(table.rows),
            'column_count': len(table.headers),
            'delimiter': table.delimiter,
            'headers': table.headers,
        }


def parse_delimited(text: str) -> Tuple[List[str], List[List[str]]]:
    """Parse text and return (headers, rows)."""
    table = TabularParser().parse(text)
    return table.headers, table.rows
