"""
Workbook loader

Reads .xlsx (openpyxl) and .xls (xlrd) workbooks through pandas and
turns every sheet into a TabularSource:
- First row is the header row
- Cells coerced to trimmed strings, blanks become ""
- Wholly blank rows are dropped
"""

import io
import logging
from typing import Dict, List

import pandas as pd

from core.errors import NoSheetsError, UnsupportedFormatError
from core.models import TabularSource
from ..normalizers import normalize_cell, is_blank_row
from .base import SourceLoader


logger = logging.getLogger(__name__)

ENGINES = {
    'xlsx': 'openpyxl',
    'xls': 'xlrd',
}


def frame_to_table(frame: pd.DataFrame) -> List[List[str]]:
    """Convert a header-less sheet frame to a list of string rows."""
    return [
        [normalize_cell(value) for value in row]
        for row in frame.itertuples(index=False, name=None)
    ]


class WorkbookLoader(SourceLoader):
    """
    Load every sheet of a workbook held in memory.

    Example:
        loader = WorkbookLoader("leads.xlsx", raw_bytes)
        sheets = loader.load()
        first = next(iter(sheets.values()))
    """

    kind = 'spreadsheet-sheet'

    def __init__(self, name: str, data: bytes):
        """
        Initialize workbook loader.

        Args:
            name: Original file name (its extension picks the engine)
            data: Raw workbook bytes
        """
        super().__init__(name, len(data))
        self.data = data
        extension = name.rsplit('.', 1)[-1].lower() if '.' in name else 'xlsx'
        self.engine = ENGINES.get(extension, 'openpyxl')

    def load(self) -> Dict[str, TabularSource]:
        """
        Parse all sheets.

        Returns:
            Dict of sheet name -> TabularSource, in workbook order

        Raises:
            UnsupportedFormatError: If the bytes are not a readable workbook
            NoSheetsError: If no sheet has a header row
        """
        frames = self._read_frames()

        sheets: Dict[str, TabularSource] = {}
        for sheet_name, frame in frames.items():
            table = frame_to_table(frame)
            if not table or not any(table[0]):
                logger.debug("%s: sheet %r has no header row, skipped", self.name, sheet_name)
                continue

            headers = tuple(table[0])
            rows = tuple(tuple(row) for row in table[1:] if not is_blank_row(row))

            sheets[str(sheet_name)] = TabularSource(
                name=self.name,
                headers=headers,
                rows=rows,
                size=self.size,
                kind='spreadsheet-sheet',
                sheet=str(sheet_name),
            )

        if not sheets:
            raise NoSheetsError("No sheets found in Excel file")

        logger.debug("%s: %d usable sheet(s)", self.name, len(sheets))
        return sheets

    def _read_frames(self) -> Dict[str, pd.DataFrame]:
        try:
            return pd.read_excel(
                io.BytesIO(self.data),
                sheet_name=None,
                header=None,
                dtype=object,
                engine=self.engine,
            )
        except ImportError:
            raise
        except Exception as e:
            raise UnsupportedFormatError(f"Cannot read workbook {self.name}: {e}") from e

    def get_sheet_names(self) -> List[str]:
        return list(self.load().keys())
