"""
CSV exporter

Exports extracted records to quoted CSV, optionally split into
fixed-size files for dialer bulk imports.
Saves to output/ with dated filenames.
"""

import csv
import io
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from core.models import ExportOptions, ExtractedRecord, coerce_records_per_file


logger = logging.getLogger(__name__)


def utc_today() -> date:
    """Current date in UTC; export file names use it."""
    return datetime.now(timezone.utc).date()


class CSVExporter:
    """
    Export records to CSV format.

    Every value is quoted with inner quotes doubled; the header line is not.

    Example:
        exporter = CSVExporter()
        payloads = exporter.export_payloads(records, ExportOptions(records_per_file=8000))
        exporter.write(payloads, "output")
    """

    # Standard 7-column format
    STANDARD_COLUMNS = [
        'Name',
        'Phone',
        'Address',
        'Postal Code',
        'City',
        'Source File',
        'Sheet'
    ]

    def __init__(self, columns: Optional[Sequence[str]] = None):
        """
        Args:
            columns: Subset of STANDARD_COLUMNS, in output order (default: all)
        """
        self.columns = self._check_columns(columns)

    @classmethod
    def _check_columns(cls, columns: Optional[Sequence[str]]) -> List[str]:
        columns = list(columns) if columns else list(cls.STANDARD_COLUMNS)
        unknown = [c for c in columns if c not in cls.STANDARD_COLUMNS]
        if unknown:
            raise ValueError(f"Unknown export column(s): {', '.join(unknown)}")
        return columns

    def _map_to_standard(self, record: ExtractedRecord) -> dict:
        """Map record to standard format columns."""
        return {
            'Name': record.name,
            'Phone': record.phone,
            'Address': record.address,
            'Postal Code': record.postal_code,
            'City': record.city,
            'Source File': record.source_file,
            'Sheet': record.sheet or '',
        }

    def serialize(self, records: Sequence[ExtractedRecord], columns: Optional[Sequence[str]] = None) -> str:
        """
        Serialize records to CSV text.

        Lines are joined with "\\n", without a trailing newline.

        Args:
            records: Records in output order
            columns: Per-call column subset (default: the exporter's columns)
        """
        columns = self._check_columns(columns) if columns else self.columns
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')

        buffer.write(','.join(columns) + '\n')
        for record in records:
            row = self._map_to_standard(record)
            writer.writerow([row[column] for column in columns])

        return buffer.getvalue().rstrip('\n')

    @staticmethod
    def split(records: Sequence[ExtractedRecord], max_per_chunk: int) -> List[List[ExtractedRecord]]:
        """Consecutive slices of max_per_chunk records (last may be smaller)."""
        size = coerce_records_per_file(max_per_chunk)
        return [list(records[i:i + size]) for i in range(0, len(records), size)]

    def chunk(
        self,
        records: Sequence[ExtractedRecord],
        max_per_chunk: int,
        enabled: bool = True
    ) -> List[str]:
        """
        Serialize records into one or more CSV payloads.

        Returns a single payload when splitting is disabled or every record
        fits; otherwise one payload per chunk, each with the header.
        """
        size = coerce_records_per_file(max_per_chunk)
        if not enabled or len(records) <= size:
            return [self.serialize(records)]
        return [self.serialize(part) for part in self.split(records, size)]

    def export_payloads(
        self,
        records: Sequence[ExtractedRecord],
        options: Optional[ExportOptions] = None,
        on_date: Optional[date] = None
    ) -> List[Tuple[str, str]]:
        """
        Build (filename, payload) pairs.

        Format:
            extracted_data_YYYY-MM-DD.csv                 (single file)
            {prefix}_part_{n}_YYYY-MM-DD.csv              (split)
        """
        options = options or ExportOptions()
        payloads = self.chunk(records, options.records_per_file, options.split_into_files)

        if len(payloads) == 1:
            return [(self.generate_filename(on_date=on_date), payloads[0])]

        return [
            (self.generate_filename(options.prefix, part=index, on_date=on_date), payload)
            for index, payload in enumerate(payloads, 1)
        ]

    def write(self, payloads: Sequence[Tuple[str, str]], output_dir: Optional[str] = None) -> List[Path]:
        """
        Write payloads to disk.

        Args:
            payloads: (filename, payload) pairs from export_payloads()
            output_dir: Target directory (default: uses centralized config)

        Returns:
            Paths written, in payload order
        """
        if output_dir is None:
            from core.config import get_config
            directory = get_config().get_output_dir()
        else:
            directory = Path(output_dir)
            directory.mkdir(parents=True, exist_ok=True)

        paths = []
        for filename, payload in payloads:
            path = directory / filename
            with open(path, 'w', newline='', encoding='utf-8') as f:
                f.write(payload)
            paths.append(path)
            logger.info("Wrote %s", path)

        return paths

    @staticmethod
    def generate_filename(
        prefix: Optional[str] = None,
        part: Optional[int] = None,
        on_date: Optional[date] = None
    ) -> str:
        """
        Generate a dated filename for export.

        Example: extracted_data_2024-02-15.csv or vicidial_leads_part_2_2024-02-15.csv
        The date defaults to the current UTC date.
        """
        stamp = (on_date or utc_today()).isoformat()
        if part is None:
            return f"extracted_data_{stamp}.csv"
        return f"{prefix or 'vicidial_leads'}_part_{part}_{stamp}.csv"
