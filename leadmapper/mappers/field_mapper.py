"""
Field mapper

Resolves a FieldMapping against one parsed table and produces the
ExtractedRecord list for it. Several source columns can feed one
canonical field: their values are joined with a single space.
"""

import logging
from typing import Dict, List, Sequence

from core.models import ExtractedRecord, FieldKind, FieldMapping, TabularSource
from ..normalizers import clean_phone_number


logger = logging.getLogger(__name__)


def value_of(headers: Sequence[str], row: Sequence[str], header: str) -> str:
    """
    Value of a column in a row.

    First occurrence of the header wins. Missing headers and short rows
    give an empty string.
    """
    try:
        index = list(headers).index(header)
    except ValueError:
        return ''
    if index >= len(row):
        return ''
    return (row[index] or '').strip()


def combine(headers: Sequence[str], row: Sequence[str], header_list: Sequence[str]) -> str:
    """
    Fold several columns into one value.

    Examples:
        >>> combine(['Nom', 'Prénom'], ['Durand', 'Alice'], ['Nom', 'Prénom'])
        "Durand Alice"

        >>> combine(['Nom', 'Prénom'], ['Durand', ''], ['Nom', 'Prénom'])
        "Durand"
    """
    values = [value_of(headers, row, header) for header in header_list]
    return ' '.join(v for v in values if v).strip()


class FieldMapper:
    """
    Extract canonical records from one table.

    Example:
        mapper = FieldMapper(mapping)
        records = mapper.extract(table)
    """

    def __init__(self, mapping: FieldMapping):
        self.mapping = mapping
        self._header_lists = {kind: mapping.headers_for(kind) for kind in FieldKind}

    def map_row(self, table: TabularSource, row: Sequence[str]) -> ExtractedRecord:
        """Build one record; the phone is always stored normalized."""
        values: Dict[str, str] = {
            kind.attr: combine(table.headers, row, headers)
            for kind, headers in self._header_lists.items()
        }
        values['phone'] = clean_phone_number(values['phone'])

        return ExtractedRecord(
            source_file=table.name,
            sheet=table.sheet,
            **values
        )

    def extract(self, table: TabularSource) -> List[ExtractedRecord]:
        """
        Map every row of the table.

        Records whose five fields are all empty are dropped; row order is kept.
        """
        records = []
        for row in table.rows:
            record = self.map_row(table, row)
            if not record.is_empty():
                records.append(record)

        dropped = table.row_count - len(records)
        if dropped:
            logger.debug("%s: %d empty record(s) dropped", table.name, dropped)
        return records

    def mapped_fields(self) -> List[str]:
        return [kind.value for kind in self.mapping.mapped_kinds()]


def extract_records(table: TabularSource, mapping: FieldMapping) -> List[ExtractedRecord]:
    return FieldMapper(mapping).extract(table)
