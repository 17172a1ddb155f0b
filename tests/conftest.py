"""
Shared fixtures for Lead Mapper tests.
"""

import io

import pytest
from openpyxl import Workbook

from core.models import ExtractedRecord


def make_workbook(sheets):
    """Build .xlsx bytes from {sheet name: [rows]} (first sheet replaces the default one)."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for title, rows in sheets.items():
        sheet = workbook.create_sheet(title)
        for row in rows:
            sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def workbook_bytes():
    return make_workbook({
        'Clients': [
            ['Nom', 'Prénom', 'Mobile', 'Code postal', 'Ville'],
            ['Durand', 'Alice', 612345678, 35200, 'Rennes'],
            ['   ', None, None, None, None],
            ['Martin', None, '+33 7 11 22 33 44', '75000', 'Paris'],
        ],
        'Archive': [
            ['Name', 'Phone'],
            ['Smith', '0033712345678'],
        ],
    })


@pytest.fixture
def sample_records():
    return [
        ExtractedRecord(name='Alice', phone='0612345678', postal_code='35200', source_file='a.csv'),
        ExtractedRecord(name='', phone='0612345679', postal_code='35000', source_file='a.csv'),
        ExtractedRecord(name='Claire', phone='', postal_code='35200', source_file='a.csv'),
        ExtractedRecord(name='David', phone='0112345678', postal_code='56100', source_file='b.csv'),
        ExtractedRecord(name='Emma', phone='0712345678', postal_code='75000', source_file='b.csv'),
    ]
