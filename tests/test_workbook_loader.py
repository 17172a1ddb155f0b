"""
Tests for the workbook loader.
"""

import pytest

from core.errors import NoSheetsError, UnsupportedFormatError
from core.models import RawFile
from leadmapper.loaders import WorkbookLoader, load_source

from .conftest import make_workbook


class TestWorkbookLoader:
    """Test sheet extraction from .xlsx bytes."""

    def test_sheets_in_workbook_order(self, workbook_bytes):
        sheets = WorkbookLoader("leads.xlsx", workbook_bytes).load()
        assert list(sheets) == ["Clients", "Archive"]

    def test_headers_and_rows(self, workbook_bytes):
        clients = WorkbookLoader("leads.xlsx", workbook_bytes).load()["Clients"]

        assert clients.headers == ("Nom", "Prénom", "Mobile", "Code postal", "Ville")
        assert clients.kind == "spreadsheet-sheet"
        assert clients.sheet == "Clients"
        assert clients.name == "leads.xlsx"
        # The whitespace-only row is dropped, numbers become plain strings
        assert clients.rows == (
            ("Durand", "Alice", "612345678", "35200", "Rennes"),
            ("Martin", "", "+33 7 11 22 33 44", "75000", "Paris"),
        )

    def test_sheet_names(self, workbook_bytes):
        assert WorkbookLoader("leads.xlsx", workbook_bytes).get_sheet_names() == ["Clients", "Archive"]

    def test_sheet_names_skip_unusable_sheets(self):
        data = make_workbook({"Notes": [[None, None]], "Data": [["Nom"], ["Durand"]]})
        assert WorkbookLoader("book.xlsx", data).get_sheet_names() == ["Data"]

    def test_empty_sheet_skipped(self):
        data = make_workbook({
            "Empty": [],
            "Data": [["Nom"], ["Durand"]],
        })
        sheets = WorkbookLoader("book.xlsx", data).load()
        assert list(sheets) == ["Data"]

    def test_no_usable_sheet(self):
        data = make_workbook({"Empty": []})
        with pytest.raises(NoSheetsError):
            WorkbookLoader("book.xlsx", data).load()

    def test_undecodable_workbook(self):
        with pytest.raises(UnsupportedFormatError):
            WorkbookLoader("book.xlsx", b"definitely not a zip archive").load()


class TestLoadSource:
    """Test extension dispatch."""

    def test_csv_and_txt(self):
        assert "a.csv" in load_source(RawFile("a.csv", b"Nom\nDurand"))
        assert "a.TXT" in load_source(RawFile("a.TXT", b"Nom\nDurand"))

    def test_xlsx(self, workbook_bytes):
        assert "Clients" in load_source(RawFile("leads.xlsx", workbook_bytes))

    @pytest.mark.parametrize("name", ["notes.pdf", "noextension", "data.json"])
    def test_unsupported_extension(self, name):
        with pytest.raises(UnsupportedFormatError):
            load_source(RawFile(name, b"Nom\nDurand"))

    def test_workbook_given_as_text(self):
        with pytest.raises(UnsupportedFormatError):
            load_source(RawFile("leads.xlsx", "Nom\nDurand"))
