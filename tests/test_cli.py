"""
Tests for the command line entry point.
"""

import json

import pytest

from core.config import reload_config
from leadmapper.cli import main, parse_sheet_args

LEADS = "Nom;Téléphone;Code postal;Ville\nDurand;06 12 34 56 78;35200;Rennes\nMartin;01 23 45 67 89;75000;Paris\n"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    for name in ('OUTPUT_DIR', 'SPLIT_INTO_FILES', 'RECORDS_PER_FILE', 'EXPORT_PREFIX', 'MAX_WORKERS'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('OUTPUT_DIR', str(tmp_path / "default_out"))
    reload_config(tmp_path / "missing.env")
    yield
    reload_config(tmp_path / "missing.env")


@pytest.fixture
def leads_file(tmp_path):
    path = tmp_path / "leads.csv"
    path.write_text(LEADS, encoding="utf-8")
    return path


class TestCommands:
    """Test the extract/config/version commands."""

    def test_version(self):
        assert main(["version"]) == 0

    def test_config(self):
        assert main(["config"]) == 0

    def test_extract_auto_mapping(self, tmp_path, leads_file):
        out = tmp_path / "out"
        code = main(["extract", str(leads_file), "--mobile-only", "--no-split", "--output-dir", str(out)])

        assert code == 0
        written = list(out.glob("extracted_data_*.csv"))
        assert len(written) == 1
        lines = written[0].read_text(encoding="utf-8").split("\n")
        assert lines[0] == "Name,Phone,Address,Postal Code,City,Source File,Sheet"
        assert lines[1:] == ['"Durand","0612345678","","35200","Rennes","leads.csv",""']

    def test_extract_with_mapping_file(self, tmp_path, leads_file):
        mapping = tmp_path / "mapping.json"
        mapping.write_text(json.dumps({"leads.csv": {"name": ["Nom"], "phone": "Téléphone"}}), encoding="utf-8")
        out = tmp_path / "out"

        code = main([
            "extract", str(leads_file), "--mapping", str(mapping),
            "--records-per-file", "1", "--prefix", "rennes", "--output-dir", str(out),
        ])

        assert code == 0
        names = sorted(p.name for p in out.glob("*.csv"))
        assert len(names) == 2
        assert names[0].startswith("rennes_part_1_")
        assert names[1].startswith("rennes_part_2_")

    def test_extract_all_files_failing(self, tmp_path):
        notes = tmp_path / "notes.pdf"
        notes.write_bytes(b"%PDF")
        assert main(["extract", str(notes), "--output-dir", str(tmp_path / "out")]) == 1

    def test_extract_missing_file(self, tmp_path):
        assert main(["extract", str(tmp_path / "nope.csv")]) == 1


class TestParseSheetArgs:
    def test_pairs(self):
        assert parse_sheet_args(["book.xlsx=Export", "bad"]) == {"book.xlsx": "Export"}
