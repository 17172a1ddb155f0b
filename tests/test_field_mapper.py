"""
Tests for field mapping and record extraction.
"""

import pytest

from core.models import FieldKind, FieldMapping, TabularSource
from leadmapper.mappers import FieldMapper, combine, extract_records, value_of


HEADERS = ("Nom", "Prénom", "Téléphone", "Ville", "Nom")


def make_table(rows, headers=HEADERS, name="a.csv", sheet=None):
    return TabularSource(
        name=name,
        headers=tuple(headers),
        rows=tuple(tuple(r) for r in rows),
        sheet=sheet,
    )


class TestValueOf:
    """Test single column lookup."""

    def test_trimmed_value(self):
        assert value_of(HEADERS, ["Durand ", "Alice"], "Nom") == "Durand"

    def test_first_duplicate_wins(self):
        assert value_of(HEADERS, ["Durand", "", "", "", "Other"], "Nom") == "Durand"

    def test_missing_header(self):
        assert value_of(HEADERS, ["Durand"], "Adresse") == ""

    def test_short_row(self):
        assert value_of(HEADERS, ["Durand"], "Ville") == ""


class TestCombine:
    """Test many-to-one field folding."""

    def test_joined_with_space(self):
        assert combine(HEADERS, ["Durand", "Alice"], ["Prénom", "Nom"]) == "Alice Durand"

    def test_empty_values_dropped(self):
        assert combine(HEADERS, ["Durand", "  "], ["Nom", "Prénom"]) == "Durand"

    def test_no_headers(self):
        assert combine(HEADERS, ["Durand"], []) == ""


class TestFieldMapping:
    """Test the immutable mapping object."""

    def test_add_and_remove(self):
        mapping = FieldMapping().add("name", "Nom").add(FieldKind.NAME, "Prénom")
        assert mapping.name == ("Nom", "Prénom")

        removed = mapping.remove("name", "Nom")
        assert removed.name == ("Prénom",)
        assert mapping.name == ("Nom", "Prénom")

    def test_add_is_idempotent(self):
        mapping = FieldMapping().add("phone", "Mobile")
        assert mapping.add("phone", "Mobile") is mapping

    def test_headers_for_deduplicates(self):
        mapping = FieldMapping(city=("Ville", "Ville"))
        assert mapping.headers_for(FieldKind.CITY) == ("Ville",)

    def test_kind_aliases(self):
        assert FieldKind.parse("postalCode") is FieldKind.POSTAL_CODE
        assert FieldKind.parse("postal_code") is FieldKind.POSTAL_CODE
        with pytest.raises(ValueError):
            FieldKind.parse("email")

    def test_from_dict(self):
        mapping = FieldMapping.from_dict({"name": ["Nom", "Prénom"], "postalCode": "CP"})
        assert mapping.name == ("Nom", "Prénom")
        assert mapping.postal_code == ("CP",)
        assert mapping.is_header_mapped("CP")
        assert not mapping.is_header_mapped("Ville")
        assert mapping.mapped_kinds() == [FieldKind.NAME, FieldKind.POSTAL_CODE]


class TestFieldMapper:
    """Test record extraction from a table."""

    def test_extract(self):
        table = make_table([
            ["Durand", "Alice", "06 12 34 56 78", "Rennes"],
            ["Martin", "", "+33 7 12 34 56 78", "Brest"],
        ])
        mapping = FieldMapping(name=("Nom", "Prénom"), phone=("Téléphone",), city=("Ville",))

        records = FieldMapper(mapping).extract(table)

        assert [r.name for r in records] == ["Durand Alice", "Martin"]
        assert [r.phone for r in records] == ["0612345678", "0712345678"]
        assert records[0].city == "Rennes"
        assert records[0].address == ""
        assert records[0].source_file == "a.csv"
        assert records[0].sheet is None

    def test_fully_empty_records_dropped(self):
        table = make_table([
            ["", "", "", "", "ignored"],
            ["Durand", "", "", ""],
            [],
        ])
        mapping = FieldMapping(name=("Nom",), city=("Ville",))

        records = FieldMapper(mapping).extract(table)

        assert len(records) == 1
        assert records[0].name == "Durand"

    def test_sheet_attached(self):
        table = make_table([["Durand"]], sheet="Clients", name="b.xlsx")
        records = FieldMapper(FieldMapping(name=("Nom",))).extract(table)
        assert records[0].sheet == "Clients"
        assert records[0].source_file == "b.xlsx"

    def test_mapped_fields(self):
        mapper = FieldMapper(FieldMapping(phone=("Téléphone",), name=("Nom",)))
        assert mapper.mapped_fields() == ["name", "phone"]

    def test_extract_records_shortcut(self):
        table = make_table([
            ["Durand", "Alice", "06 12 34 56 78", "Rennes"],
            ["", "", "", ""],
        ])
        mapping = FieldMapping(name=("Nom", "Prénom"), phone=("Téléphone",))
        records = extract_records(table, mapping)

        assert [(r.name, r.phone) for r in records] == [("Durand Alice", "0612345678")]
        assert records == FieldMapper(mapping).extract(table)
