"""
Lead Mapper Data Models
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple, Union


DEFAULT_RECORDS_PER_FILE = 8000


class FieldKind(str, Enum):
    """The five canonical output fields. Closed set."""
    NAME = 'name'
    PHONE = 'phone'
    ADDRESS = 'address'
    POSTAL_CODE = 'postalCode'
    CITY = 'city'

    @property
    def attr(self) -> str:
        """Attribute name on FieldMapping / ExtractedRecord."""
        return 'postal_code' if self is FieldKind.POSTAL_CODE else self.value

    @classmethod
    def parse(cls, value: Union[str, 'FieldKind']) -> 'FieldKind':
        """Accept 'postalCode', 'postal_code', 'POSTAL_CODE' or a member."""
        if isinstance(value, FieldKind):
            return value
        key = str(value).strip()
        for kind in cls:
            if key in (kind.value, kind.attr, kind.name):
                return kind
        raise ValueError(f"Unknown field kind: {value!r}")


@dataclass(frozen=True)
class TabularSource:
    """One parsed table: a delimited file, or one sheet of a workbook."""
    name: str
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]
    size: int = 0
    kind: Literal['delimited-text', 'spreadsheet-sheet'] = 'delimited-text'
    sheet: Optional[str] = None
    warnings: Tuple[str, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class FieldMapping:
    """Maps source columns to the 5 canonical fields (several columns per field)."""
    name: Tuple[str, ...] = ()
    phone: Tuple[str, ...] = ()
    address: Tuple[str, ...] = ()
    postal_code: Tuple[str, ...] = ()
    city: Tuple[str, ...] = ()

    def headers_for(self, kind: FieldKind) -> Tuple[str, ...]:
        """Headers assigned to a field, first occurrence kept."""
        return tuple(dict.fromkeys(getattr(self, FieldKind.parse(kind).attr)))

    def add(self, kind: Union[str, FieldKind], header: str) -> 'FieldMapping':
        kind = FieldKind.parse(kind)
        current = getattr(self, kind.attr)
        if header in current:
            return self
        return replace(self, **{kind.attr: current + (header,)})

    def remove(self, kind: Union[str, FieldKind], header: str) -> 'FieldMapping':
        kind = FieldKind.parse(kind)
        current = getattr(self, kind.attr)
        return replace(self, **{kind.attr: tuple(h for h in current if h != header)})

    def is_header_mapped(self, header: str) -> bool:
        return any(header in getattr(self, kind.attr) for kind in FieldKind)

    def mapped_kinds(self) -> List[FieldKind]:
        return [kind for kind in FieldKind if getattr(self, kind.attr)]

    def is_empty(self) -> bool:
        return not self.mapped_kinds()

    def to_dict(self) -> Dict[str, List[str]]:
        return {kind.value: list(getattr(self, kind.attr)) for kind in FieldKind}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FieldMapping':
        """
        Build a mapping from {field: header or [headers]}.

        Example:
            FieldMapping.from_dict({'name': ['Nom', 'Prénom'], 'phone': 'Mobile'})
        """
        mapping = cls()
        for key, headers in data.items():
            if isinstance(headers, str):
                headers = [headers]
            for header in headers or []:
                mapping = mapping.add(key, header)
        return mapping


@dataclass(frozen=True)
class ExtractedRecord:
    """One canonical record pulled out of a source row."""
    name: str = ""
    phone: str = ""
    address: str = ""
    postal_code: str = ""
    city: str = ""
    source_file: str = ""
    sheet: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.name or self.phone or self.address or self.postal_code or self.city)


PostalPrefixes = Union[str, Sequence[str], None]


@dataclass(frozen=True)
class FilterConfig:
    """Independent filter toggles; every stage off by default."""
    mobile_only: bool = False
    reject_generic_postal: bool = False
    require_phone: bool = False
    require_name: bool = False
    restrict_postal_prefixes: bool = False
    allowed_postal_prefixes: PostalPrefixes = None


@dataclass
class FilterStats:
    """Counts from one filter run. Recomputed every run."""
    total_records: int = 0
    filtered_records: int = 0
    removed_by_portable_filter: int = 0
    removed_by_postal_code_filter: int = 0
    removed_by_null_phone_filter: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'totalRecords': self.total_records,
            'filteredRecords': self.filtered_records,
            'removedByPortableFilter': self.removed_by_portable_filter,
            'removedByPostalCodeFilter': self.removed_by_postal_code_filter,
            'removedByNullPhoneFilter': self.removed_by_null_phone_filter,
        }


def coerce_records_per_file(value: Any, default: int = DEFAULT_RECORDS_PER_FILE) -> int:
    """Positive integer or the default (8000). Never raises."""
    if isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass
class ExportOptions:
    """Export settings. records_per_file is coerced on construction."""
    split_into_files: bool = True
    records_per_file: int = DEFAULT_RECORDS_PER_FILE
    prefix: str = 'vicidial_leads'

    def __post_init__(self):
        self.records_per_file = coerce_records_per_file(self.records_per_file)


@dataclass(frozen=True)
class RawFile:
    """A named file handed in by the caller, already read into memory."""
    name: str
    data: Union[bytes, str]

    @property
    def size(self) -> int:
        if isinstance(self.data, str):
            return len(self.data.encode('utf-8'))
        return len(self.data)

    @property
    def extension(self) -> str:
        return self.name.rsplit('.', 1)[-1].lower() if '.' in self.name else ''


@dataclass
class FileResult:
    """Per-file outcome of a batch run."""
    file_name: str
    status: Literal['success', 'error']
    message: str = ""
    record_count: int = 0
    mapped_fields: List[str] = field(default_factory=list)
    sheet_names: List[str] = field(default_factory=list)
    selected_sheet: Optional[str] = None
    tables: Dict[str, TabularSource] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == 'success'

    @property
    def table(self) -> Optional[TabularSource]:
        """The table selected for extraction (first sheet by default)."""
        if not self.tables:
            return None
        if self.selected_sheet in self.tables:
            return self.tables[self.selected_sheet]
        return next(iter(self.tables.values()))

    @property
    def headers(self) -> Tuple[str, ...]:
        table = self.table
        return table.headers if table else ()

