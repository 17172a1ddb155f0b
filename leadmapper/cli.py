"""
Lead Mapper command line

Usage:
    python run.py extract a.csv b.xlsx --auto --mobile-only
    python run.py extract leads.xlsx --sheet leads.xlsx=Export --interactive
    python run.py config
    python run.py version
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from core import __version__, get_config
from core.models import ExportOptions, FieldMapping, FileResult, FilterConfig, RawFile
from .banner import (
    console,
    setup_logging,
    show_banner,
    show_error,
    show_export_summary,
    show_filter_summary,
    show_info,
    show_preview_table,
    show_processing_summary,
    show_step,
    show_warning,
)
from .exporters import CSVExporter
from .filters import apply_filters
from .mappers import AutoMapper, InteractiveMapper
from .pipeline import BatchProcessor, build_mappings, select_sheet


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="leadmapper", description="Map, filter and export lead files.")
    parser.add_argument('-v', '--verbose', action='store_true', help="debug logging")
    sub = parser.add_subparsers(dest='command')

    extract = sub.add_parser('extract', help="extract records from CSV/TXT/XLSX/XLS files")
    extract.add_argument('files', nargs='+', type=Path)
    extract.add_argument('--mapping', type=Path, help="JSON {file: {field: [headers]}}")
    extract.add_argument('--auto', action='store_true', help="suggest mappings for unmapped files")
    extract.add_argument('--interactive', action='store_true', help="map unmapped files interactively")
    extract.add_argument('--sheet', action='append', default=[], metavar='FILE=SHEET',
                         help="sheet to use for a workbook (default: first sheet)")
    extract.add_argument('--strict', action='store_true', help="fail files with unterminated quotes")

    filters = extract.add_argument_group('filters')
    filters.add_argument('--require-phone', action='store_true')
    filters.add_argument('--require-name', action='store_true')
    filters.add_argument('--mobile-only', action='store_true', help="keep 06/07 numbers only")
    filters.add_argument('--reject-generic-postal', action='store_true', help="drop postal codes ending in 000")
    filters.add_argument('--postal-prefixes', default='', help="comma separated, e.g. 35,56,29")

    export = extract.add_argument_group('export')
    export.add_argument('--split', dest='split', action='store_true', default=None)
    export.add_argument('--no-split', dest='split', action='store_false')
    export.add_argument('--records-per-file', default=None)
    export.add_argument('--prefix', default=None)
    export.add_argument('--output-dir', type=Path, default=None)

    sub.add_parser('config', help="show configuration status")
    sub.add_parser('version', help="show version")
    return parser


def parse_sheet_args(values: Sequence[str]) -> Dict[str, str]:
    """["book.xlsx=Export"] -> {"book.xlsx": "Export"}"""
    sheets = {}
    for value in values:
        name, sep, sheet = value.partition('=')
        if not sep or not name.strip():
            show_warning(f"Ignoring --sheet {value!r} (expected FILE=SHEET)")
            continue
        sheets[name.strip()] = sheet.strip()
    return sheets


def read_files(paths: Sequence[Path]) -> List[RawFile]:
    return [RawFile(name=path.name, data=path.read_bytes()) for path in paths]


def resolve_mappings(
    loaded: Sequence[FileResult],
    mappings: Dict[str, FieldMapping],
    sheets: Dict[str, str],
    auto: bool,
    interactive: bool
) -> Dict[str, FieldMapping]:
    """Fill in mappings for loaded files that have none."""
    auto_mapper = AutoMapper()
    resolved = dict(mappings)

    for result in loaded:
        if not result.ok or result.file_name in resolved:
            continue
        table = select_sheet(result, sheets.get(result.file_name))
        suggestion = auto_mapper.suggest(table.headers)

        if interactive:
            resolved[result.file_name] = InteractiveMapper(table).map(suggestion)
        elif auto:
            confidence = auto_mapper.get_mapping_confidence(suggestion)
            summary = auto_mapper.get_mapping_summary(suggestion)
            show_info(f"{result.file_name}: auto mapping ({confidence:.0%}) {summary}")
            resolved[result.file_name] = suggestion

    return resolved


def cmd_extract(args) -> int:
    config = get_config()
    show_banner()

    show_step(1, "Load files")
    missing = [p for p in args.files if not p.is_file()]
    for path in missing:
        show_error(f"File not found: {path}")
    raw_files = read_files([p for p in args.files if p.is_file()])
    if not raw_files:
        return 1

    processor = BatchProcessor(strict=args.strict)
    with console.status("Parsing files..."):
        loaded = processor.load_files(raw_files)

    show_step(2, "Map fields")
    mappings: Dict[str, FieldMapping] = {}
    if args.mapping:
        mappings = build_mappings(json.loads(args.mapping.read_text(encoding='utf-8')))
    sheets = parse_sheet_args(args.sheet)
    auto = args.auto or not (args.mapping or args.interactive)
    mappings = resolve_mappings(loaded, mappings, sheets, auto, args.interactive)

    extraction = processor.extract(loaded, mappings, sheets)
    show_processing_summary(extraction.files)

    if not extraction.succeeded:
        show_error("No file could be processed")
        return 1
    if not extraction.records:
        show_warning("No records extracted")
        return 0

    show_step(3, "Filter")
    filter_config = FilterConfig(
        mobile_only=args.mobile_only,
        reject_generic_postal=args.reject_generic_postal,
        require_phone=args.require_phone,
        require_name=args.require_name,
        restrict_postal_prefixes=bool(args.postal_prefixes.strip()),
        allowed_postal_prefixes=args.postal_prefixes,
    )
    result = apply_filters(extraction.records, filter_config)
    show_filter_summary(result.stats)
    show_preview_table(result.records)

    show_step(4, "Export")
    options = config.export_options()
    options = ExportOptions(
        split_into_files=options.split_into_files if args.split is None else args.split,
        records_per_file=args.records_per_file if args.records_per_file is not None else options.records_per_file,
        prefix=args.prefix or options.prefix,
    )
    exporter = CSVExporter()
    payloads = exporter.export_payloads(result.records, options)
    output_dir = str(args.output_dir) if args.output_dir else None
    paths = exporter.write(payloads, output_dir)
    show_export_summary(len(result.records), [str(p) for p in paths])
    return 0


def cmd_config() -> int:
    status = get_config().get_config_status()
    console.print_json(json.dumps(status))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    setup_logging('DEBUG' if args.verbose else config.log_level)

    if args.command == 'extract':
        code = cmd_extract(args)
    elif args.command == 'config':
        code = cmd_config()
    elif args.command == 'version':
        console.print(f"Lead Mapper v{__version__}")
        code = 0
    else:
        parser.print_help()
        code = 0

    if argv is None:
        sys.exit(code)
    return code
