"""
Batch pipeline

Parses and maps several files in a thread pool, then merges the records
in the caller's file order before filtering:

    RawFile -> loader -> TabularSource -> FieldMapper -> ExtractedRecord
            -> merge (file order) -> FilterPipeline

A failing file is reported in its FileResult and never aborts the batch.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from core.errors import LeadMapperError, ParseTimeoutError
from core.models import ExtractedRecord, FieldMapping, FileResult, FilterConfig, RawFile, TabularSource
from .filters import FilterResult, apply_filters
from .loaders import load_source
from .mappers import AutoMapper, FieldMapper


logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """Merged records plus one FileResult per input file, in input order."""
    records: List[ExtractedRecord] = field(default_factory=list)
    files: List[FileResult] = field(default_factory=list)

    @property
    def failed(self) -> List[FileResult]:
        return [f for f in self.files if not f.ok]

    @property
    def succeeded(self) -> List[FileResult]:
        return [f for f in self.files if f.ok]


@dataclass
class PipelineResult:
    """Everything one end-to-end run produces."""
    extraction: ExtractionResult
    filtered: FilterResult

    @property
    def records(self) -> List[ExtractedRecord]:
        return self.filtered.records


def _error_result(name: str, error: Exception) -> FileResult:
    return FileResult(file_name=name, status='error', message=str(error) or type(error).__name__)


def load_file(raw: RawFile, strict: bool = False) -> FileResult:
    """
    Parse one file, capturing failures.

    Returns:
        FileResult holding the parsed tables on success
    """
    try:
        tables = load_source(raw, strict=strict)
    except LeadMapperError as e:
        logger.warning("%s: %s", raw.name, e)
        return _error_result(raw.name, e)
    except Exception as e:
        logger.exception("%s: unexpected error while parsing", raw.name)
        return _error_result(raw.name, e)

    first = next(iter(tables.values()))
    sheet_names = [t.sheet for t in tables.values() if t.sheet is not None]
    rows = sum(t.row_count for t in tables.values())

    return FileResult(
        file_name=raw.name,
        status='success',
        message=f"Loaded {rows} rows",
        sheet_names=sheet_names,
        selected_sheet=first.sheet,
        tables=tables,
    )


def select_sheet(result: FileResult, sheet: Optional[str]) -> Optional[TabularSource]:
    """Pick the requested sheet, falling back to the first one."""
    if sheet is not None:
        if sheet in result.tables:
            result.selected_sheet = sheet
        else:
            logger.warning("%s: sheet %r not found, using %r", result.file_name, sheet, result.selected_sheet)
    return result.table


def extract_file(
    result: FileResult,
    mapping: Optional[FieldMapping],
    sheet: Optional[str] = None
) -> List[ExtractedRecord]:
    """
    Map the selected table of an already loaded file.

    Updates result.record_count / mapped_fields / message in place.
    """
    if not result.ok:
        return []

    table = select_sheet(result, sheet)
    if table is None:
        return []

    if mapping is None or mapping.is_empty():
        result.record_count = 0
        result.mapped_fields = []
        result.message = "Skipped: no field mapping"
        return []

    mapper = FieldMapper(mapping)
    records = mapper.extract(table)

    result.record_count = len(records)
    result.mapped_fields = mapper.mapped_fields()
    result.message = f"Extracted {len(records)} records"
    return records


class _TimedTask:
    """Task wrapper recording when a worker starts it."""

    def __init__(self, task: Callable[[], Any]):
        self.task = task
        self.started = threading.Event()
        self.start_time = 0.0

    def __call__(self):
        self.start_time = time.monotonic()
        self.started.set()
        return self.task()

    def remaining(self, limit: float) -> float:
        """Seconds left of limit, counted from the start of the task."""
        return max(0.0, self.start_time + limit - time.monotonic())


class BatchProcessor:
    """
    Process a batch of files concurrently.

    Example:
        processor = BatchProcessor(max_workers=4)
        extraction = processor.process(files, mappings)
        for f in extraction.failed:
            print(f.file_name, f.message)
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        file_timeout: Optional[float] = None,
        strict: bool = False
    ):
        """
        Args:
            max_workers: Thread pool size (default: from config)
            file_timeout: Seconds allowed per file, None for no limit (default: from config)
            strict: Treat unterminated quotes as errors
        """
        if max_workers is None or file_timeout is None:
            from core.config import get_config
            config = get_config()
            max_workers = max_workers or config.max_workers
            file_timeout = file_timeout if file_timeout is not None else config.file_timeout

        self.max_workers = max(1, max_workers)
        self.file_timeout = file_timeout if file_timeout and file_timeout > 0 else None
        self.strict = strict

    def _run_ordered(self, names: Sequence[str], tasks: Sequence[Callable[[], Any]]) -> List[Any]:
        """
        Run tasks in the pool and collect results in submission order.

        A task's time limit counts from the moment a worker picks it up,
        so files queued behind a slow one keep their full allowance.
        """
        timed = [_TimedTask(task) for task in tasks]
        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            futures = [executor.submit(task) for task in timed]
            results = []
            for name, task, future in zip(names, timed, futures):
                try:
                    if self.file_timeout is None:
                        results.append(future.result())
                    else:
                        task.started.wait()
                        results.append(future.result(timeout=task.remaining(self.file_timeout)))
                except FutureTimeout:
                    error = ParseTimeoutError(f"Parsing exceeded {self.file_timeout:g}s")
                    logger.warning("%s: %s", name, error)
                    results.append(_error_result(name, error))
                except Exception as e:
                    logger.exception("%s: unexpected error", name)
                    results.append(_error_result(name, e))
            return results
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def load_files(self, files: Sequence[RawFile]) -> List[FileResult]:
        """Parse every file; results follow the input order."""
        tasks = [lambda raw=raw: load_file(raw, strict=self.strict) for raw in files]
        return self._run_ordered([raw.name for raw in files], tasks)

    def extract(
        self,
        loaded: Sequence[FileResult],
        mappings: Mapping[str, FieldMapping],
        sheets: Optional[Mapping[str, str]] = None
    ) -> ExtractionResult:
        """Map already loaded files and merge the records in file order."""
        sheets = sheets or {}
        extraction = ExtractionResult(files=list(loaded))
        for result in extraction.files:
            extraction.records.extend(
                extract_file(result, mappings.get(result.file_name), sheets.get(result.file_name))
            )
        return extraction

    def process(
        self,
        files: Sequence[RawFile],
        mappings: Optional[Mapping[str, FieldMapping]] = None,
        sheets: Optional[Mapping[str, str]] = None,
        auto_map: bool = False
    ) -> ExtractionResult:
        """
        Parse and map every file concurrently.

        Args:
            files: Raw files, in the order records must be merged
            mappings: file name -> FieldMapping
            sheets: file name -> selected sheet (workbooks only)
            auto_map: Suggest a mapping for files that have none

        Returns:
            ExtractionResult with records merged in file order
        """
        mappings = dict(mappings or {})
        sheets = sheets or {}
        auto_mapper = AutoMapper() if auto_map else None

        def make_task(raw: RawFile) -> Callable[[], Tuple[FileResult, List[ExtractedRecord]]]:
            def task():
                result = load_file(raw, strict=self.strict)
                mapping = mappings.get(raw.name)
                if mapping is None and auto_mapper is not None and result.ok:
                    table = select_sheet(result, sheets.get(raw.name))
                    mapping = auto_mapper.suggest(table.headers)
                return result, extract_file(result, mapping, sheets.get(raw.name))
            return task

        outcomes = self._run_ordered(
            [raw.name for raw in files],
            [make_task(raw) for raw in files],
        )

        extraction = ExtractionResult()
        for outcome in outcomes:
            if isinstance(outcome, FileResult):
                extraction.files.append(outcome)
                continue
            result, records = outcome
            extraction.files.append(result)
            extraction.records.extend(records)

        logger.info(
            "Batch: %d file(s), %d failed, %d records",
            len(extraction.files), len(extraction.failed), len(extraction.records),
        )
        return extraction


def run_pipeline(
    files: Sequence[RawFile],
    mappings: Mapping[str, FieldMapping],
    filter_config: Optional[FilterConfig] = None,
    sheets: Optional[Mapping[str, str]] = None,
    processor: Optional[BatchProcessor] = None,
    auto_map: bool = False
) -> PipelineResult:
    """Parse, map, merge and filter a batch in one call."""
    processor = processor or BatchProcessor()
    extraction = processor.process(files, mappings, sheets, auto_map=auto_map)
    filtered = apply_filters(extraction.records, filter_config or FilterConfig())
    return PipelineResult(extraction=extraction, filtered=filtered)


def build_mappings(data: Dict[str, Dict[str, object]]) -> Dict[str, FieldMapping]:
    """Parse {file name: {field: [headers]}} (the --mapping JSON layout)."""
    return {name: FieldMapping.from_dict(fields or {}) for name, fields in data.items()}
