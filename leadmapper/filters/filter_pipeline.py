"""
Record filtering with per-stage statistics

Stages run in a fixed order, each one toggled by FilterConfig:
1. require_phone            -> removed_by_null_phone_filter
2. require_name             (not counted)
3. mobile_only              -> removed_by_portable_filter
4. reject_generic_postal    -> removed_by_postal_code_filter
5. restrict_postal_prefixes (not counted, needs at least one prefix)

A stage's count is what it removed from the survivors of the previous
stages, so a record rejected by two stages is counted once, at the first.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence

from core.models import ExtractedRecord, FilterConfig, FilterStats
from ..normalizers import (
    is_name_present,
    is_phone_present,
    is_portable_number,
    is_valid_postal_code,
    is_postal_allowed,
    parse_prefixes,
)


logger = logging.getLogger(__name__)

Predicate = Callable[[ExtractedRecord], bool]


@dataclass
class FilterResult:
    """Surviving records (input order) and the run's statistics."""
    records: List[ExtractedRecord]
    stats: FilterStats


def _keep(records: List[ExtractedRecord], predicate: Predicate) -> List[ExtractedRecord]:
    return [record for record in records if predicate(record)]


def apply_filters(records: Sequence[ExtractedRecord], config: FilterConfig) -> FilterResult:
    """
    Run the filter stages over a record list.

    With every stage disabled the output equals the input.

    Args:
        records: Extracted records, in export order
        config: Stage toggles and allowed postal prefixes

    Returns:
        FilterResult with surviving records and counts
    """
    filtered = list(records)
    stats = FilterStats(total_records=len(filtered))

    if config.require_phone:
        before = len(filtered)
        filtered = _keep(filtered, lambda r: is_phone_present(r.phone))
        stats.removed_by_null_phone_filter = before - len(filtered)

    if config.require_name:
        filtered = _keep(filtered, lambda r: is_name_present(r.name))

    if config.mobile_only:
        before = len(filtered)
        filtered = _keep(filtered, lambda r: is_portable_number(r.phone))
        stats.removed_by_portable_filter = before - len(filtered)

    if config.reject_generic_postal:
        before = len(filtered)
        filtered = _keep(filtered, lambda r: is_valid_postal_code(r.postal_code))
        stats.removed_by_postal_code_filter = before - len(filtered)

    prefixes = parse_prefixes(config.allowed_postal_prefixes)
    if config.restrict_postal_prefixes and prefixes:
        filtered = _keep(filtered, lambda r: is_postal_allowed(r.postal_code, prefixes))

    stats.filtered_records = len(filtered)
    logger.debug("Filters kept %d of %d records", stats.filtered_records, stats.total_records)
    return FilterResult(records=filtered, stats=stats)


class FilterPipeline:
    """
    Filter a batch of records with a fixed configuration.

    Example:
        pipeline = FilterPipeline(FilterConfig(mobile_only=True))
        result = pipeline.run(records)
        print(result.stats.removed_by_portable_filter)
    """

    def __init__(self, config: FilterConfig):
        self.config = config

    def run(self, records: Sequence[ExtractedRecord]) -> FilterResult:
        return apply_filters(records, self.config)

    def active_stages(self) -> List[str]:
        """Names of the enabled stages, in run order."""
        stages = [
            ('require_phone', self.config.require_phone),
            ('require_name', self.config.require_name),
            ('mobile_only', self.config.mobile_only),
            ('reject_generic_postal', self.config.reject_generic_postal),
            ('restrict_postal_prefixes',
             self.config.restrict_postal_prefixes and bool(parse_prefixes(self.config.allowed_postal_prefixes))),
        ]
        return [name for name, enabled in stages if enabled]
