"""
Record filters for Lead Mapper
"""

from .filter_pipeline import apply_filters, FilterPipeline, FilterResult

__all__ = [
    'apply_filters',
    'FilterPipeline',
    'FilterResult',
]
