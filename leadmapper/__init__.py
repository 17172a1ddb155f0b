"""Lead Mapper"""

from core import __version__
from .loaders import load_source, TabularParser
from .mappers import FieldMapper, AutoMapper
from .filters import apply_filters, FilterPipeline
from .exporters import CSVExporter
from .pipeline import BatchProcessor, run_pipeline

__all__ = [
    '__version__',
    'load_source', 'TabularParser',
    'FieldMapper', 'AutoMapper',
    'apply_filters', 'FilterPipeline',
    'CSVExporter',
    'BatchProcessor', 'run_pipeline',
]
