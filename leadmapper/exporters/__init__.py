"""
Exporters for Lead Mapper
"""

from .csv_exporter import CSVExporter

__all__ = ['CSVExporter']
