"""
Abstract base class for source loaders
"""

from abc import ABC, abstractmethod
from typing import Dict

from core.models import TabularSource


class SourceLoader(ABC):
    """
    Abstract base class for turning one uploaded file into tables.

    All loaders must implement the load() method which returns an
    ordered mapping of table name to TabularSource:
    - delimited text: a single entry keyed by the file name
    - workbooks: one entry per usable sheet, in workbook order
    """

    kind: str = ''

    def __init__(self, name: str, size: int = 0):
        self.name = name
        self.size = size

    @abstractmethod
    def load(self) -> Dict[str, TabularSource]:
        """
        Parse the file.

        Returns:
            Dict of table name -> TabularSource

        Raises:
            LeadMapperError subclass on failure
        """
        pass
