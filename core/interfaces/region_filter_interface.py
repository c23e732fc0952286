"""
Region Filter Interface Module

Defines the abstract interface for selecting main-body text regions.
"""

from abc import ABC, abstractmethod
from typing import List

from core.interfaces.text_recognizer_interface import TextRegion


class IRegionFilter(ABC):
    """
    Abstract interface for text region filtering.

    Implementations drop regions unlikely to be main-body text
    (margin notes, page numbers, running headers, noise).
    """

    @abstractmethod
    def filter(self, regions: List[TextRegion]) -> List[TextRegion]:
        """
        Select the main-body regions.

        Args:
            regions: All recognized regions for one image.

        Returns:
            Retained regions in input order, empty if none qualify.
        """
        pass
