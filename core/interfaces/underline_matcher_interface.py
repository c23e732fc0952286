"""
Underline Matcher Interface Module

Defines the abstract interface for pairing detected lines with text regions.
"""

from abc import ABC, abstractmethod
from typing import List

from core.interfaces.text_recognizer_interface import TextRegion
from core.interfaces.underline_detector_interface import DetectedLine


class IUnderlineMatcher(ABC):
    """
    Abstract interface for underline matching.
    """

    @abstractmethod
    def match(
        self,
        regions: List[TextRegion],
        lines: List[DetectedLine]
    ) -> List[TextRegion]:
        """
        Return the regions judged underlined.

        Args:
            regions: Filtered text regions.
            lines: Detected underline candidates.

        Returns:
            Underlined regions in input order.
        """
        pass
