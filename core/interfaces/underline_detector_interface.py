"""
Underline Detector Interface Module.

Defines the abstract interface for finding hand-drawn underlines
beneath recognized text regions.
Follows ISP: Focused interface for underline detection only.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List
import numpy as np

from core.interfaces.text_recognizer_interface import TextRegion


@dataclass(frozen=True)
class DetectedLine:
    """
    A horizontal dark streak interpreted as a pencil underline.

    Attributes:
        y: Vertical position (normalized, bottom-left origin).
        xStart: Left end of the streak (normalized).
        xEnd: Right end of the streak (normalized).
        avgBrightness: Mean intensity of the streak pixels (0-1, lower = darker).
    """
    y: float
    xStart: float
    xEnd: float
    avgBrightness: float

    @property
    def width(self) -> float:
        return self.xEnd - self.xStart

    @property
    def centerX(self) -> float:
        return (self.xStart + self.xEnd) / 2

    def toDict(self) -> dict:
        return {
            "y": self.y,
            "xStart": self.xStart,
            "xEnd": self.xEnd,
            "avgBrightness": self.avgBrightness
        }


class IUnderlineDetector(ABC):
    """
    Abstract interface for underline detection.

    Implementations scan the pixels beneath each text region and
    return at most one candidate line per region.
    """

    @abstractmethod
    def detect(
        self,
        image: np.ndarray,
        regions: List[TextRegion]
    ) -> List[DetectedLine]:
        """
        Detect underline candidates beneath the given text regions.

        Args:
            image: Original page image (BGR or grayscale).
            regions: Filtered text regions to search beneath.

        Returns:
            Deduplicated list of detected lines.
        """
        pass
