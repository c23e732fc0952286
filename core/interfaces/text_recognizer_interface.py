"""
Text Recognizer Interface Module.

This module defines the interface and data classes for text recognition.
Recognized regions use normalized coordinates (0..1) with the vertical axis
increasing upward, i.e. the origin is at the bottom-left of the image.
Follows the Interface Segregation Principle (ISP) from SOLID.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List
import numpy as np


@dataclass(frozen=True)
class BoundingBox:
    """
    Normalized bounding box with a bottom-left origin.

    Attributes:
        left: Left edge (0 = image left)
        right: Right edge
        top: Top edge (1 = image top)
        bottom: Bottom edge (0 = image bottom)
    """
    left: float
    right: float
    top: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    @property
    def centerX(self) -> float:
        return (self.left + self.right) / 2


@dataclass(frozen=True)
class TextRegion:
    """
    A single span of recognized text.

    Attributes:
        text: Recognized text content
        boundingBox: Normalized bounding box (bottom-left origin)
        confidence: Recognition confidence score (0-1)
    """
    text: str
    boundingBox: BoundingBox
    confidence: float

    @property
    def left(self) -> float:
        return self.boundingBox.left

    @property
    def right(self) -> float:
        return self.boundingBox.right

    @property
    def top(self) -> float:
        return self.boundingBox.top

    @property
    def bottom(self) -> float:
        return self.boundingBox.bottom

    @property
    def width(self) -> float:
        return self.boundingBox.width

    @property
    def height(self) -> float:
        return self.boundingBox.height

    @property
    def centerX(self) -> float:
        return self.boundingBox.centerX

    def toDict(self) -> dict:
        """Serialize for debug output."""
        return {
            "text": self.text,
            "confidence": self.confidence,
            "boundingBox": {
                "left": self.left,
                "right": self.right,
                "top": self.top,
                "bottom": self.bottom
            }
        }


class ITextRecognizer(ABC):
    """
    Interface for a text recognition engine.

    Implementations run OCR on a full page image and return every
    recognized span. The call is blocking and returns a fully populated
    list; engine failures propagate as exceptions.
    """

    @abstractmethod
    def recognize(self, image: np.ndarray) -> List[TextRegion]:
        """
        Recognize text in an image.

        Args:
            image: Input page image (BGR or grayscale)

        Returns:
            List of recognized text regions in normalized coordinates
        """
        pass
