"""
Shared fixtures for underline OCR tests.
"""
from pathlib import Path
from typing import List

import numpy as np
import pytest

from core.interfaces.text_recognizer_interface import (
    ITextRecognizer,
    TextRegion,
    BoundingBox
)


PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = PROJECT_ROOT / "config" / "application_config.json"

PAGE_SIZE = 1000
PAPER = 220
INK = 20
PENCIL = 120


class StaticTextRecognizer(ITextRecognizer):
    """Recognizer returning a fixed list of regions."""

    def __init__(self, regions: List[TextRegion]):
        self.regions = regions
        self.calls = 0

    def recognize(self, image: np.ndarray) -> List[TextRegion]:
        self.calls += 1
        return list(self.regions)


class FailingTextRecognizer(ITextRecognizer):
    def recognize(self, image: np.ndarray) -> List[TextRegion]:
        raise RuntimeError("engine crashed")


def makeRegion(
    text: str = "A line of main body text",
    left: float = 0.1,
    right: float = 0.9,
    top: float = 0.52,
    bottom: float = 0.5,
    confidence: float = 0.9
) -> TextRegion:
    return TextRegion(
        text=text,
        boundingBox=BoundingBox(left=left, right=right, top=top, bottom=bottom),
        confidence=confidence
    )


def blankPage(size: int = PAGE_SIZE, value: int = PAPER) -> np.ndarray:
    """Grayscale-looking BGR page of uniform paper color."""
    return np.full((size, size, 3), value, dtype=np.uint8)


def drawInk(image: np.ndarray, region: TextRegion, value: int = INK) -> None:
    """Fill a region's box with printed-text darkness."""
    height, width = image.shape[:2]
    top = int((1.0 - region.top) * height)
    bottom = int((1.0 - region.bottom) * height)
    image[top:bottom, int(region.left * width):int(region.right * width)] = value


def drawPencilLine(
    image: np.ndarray,
    row: int,
    startCol: int,
    endCol: int,
    value: int = PENCIL
) -> None:
    image[row, startCol:endCol] = value


@pytest.fixture
def page() -> np.ndarray:
    return blankPage()
