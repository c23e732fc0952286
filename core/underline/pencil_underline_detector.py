"""
Pencil Underline Detector Module

Finds hand-drawn pencil underlines beneath recognized text regions by
scanning raw grayscale pixel rows for long horizontal dark streaks.

Pencil marks are darker than the paper but lighter than printed ink,
so a streak pixel must lie strictly between a fixed noise floor and an
adaptive dark threshold derived from the measured page brightness:

    threshold = clamp(pageAverage - thresholdOffset, minThreshold, maxThreshold)

Follows SRP: Only handles underline detection.
"""

import logging
from typing import List, Optional, Tuple

import cv2
import numpy as np

from core.interfaces.text_recognizer_interface import TextRegion
from core.interfaces.underline_detector_interface import (
    IUnderlineDetector,
    DetectedLine
)


logger = logging.getLogger(__name__)


class PencilUnderlineDetector(IUnderlineDetector):
    """
    Underline detector for pencil marks on book pages.

    Process per image:
    1. Convert to grayscale and estimate page brightness on a coarse grid
    2. Derive the adaptive dark threshold
    3. For each region, scan a window just beneath the text for the
       longest qualifying horizontal run of dark pixels
    4. Convert the winning run to a normalized DetectedLine
    5. Merge lines that describe the same physical mark

    Only the single longest run is kept per region.
    """

    def __init__(
        self,
        sampleStep: int = 10,
        thresholdOffset: float = 25.0,
        minThreshold: float = 50.0,
        maxThreshold: float = 200.0,
        noiseFloor: int = 30,
        topTolerancePx: int = 2,
        minSearchDepthPx: int = 20,
        searchDepthRatio: float = 0.5,
        horizontalPaddingPx: int = 10,
        minSearchWidthPx: int = 20,
        minRunRatio: float = 1.0 / 3.0,
        dedupVerticalDistance: float = 0.008,
        dedupHorizontalDistance: float = 0.1
    ):
        """
        Initialize PencilUnderlineDetector.

        Args:
            sampleStep: Grid step (pixels) for page brightness sampling.
            thresholdOffset: How much darker than the page a mark must be.
            minThreshold: Lower clamp for the adaptive threshold.
            maxThreshold: Upper clamp for the adaptive threshold.
            noiseFloor: Pixels at or below this are ink/noise, not pencil.
            topTolerancePx: Search starts this many pixels above the text bottom.
            minSearchDepthPx: Minimum search depth below the text.
            searchDepthRatio: Search depth as a fraction of the text pixel height.
            horizontalPaddingPx: Search window padding on each side.
            minSearchWidthPx: Narrower windows are skipped.
            minRunRatio: Minimum run length as a fraction of the window width.
            dedupVerticalDistance: Normalized vertical distance for merging lines.
            dedupHorizontalDistance: Normalized center distance for merging lines.
        """
        self._sampleStep = sampleStep
        self._thresholdOffset = thresholdOffset
        self._minThreshold = minThreshold
        self._maxThreshold = maxThreshold
        self._noiseFloor = noiseFloor
        self._topTolerancePx = topTolerancePx
        self._minSearchDepthPx = minSearchDepthPx
        self._searchDepthRatio = searchDepthRatio
        self._horizontalPaddingPx = horizontalPaddingPx
        self._minSearchWidthPx = minSearchWidthPx
        self._minRunRatio = minRunRatio
        self._dedupVerticalDistance = dedupVerticalDistance
        self._dedupHorizontalDistance = dedupHorizontalDistance

        logger.info(
            f"PencilUnderlineDetector initialized: thresholdOffset={thresholdOffset}, "
            f"clamp=[{minThreshold}, {maxThreshold}], minRunRatio={minRunRatio:.3f}"
        )

    def detect(
        self,
        image: np.ndarray,
        regions: List[TextRegion]
    ) -> List[DetectedLine]:
        gray = self.toGrayscale(image)
        height, width = gray.shape[:2]

        pageAverage = self.estimatePageBrightness(gray)
        threshold = self.computeDarkThreshold(pageAverage)

        logger.debug(
            f"Page brightness={pageAverage:.1f}, dark threshold={threshold:.1f} "
            f"({width}x{height})"
        )

        lines: List[DetectedLine] = []
        for region in regions:
            window = self._searchWindow(region, width, height)
            if window is None:
                continue

            run = self._findLongestRun(gray, window, threshold)
            if run is None:
                continue

            row, startCol, endCol, avgIntensity = run
            lines.append(DetectedLine(
                y=1.0 - row / height,
                xStart=startCol / width,
                xEnd=endCol / width,
                avgBrightness=avgIntensity / 255.0
            ))

        deduplicated = self.deduplicate(lines)
        logger.info(
            f"Detected {len(deduplicated)} underlines "
            f"({len(lines)} candidates across {len(regions)} regions)"
        )
        return deduplicated

    @staticmethod
    def toGrayscale(image: np.ndarray) -> np.ndarray:
        """Convert a BGR, BGRA or grayscale image to single-channel uint8."""
        if image.ndim == 2:
            gray = image
        elif image.shape[2] == 1:
            gray = image[:, :, 0]
        elif image.shape[2] == 4:
            gray = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
        else:
            gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        return gray.astype(np.uint8, copy=False)

    def estimatePageBrightness(self, gray: np.ndarray) -> float:
        """Average intensity sampled every sampleStep pixels in each axis."""
        samples = gray[::self._sampleStep, ::self._sampleStep]
        return float(samples.mean())

    def computeDarkThreshold(self, pageAverage: float) -> float:
        return float(np.clip(
            pageAverage - self._thresholdOffset,
            self._minThreshold,
            self._maxThreshold
        ))

    def _searchWindow(
        self,
        region: TextRegion,
        width: int,
        height: int
    ) -> Optional[Tuple[int, int, int, int]]:
        """
        Pixel window (top, bottom, left, right) directly beneath a region.

        Normalized boxes have their origin at the bottom, pixel rows at the
        top, so the vertical axis is flipped here.
        """
        textTop = int((1.0 - region.top) * height)
        textBottom = int((1.0 - region.bottom) * height)
        textLeft = int(region.left * width)
        textRight = int(region.right * width)
        textHeight = textBottom - textTop

        depth = max(int(textHeight * self._searchDepthRatio), self._minSearchDepthPx)
        top = max(0, textBottom - self._topTolerancePx)
        bottom = min(height, textBottom + depth)
        left = max(0, textLeft - self._horizontalPaddingPx)
        right = min(width, textRight + self._horizontalPaddingPx)

        if right - left < self._minSearchWidthPx or bottom <= top:
            logger.debug(f"Skipping region '{region.text[:20]}': search window too small")
            return None

        return top, bottom, left, right

    def _findLongestRun(
        self,
        gray: np.ndarray,
        window: Tuple[int, int, int, int],
        threshold: float
    ) -> Optional[Tuple[int, int, int, float]]:
        """
        Longest qualifying dark run in the window.

        Returns:
            (row, startCol, endCol, avgIntensity) in image pixels, endCol
            exclusive, or None if no run is long enough.
        """
        top, bottom, left, right = window
        minRunLength = (right - left) * self._minRunRatio

        best = None
        bestLength = 0
        for row in range(top, bottom):
            pixels = gray[row, left:right]
            mask = (pixels > self._noiseFloor) & (pixels < threshold)
            if not mask.any():
                continue

            # Run boundaries from the edges of the padded mask
            edges = np.diff(np.concatenate(([0], mask.astype(np.int8), [0])))
            starts = np.flatnonzero(edges == 1)
            ends = np.flatnonzero(edges == -1)
            lengths = ends - starts

            idx = int(np.argmax(lengths))
            length = int(lengths[idx])
            if length < minRunLength or length <= bestLength:
                continue

            start, end = int(starts[idx]), int(ends[idx])
            bestLength = length
            best = (
                row,
                left + start,
                left + end,
                float(pixels[start:end].mean())
            )

        return best

    def deduplicate(self, lines: List[DetectedLine]) -> List[DetectedLine]:
        """Collapse lines that describe the same physical mark."""
        kept: List[DetectedLine] = []
        for line in lines:
            duplicate = any(
                abs(line.y - other.y) < self._dedupVerticalDistance
                and abs(line.centerX - other.centerX) < self._dedupHorizontalDistance
                for other in kept
            )
            if not duplicate:
                kept.append(line)
        return kept
