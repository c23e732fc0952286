"""
Underline Matcher Module

Pairs detected underline streaks with the text regions they belong to.
A line belongs to a region when it sits just below the region's bottom
edge and covers enough of the region horizontally.
"""

import logging
from typing import List

from core.interfaces.text_recognizer_interface import TextRegion
from core.interfaces.underline_detector_interface import DetectedLine
from core.interfaces.underline_matcher_interface import IUnderlineMatcher


logger = logging.getLogger(__name__)


class UnderlineMatcher(IUnderlineMatcher):
    """
    Geometric matcher between text regions and detected lines.

    gap = region.bottom - line.y must satisfy 0 < gap < maxGap, and the
    horizontal overlap must exceed minOverlapRatio x region width.
    The first qualifying line is enough to mark a region underlined.
    """

    def __init__(self, maxGap: float = 0.025, minOverlapRatio: float = 0.4):
        """
        Initialize UnderlineMatcher.

        Args:
            maxGap: Maximum normalized distance between text bottom and line (exclusive).
            minOverlapRatio: Minimum overlap as a fraction of region width (exclusive).
        """
        self._maxGap = maxGap
        self._minOverlapRatio = minOverlapRatio

    def isUnderlinedBy(self, region: TextRegion, line: DetectedLine) -> bool:
        gap = region.bottom - line.y
        if not 0 < gap < self._maxGap:
            return False

        overlap = min(region.right, line.xEnd) - max(region.left, line.xStart)
        return overlap > region.width * self._minOverlapRatio

    def match(
        self,
        regions: List[TextRegion],
        lines: List[DetectedLine]
    ) -> List[TextRegion]:
        underlined = [
            region for region in regions
            if any(self.isUnderlinedBy(region, line) for line in lines)
        ]

        for region in underlined:
            logger.debug(f"Underlined: '{region.text}'")
        logger.info(f"Matched {len(underlined)}/{len(regions)} regions to {len(lines)} lines")

        return underlined
