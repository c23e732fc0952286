"""
Main Body Region Filter Module

Keeps only the text regions that belong to the main text column of a
photographed book page. Thresholds adapt to the page by comparing each
region against the mean geometry of all recognized regions.

Follows SRP: Only handles region selection.
"""

import logging
from typing import List

import numpy as np

from core.interfaces.region_filter_interface import IRegionFilter
from core.interfaces.text_recognizer_interface import TextRegion


logger = logging.getLogger(__name__)


class MainBodyRegionFilter(IRegionFilter):
    """
    Filters out margin notes, page numbers and low-confidence noise.

    A region is retained only if all of the following hold:
    - text has at least minTextLength characters
    - width is at least minWidthRatio x mean width
    - left edge is no further left than mean left - leftMarginTolerance
    - left edge does not start past maxLeftEdge
    - confidence is at least minConfidence
    """

    def __init__(
        self,
        minTextLength: int = 10,
        minWidthRatio: float = 0.4,
        leftMarginTolerance: float = 0.15,
        maxLeftEdge: float = 0.5,
        minConfidence: float = 0.5
    ):
        """
        Initialize MainBodyRegionFilter.

        Args:
            minTextLength: Minimum number of characters in a region.
            minWidthRatio: Minimum width relative to the mean region width.
            leftMarginTolerance: How far left of the mean left edge a region may start.
            maxLeftEdge: Regions starting right of this are treated as margin notes.
            minConfidence: Minimum recognition confidence.
        """
        self._minTextLength = minTextLength
        self._minWidthRatio = minWidthRatio
        self._leftMarginTolerance = leftMarginTolerance
        self._maxLeftEdge = maxLeftEdge
        self._minConfidence = minConfidence

        logger.info(
            f"MainBodyRegionFilter initialized: minTextLength={minTextLength}, "
            f"minWidthRatio={minWidthRatio}, minConfidence={minConfidence}"
        )

    def filter(self, regions: List[TextRegion]) -> List[TextRegion]:
        if not regions:
            return []

        meanLeft = float(np.mean([r.left for r in regions]))
        meanRight = float(np.mean([r.right for r in regions]))
        meanWidth = float(np.mean([r.width for r in regions]))

        logger.debug(
            f"Region stats: meanLeft={meanLeft:.3f}, meanRight={meanRight:.3f}, "
            f"meanWidth={meanWidth:.3f}"
        )

        minWidth = meanWidth * self._minWidthRatio
        minLeft = meanLeft - self._leftMarginTolerance

        kept = [
            region for region in regions
            if len(region.text) >= self._minTextLength
            and region.width >= minWidth
            and region.left >= minLeft
            and region.left <= self._maxLeftEdge
            and region.confidence >= self._minConfidence
        ]

        logger.info(f"Region filter kept {len(kept)}/{len(regions)} regions")
        return kept
