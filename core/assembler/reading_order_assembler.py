"""
Reading Order Assembler Module

Joins text regions into display text in reading order:
top of the page first, left to right within a visual line.
"""

from typing import List

from core.interfaces.text_assembler_interface import ITextAssembler
from core.interfaces.text_recognizer_interface import TextRegion


class ReadingOrderAssembler(ITextAssembler):
    """
    Groups regions into lines by their top edge.

    Regions are sorted by descending top edge (bottom-left origin, so the
    highest region first). A region joins the current line while its top
    edge is within lineTolerance of the previous region's; otherwise it
    starts a new line.
    """

    def __init__(self, lineTolerance: float = 0.015):
        self._lineTolerance = lineTolerance

    def groupLines(self, regions: List[TextRegion]) -> List[List[TextRegion]]:
        """Group regions into visual lines, each sorted left to right."""
        ordered = sorted(regions, key=lambda r: r.top, reverse=True)

        lines: List[List[TextRegion]] = []
        for region in ordered:
            if lines and abs(lines[-1][-1].top - region.top) < self._lineTolerance:
                lines[-1].append(region)
            else:
                lines.append([region])

        return [sorted(line, key=lambda r: r.left) for line in lines]

    def assemble(self, regions: List[TextRegion]) -> str:
        return "\n".join(
            " ".join(region.text for region in line)
            for line in self.groupLines(regions)
        )
