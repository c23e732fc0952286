"""
Text Assembler Interface Module

Defines the abstract interface for turning text regions into display text.
"""

from abc import ABC, abstractmethod
from typing import List

from core.interfaces.text_recognizer_interface import TextRegion


class ITextAssembler(ABC):
    """
    Abstract interface for reading-order text assembly.
    """

    @abstractmethod
    def assemble(self, regions: List[TextRegion]) -> str:
        """
        Join regions into one string preserving reading order.

        Args:
            regions: Regions to assemble.

        Returns:
            Lines joined by newlines, words within a line by spaces.
        """
        pass
