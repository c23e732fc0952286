"""
Underline Module

Contains implementations for pencil underline handling:
- PencilUnderlineDetector: Finds dark horizontal streaks beneath text
- UnderlineMatcher: Pairs detected streaks with text regions
"""

from core.underline.pencil_underline_detector import PencilUnderlineDetector
from core.underline.underline_matcher import UnderlineMatcher


__all__ = [
    "PencilUnderlineDetector",
    "UnderlineMatcher"
]
