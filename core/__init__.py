# Core module for BookQuotes underline OCR
# Contains interfaces and implementations for recognition, filtering,
# underline detection, matching and text assembly

from core.errors import (
    OcrError,
    ImageConversionFailedError,
    NoTextDetectedError,
    ProcessingFailedError
)
from core.interfaces.text_recognizer_interface import ITextRecognizer, TextRegion, BoundingBox
from core.interfaces.underline_detector_interface import IUnderlineDetector, DetectedLine
from core.filter.main_body_region_filter import MainBodyRegionFilter
from core.underline.pencil_underline_detector import PencilUnderlineDetector
from core.underline.underline_matcher import UnderlineMatcher
from core.assembler.reading_order_assembler import ReadingOrderAssembler

__all__ = [
    "OcrError",
    "ImageConversionFailedError",
    "NoTextDetectedError",
    "ProcessingFailedError",
    "ITextRecognizer",
    "TextRegion",
    "BoundingBox",
    "IUnderlineDetector",
    "DetectedLine",
    "MainBodyRegionFilter",
    "PencilUnderlineDetector",
    "UnderlineMatcher",
    "ReadingOrderAssembler",
]
