"""
Services Implementation Package.

Exports all service implementations for the underline OCR pipeline.
"""

from services.impl.config_service import ConfigService
from services.impl.underline_ocr_service import UnderlineOcrService


__all__ = [
    "ConfigService",
    "UnderlineOcrService",
]
