"""
Services Interfaces Package.

Exports all service interfaces for the underline OCR pipeline.
"""

from services.interfaces.config_service_interface import IConfigService

from services.interfaces.underline_ocr_service_interface import (
    OcrResult,
    IUnderlineOcrService
)


__all__ = [
    # Config
    "IConfigService",
    # Extraction
    "OcrResult",
    "IUnderlineOcrService",
]
