"""
Underline OCR Service Interface Module.

Defines the interface for extracting underlined text from a book page photo,
and the result handed to the quote-entry form.

Follows:
- SRP: Only handles underline text extraction
- DIP: Depends on core component abstractions
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Any, Dict

from core.image.image_loader import ImageSource


@dataclass(frozen=True)
class OcrResult:
    """
    Result of underline text extraction.

    Attributes:
        text: Underlined text, or all main-body text when no underline was found.
        underlinesDetected: Whether at least one underlined region was found.
        totalTextRegions: Number of main-body regions after filtering.
        underlinedRegions: Number of regions judged underlined.
    """
    text: str
    underlinesDetected: bool
    totalTextRegions: int
    underlinedRegions: int

    def toDict(self) -> Dict[str, Any]:
        return asdict(self)


class IUnderlineOcrService(ABC):
    """
    Interface for underline text extraction.

    Each call is independent: no state is carried between images.
    """

    @abstractmethod
    def extractUnderlinedText(
        self,
        image: ImageSource,
        imageId: str = ""
    ) -> OcrResult:
        """
        Extract underlined text from a page photo.

        Args:
            image: Page image as path, encoded bytes or decoded array.
            imageId: Identifier used in logs and debug file names.

        Returns:
            OcrResult: Extracted text and detection metadata.

        Raises:
            ImageConversionFailedError: Image cannot be decoded.
            NoTextDetectedError: No main-body text was found.
            ProcessingFailedError: Recognition or analysis failed.
        """
        pass
