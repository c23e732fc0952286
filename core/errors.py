"""
OCR Error Module.

Defines the exceptions raised by the underline OCR pipeline.
Every error is terminal for a single extraction call and carries a
user-facing message that the quote-entry form can display as-is.
"""


class OcrError(Exception):
    """
    Base class for all underline OCR errors.

    Attributes:
        userMessage: Message suitable for showing to the user.
    """

    userMessage: str = "Text extraction failed."

    def __init__(self, message: str = ""):
        super().__init__(message or self.userMessage)


class ImageConversionFailedError(OcrError):
    """Input image could not be decoded into a processable bitmap."""

    userMessage = (
        "Failed to process the image. "
        "Please try again with a different photo."
    )


class NoTextDetectedError(OcrError):
    """Recognizer returned nothing, or nothing survived region filtering."""

    userMessage = (
        "No text was detected in the image. "
        "Please ensure the text is clear and well-lit."
    )


class ProcessingFailedError(OcrError):
    """Unexpected failure inside recognition or analysis."""

    def __init__(self, reason: str):
        self.reason = reason
        self.userMessage = f"Processing failed: {reason}"
        super().__init__(self.userMessage)
