"""
PaddleOCR Text Recognizer Implementation.

This module provides text recognition using the PaddleOCR library and
converts its pixel polygons into normalized bounding boxes with a
bottom-left origin.
Follows the Single Responsibility Principle (SRP) from SOLID.

Note: Compatible with PaddleOCR 3.x API.
"""

import logging
from typing import List, Optional

import numpy as np

from core.interfaces.text_recognizer_interface import (
    ITextRecognizer,
    TextRegion,
    BoundingBox
)


class PaddleTextRecognizer(ITextRecognizer):
    """
    Text recognizer using PaddleOCR.

    Recognized spans below minConfidence are dropped before they reach
    the rest of the pipeline.

    The engine is created lazily on first use.
    """

    def __init__(
        self,
        lang: str = 'en',
        minConfidence: float = 0.3,
        useTextlineOrientation: bool = False,
        textDetThresh: float = 0.3,
        textDetBoxThresh: float = 0.5,
        textDetLimitType: str = 'max',
        textDetLimitSideLen: int = 1920,
        device: str = 'cpu',
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize PaddleTextRecognizer.

        Args:
            lang: Language for OCR (default: 'en' for English)
            minConfidence: Spans with lower recognition score are discarded
            useTextlineOrientation: Use textline orientation classification
            textDetThresh: Text detection threshold
            textDetBoxThresh: Text detection box threshold
            textDetLimitType: Image resize limit type ('min' or 'max')
            textDetLimitSideLen: Side length limit for image resize
            device: Device for inference ('cpu' or 'gpu')
            logger: Logger instance for debug output
        """
        self._logger = logger or logging.getLogger(__name__)
        self._ocrEngine = None
        self._minConfidence = minConfidence

        # PaddleOCR 3.x API parameters
        self._config = {
            'lang': lang,
            'use_doc_orientation_classify': False,
            'use_doc_unwarping': False,
            'use_textline_orientation': useTextlineOrientation,
            'text_det_thresh': textDetThresh,
            'text_det_box_thresh': textDetBoxThresh,
            'text_rec_score_thresh': minConfidence,
            'text_det_limit_type': textDetLimitType,
            'text_det_limit_side_len': textDetLimitSideLen,
            'device': device
        }

        self._logger.info(
            f"PaddleTextRecognizer initialized with lang={lang}, device={device}, "
            f"minConfidence={minConfidence}"
        )

    def _ensureOcrEngine(self) -> None:
        """Lazily initialize PaddleOCR engine on first use."""
        if self._ocrEngine is None:
            try:
                from paddleocr import PaddleOCR
            except ImportError:
                self._logger.error(
                    "Failed to import PaddleOCR. "
                    "Please install: pip install paddlepaddle paddleocr"
                )
                raise
            self._ocrEngine = PaddleOCR(**self._config)
            self._logger.info("PaddleOCR engine initialized successfully")

    def recognize(self, image: np.ndarray) -> List[TextRegion]:
        """
        Recognize text spans with PaddleOCR.

        Args:
            image: Input page image (BGR or grayscale)

        Returns:
            Text regions with normalized, bottom-left origin boxes
        """
        self._ensureOcrEngine()

        height, width = image.shape[:2]
        rawResult = self._ocrEngine.predict(image)

        regions: List[TextRegion] = []
        for res in rawResult or []:
            recTexts = res.get('rec_texts', [])
            recScores = res.get('rec_scores', [])
            dtPolys = res.get('dt_polys', [])

            for text, score, poly in zip(recTexts, recScores, dtPolys):
                confidence = float(score)
                if confidence < self._minConfidence or not str(text).strip():
                    continue

                regions.append(TextRegion(
                    text=str(text),
                    boundingBox=polygonToBoundingBox(poly, width, height),
                    confidence=confidence
                ))

                self._logger.debug(
                    f"OCR detected: '{text}' (confidence: {confidence:.3f})"
                )

        self._logger.info(f"OCR recognized {len(regions)} text regions")
        return regions


def polygonToBoundingBox(poly, width: int, height: int) -> BoundingBox:
    """
    Convert a pixel polygon (top-left origin) to a normalized box
    with a bottom-left origin.
    """
    points = np.asarray(poly, dtype=np.float64).reshape(-1, 2)
    xs = np.clip(points[:, 0] / width, 0.0, 1.0)
    ys = np.clip(points[:, 1] / height, 0.0, 1.0)
    return BoundingBox(
        left=float(xs.min()),
        right=float(xs.max()),
        top=float(1.0 - ys.min()),
        bottom=float(1.0 - ys.max())
    )
