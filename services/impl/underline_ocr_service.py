"""
Underline OCR Service Implementation.

Orchestrates underline-based text extraction from a book page photo:
1. Recognition: run the text recognizer on the full page
2. Filtering: keep main-body text regions
3. Underline detection: scan pixels beneath each region for pencil marks
4. Matching: pair detected marks with their text regions
5. Assembly: join the underlined regions (or all regions) in reading order

When no underline is matched the service falls back to returning all
main-body text. Optionally saves debug output at each step.

Follows:
- SRP: Only coordinates the extraction steps
- DIP: Depends on core component abstractions
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

from core.errors import OcrError, NoTextDetectedError, ProcessingFailedError
from core.image.image_loader import ImageSource, loadImage
from core.interfaces.region_filter_interface import IRegionFilter
from core.interfaces.text_assembler_interface import ITextAssembler
from core.interfaces.text_recognizer_interface import ITextRecognizer, TextRegion
from core.interfaces.underline_detector_interface import (
    IUnderlineDetector,
    DetectedLine
)
from core.interfaces.underline_matcher_interface import IUnderlineMatcher
from services.interfaces.underline_ocr_service_interface import (
    IUnderlineOcrService,
    OcrResult
)
from services.performance_logger import PerformanceLogger


STAGE_RECOGNIZING = "recognizing"
STAGE_FILTERING = "filtering"
STAGE_DETECTING = "detecting_underlines"
STAGE_MATCHING = "matching"
STAGE_ASSEMBLING = "assembling"

# BGR colors for the debug overlay
REGION_COLOR = (255, 128, 0)
UNDERLINED_COLOR = (0, 200, 0)
LINE_COLOR = (0, 0, 255)


class UnderlineOcrService(IUnderlineOcrService):
    """
    Extracts pencil-underlined text from book page photos.

    The service holds only its components and settings; every call works
    on its own image buffer and intermediate lists, so a single instance
    can serve concurrent callers.
    """

    SERVICE_NAME = "underline_ocr"

    def __init__(
        self,
        textRecognizer: ITextRecognizer,
        regionFilter: IRegionFilter,
        underlineDetector: IUnderlineDetector,
        underlineMatcher: IUnderlineMatcher,
        textAssembler: ITextAssembler,
        minRecognitionConfidence: float = 0.3,
        debugEnabled: bool = False,
        debugBasePath: str = "output/debug",
        timingEnabled: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize UnderlineOcrService.

        Args:
            textRecognizer: Text recognition engine
            regionFilter: Main-body region filter
            underlineDetector: Pencil underline detector
            underlineMatcher: Region/underline matcher
            textAssembler: Reading-order text assembler
            minRecognitionConfidence: Spans below this confidence are dropped before filtering
            debugEnabled: Enable saving debug output
            debugBasePath: Base path for debug output files
            timingEnabled: Log per-stage timing for each call
            logger: Logger instance for debug output
        """
        self._textRecognizer = textRecognizer
        self._regionFilter = regionFilter
        self._underlineDetector = underlineDetector
        self._underlineMatcher = underlineMatcher
        self._textAssembler = textAssembler
        self._minRecognitionConfidence = minRecognitionConfidence
        self._debugEnabled = debugEnabled
        self._debugBasePath = Path(debugBasePath) / self.SERVICE_NAME
        self._timingEnabled = timingEnabled
        self._logger = logger or logging.getLogger(__name__)

        if self._debugEnabled:
            self._ensureDebugDirectories()

        self._logger.info(f"UnderlineOcrService initialized (debug={debugEnabled})")

    def _ensureDebugDirectories(self) -> None:
        for subdir in ["regions", "underlines", "result"]:
            (self._debugBasePath / subdir).mkdir(parents=True, exist_ok=True)

    def extractUnderlinedText(
        self,
        image: ImageSource,
        imageId: str = ""
    ) -> OcrResult:
        imageId = imageId or datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
        pageImage = loadImage(image)

        perf = PerformanceLogger(enabled=self._timingEnabled)
        try:
            return self._process(pageImage, imageId, perf)
        except OcrError:
            raise
        except Exception as e:
            self._logger.error(f"[{imageId}] Extraction failed during '{perf.currentStage}': {e}")
            raise ProcessingFailedError(str(e)) from e
        finally:
            perf.endCycle()

    def _process(
        self,
        image: np.ndarray,
        imageId: str,
        perf: PerformanceLogger
    ) -> OcrResult:
        perf.startStage(STAGE_RECOGNIZING)
        recognized = [
            region for region in self._textRecognizer.recognize(image)
            if region.confidence >= self._minRecognitionConfidence
        ]
        if not recognized:
            self._logger.warning(f"[{imageId}] Recognizer returned no text")
            raise NoTextDetectedError()

        perf.startStage(STAGE_FILTERING)
        regions = self._regionFilter.filter(recognized)
        if not regions:
            self._logger.warning(
                f"[{imageId}] None of {len(recognized)} regions passed the filter"
            )
            raise NoTextDetectedError()
        self._saveRegionsDebug(imageId, recognized, regions)

        perf.startStage(STAGE_DETECTING)
        lines = self._underlineDetector.detect(image, regions)

        perf.startStage(STAGE_MATCHING)
        underlined = self._underlineMatcher.match(regions, lines)
        self._saveUnderlineDebug(imageId, image, regions, lines, underlined)

        perf.startStage(STAGE_ASSEMBLING)
        if underlined:
            result = OcrResult(
                text=self._textAssembler.assemble(underlined).strip(),
                underlinesDetected=True,
                totalTextRegions=len(regions),
                underlinedRegions=len(underlined)
            )
        else:
            self._logger.info(f"[{imageId}] No underlines matched, returning all text")
            result = OcrResult(
                text=self._textAssembler.assemble(regions).strip(),
                underlinesDetected=False,
                totalTextRegions=len(regions),
                underlinedRegions=0
            )
        perf.endStage()

        self._saveResultDebug(imageId, result)
        self._logger.info(
            f"[{imageId}] Extraction completed: underlines={result.underlinesDetected}, "
            f"regions={result.underlinedRegions}/{result.totalTextRegions}"
        )
        return result

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug Output
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _saveJson(self, subdir: str, filename: str, data: dict) -> None:
        path = self._debugBasePath / subdir / filename
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            self._logger.debug(f"Saved debug JSON to {path}")
        except (OSError, TypeError) as e:
            self._logger.warning(f"Failed to save debug JSON {path}: {e}")

    def _saveRegionsDebug(
        self,
        imageId: str,
        recognized: List[TextRegion],
        regions: List[TextRegion]
    ) -> None:
        """Save Steps 1-2 recognition and filtering debug output."""
        if not self._debugEnabled:
            return

        data = {
            "imageId": imageId,
            "recognized": [region.toDict() for region in recognized],
            "filtered": [region.toDict() for region in regions]
        }
        self._saveJson("regions", f"regions_{imageId}.json", data)

    def _saveUnderlineDebug(
        self,
        imageId: str,
        image: np.ndarray,
        regions: List[TextRegion],
        lines: List[DetectedLine],
        underlined: List[TextRegion]
    ) -> None:
        """Save Steps 3-4 detection and matching debug output with an overlay image."""
        if not self._debugEnabled:
            return

        data = {
            "imageId": imageId,
            "lines": [line.toDict() for line in lines],
            "underlined": [region.text for region in underlined]
        }
        self._saveJson("underlines", f"underlines_{imageId}.json", data)

        path = self._debugBasePath / "underlines" / f"overlay_{imageId}.png"
        overlay = drawUnderlineOverlay(image, regions, lines, underlined)
        if cv2.imwrite(str(path), overlay):
            self._logger.debug(f"Saved underline overlay to {path}")
        else:
            self._logger.warning(f"Failed to save underline overlay: {path}")

    def _saveResultDebug(self, imageId: str, result: OcrResult) -> None:
        if not self._debugEnabled:
            return
        self._saveJson("result", f"result_{imageId}.json", result.toDict())


def drawUnderlineOverlay(
    image: np.ndarray,
    regions: List[TextRegion],
    lines: List[DetectedLine],
    underlined: List[TextRegion]
) -> np.ndarray:
    """
    Draw region boxes and detected underlines on a copy of the image.

    Underlined regions are drawn in green, other regions in blue and
    detected lines in red.
    """
    if image.ndim == 2 or image.shape[2] == 1:
        canvas = cv2.cvtColor(image.reshape(image.shape[:2]), cv2.COLOR_GRAY2BGR)
    elif image.shape[2] == 4:
        canvas = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    else:
        canvas = image.copy()

    height, width = canvas.shape[:2]
    underlinedIds = {id(region) for region in underlined}

    for region in regions:
        color = UNDERLINED_COLOR if id(region) in underlinedIds else REGION_COLOR
        cv2.rectangle(
            canvas,
            (int(region.left * width), int((1.0 - region.top) * height)),
            (int(region.right * width), int((1.0 - region.bottom) * height)),
            color,
            2
        )

    for line in lines:
        row = int((1.0 - line.y) * height)
        cv2.line(
            canvas,
            (int(line.xStart * width), row),
            (int(line.xEnd * width), row),
            LINE_COLOR,
            2
        )

    return canvas
