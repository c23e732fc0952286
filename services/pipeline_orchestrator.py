"""
Pipeline Orchestrator Module.

Creates ConfigService and wires the underline OCR pipeline components
with parameters from config.

Pipeline Steps:
1. S1 Recognition: Recognize text spans with PaddleOCR
2. S2 Region Filter: Keep main-body text regions
3. S3 Underline Detection: Find pencil marks beneath text
4. S4 Underline Matching: Pair marks with text regions
5. S5 Text Assembly: Join text in reading order

Follows:
- SRP: Only handles pipeline construction
- DIP: Components receive parameters, not IConfigService
"""

import logging
from typing import Optional

from core.assembler.reading_order_assembler import ReadingOrderAssembler
from core.filter.main_body_region_filter import MainBodyRegionFilter
from core.image.image_loader import ImageSource
from core.interfaces.text_recognizer_interface import ITextRecognizer
from core.ocr.paddle_text_recognizer import PaddleTextRecognizer
from core.underline.pencil_underline_detector import PencilUnderlineDetector
from core.underline.underline_matcher import UnderlineMatcher
from services.impl.config_service import ConfigService
from services.impl.underline_ocr_service import UnderlineOcrService
from services.interfaces.underline_ocr_service_interface import OcrResult


class PipelineOrchestrator:
    """
    Builds and exposes the underline OCR pipeline.

    Responsibilities:
    - Initialize ConfigService
    - Create all pipeline components with parameters from config
    - Provide the extraction entry point
    """

    def __init__(
        self,
        configPath: str = "config/application_config.json",
        textRecognizer: Optional[ITextRecognizer] = None,
        debugEnabled: Optional[bool] = None
    ):
        """
        Initialize the pipeline orchestrator.

        Args:
            configPath: Path to the application configuration file.
            textRecognizer: Recognizer to use instead of the configured PaddleOCR one.
            debugEnabled: Overrides debug.enabled from config when given.
        """
        self._logger = logging.getLogger(__name__)

        self._configService = ConfigService(configPath)
        if debugEnabled is not None:
            self._configService.setDebugEnabled(debugEnabled)

        self._underlineOcrService = self._createService(textRecognizer)

        self._logger.info("PipelineOrchestrator initialized successfully")

    def _createService(self, textRecognizer: Optional[ITextRecognizer]) -> UnderlineOcrService:
        config = self._configService

        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S1 Recognition
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        if textRecognizer is None:
            textRecognizer = PaddleTextRecognizer(
                lang=config.getOcrLang(),
                minConfidence=config.getRecognitionMinConfidence(),
                useTextlineOrientation=config.isUseTextlineOrientation(),
                textDetThresh=config.getTextDetThresh(),
                textDetBoxThresh=config.getTextDetBoxThresh(),
                textDetLimitSideLen=config.getTextDetLimitSideLen(),
                device=config.getOcrDevice()
            )

        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S2 Region Filter
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        regionFilter = MainBodyRegionFilter(
            minTextLength=config.getMinTextLength(),
            minWidthRatio=config.getMinWidthRatio(),
            leftMarginTolerance=config.getLeftMarginTolerance(),
            maxLeftEdge=config.getMaxLeftEdge(),
            minConfidence=config.getFilterMinConfidence()
        )

        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S3 Underline Detection
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        underlineDetector = PencilUnderlineDetector(
            **config.getUnderlineDetectionConfig()
        )

        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S4 Underline Matching / S5 Text Assembly
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        underlineMatcher = UnderlineMatcher(
            maxGap=config.getMaxUnderlineGap(),
            minOverlapRatio=config.getMinOverlapRatio()
        )
        textAssembler = ReadingOrderAssembler(lineTolerance=config.getLineTolerance())

        return UnderlineOcrService(
            textRecognizer=textRecognizer,
            regionFilter=regionFilter,
            underlineDetector=underlineDetector,
            underlineMatcher=underlineMatcher,
            textAssembler=textAssembler,
            minRecognitionConfidence=config.getRecognitionMinConfidence(),
            debugEnabled=config.isDebugEnabled(),
            debugBasePath=config.getDebugBasePath(),
            timingEnabled=config.get("app.timingEnabled", True)
        )

    @property
    def configService(self) -> ConfigService:
        return self._configService

    @property
    def underlineOcrService(self) -> UnderlineOcrService:
        return self._underlineOcrService

    def extractUnderlinedText(self, image: ImageSource, imageId: str = "") -> OcrResult:
        """Run the full pipeline on one page image."""
        return self._underlineOcrService.extractUnderlinedText(image, imageId)
