"""
End-to-end tests for the underline OCR service with a stub recognizer.
"""
import json

import cv2
import pytest

from core.assembler.reading_order_assembler import ReadingOrderAssembler
from core.errors import (
    ImageConversionFailedError,
    NoTextDetectedError,
    ProcessingFailedError
)
from core.filter.main_body_region_filter import MainBodyRegionFilter
from core.underline.pencil_underline_detector import PencilUnderlineDetector
from core.underline.underline_matcher import UnderlineMatcher
from services.impl.underline_ocr_service import UnderlineOcrService

from conftest import (
    FailingTextRecognizer,
    StaticTextRecognizer,
    drawInk,
    drawPencilLine,
    makeRegion
)


def createService(recognizer, **kwargs) -> UnderlineOcrService:
    return UnderlineOcrService(
        textRecognizer=recognizer,
        regionFilter=MainBodyRegionFilter(),
        underlineDetector=PencilUnderlineDetector(),
        underlineMatcher=UnderlineMatcher(),
        textAssembler=ReadingOrderAssembler(),
        **kwargs
    )


@pytest.fixture
def adjacentRegions():
    return [
        makeRegion(text="It was the best of", left=0.1, right=0.3, top=0.52, bottom=0.5),
        makeRegion(text="times, it was the worst", left=0.32, right=0.55, top=0.52, bottom=0.5),
    ]


class TestFallback:
    """Test results when no underline is found."""

    def test_single_wide_region_without_underline(self, page):
        region = makeRegion(text="Call me Ishmael. Some years ago", left=0.05, right=0.95)
        drawInk(page, region)

        result = createService(StaticTextRecognizer([region])).extractUnderlinedText(page)

        assert result.underlinesDetected is False
        assert result.underlinedRegions == 0
        assert result.totalTextRegions == 1
        assert result.text == "Call me Ishmael. Some years ago"

    def test_fallback_returns_all_filtered_text_in_reading_order(self, page):
        regions = [
            makeRegion(text="second line of the page", top=0.52, bottom=0.5),
            makeRegion(text="first line of the page", top=0.62, bottom=0.6),
            makeRegion(text="p. 12", left=0.45, right=0.55, top=0.05, bottom=0.03),
        ]
        for region in regions:
            drawInk(page, region)

        result = createService(StaticTextRecognizer(regions)).extractUnderlinedText(page)

        assert result.underlinesDetected is False
        assert result.totalTextRegions == 2
        assert result.text == "first line of the page\nsecond line of the page"

    def test_low_confidence_spans_do_not_skew_filter(self, page):
        regions = [
            makeRegion(text="A line of main body text", left=0.32, right=0.9),
            makeRegion(text="smudged margin note", left=0.0, right=0.02, confidence=0.1),
        ]

        result = createService(StaticTextRecognizer(regions)).extractUnderlinedText(page)

        assert result.totalTextRegions == 1
        assert result.text == "A line of main body text"

    def test_line_outside_gap_falls_back(self, page):
        region = makeRegion(text="A line of main body text", left=0.1, right=0.6)
        drawInk(page, region)
        # Inside the search window but touching the text bottom: gap is not positive
        drawPencilLine(page, 500, 100, 600)

        result = createService(StaticTextRecognizer([region])).extractUnderlinedText(page)

        assert result.underlinesDetected is False
        assert result.text == "A line of main body text"


class TestUnderlinedExtraction:
    """Test extraction of underlined regions only."""

    def test_two_adjacent_underlined_regions(self, page, adjacentRegions):
        for region in adjacentRegions:
            drawInk(page, region)
        drawPencilLine(page, 505, 95, 560)

        result = createService(StaticTextRecognizer(adjacentRegions)).extractUnderlinedText(page)

        assert result.underlinesDetected is True
        assert result.underlinedRegions == 2
        assert result.totalTextRegions == 2
        assert result.text == "It was the best of times, it was the worst"

    def test_only_underlined_line_is_returned(self, page):
        upper = makeRegion(text="Happy families are all alike", top=0.62, bottom=0.6)
        lower = makeRegion(text="every unhappy family is unhappy", top=0.52, bottom=0.5)
        drawInk(page, upper)
        drawInk(page, lower)
        drawPencilLine(page, 505, 100, 900)

        service = createService(StaticTextRecognizer([upper, lower]))
        result = service.extractUnderlinedText(page)

        assert result.underlinesDetected is True
        assert result.underlinedRegions == 1
        assert result.totalTextRegions == 2
        assert result.text == "every unhappy family is unhappy"

    def test_recognizer_called_once_per_image(self, page, adjacentRegions):
        recognizer = StaticTextRecognizer(adjacentRegions)
        service = createService(recognizer)

        service.extractUnderlinedText(page)
        service.extractUnderlinedText(page)

        assert recognizer.calls == 2

    def test_calls_are_independent(self, page, adjacentRegions):
        service = createService(StaticTextRecognizer(adjacentRegions))
        plain = page.copy()
        drawPencilLine(page, 505, 95, 560)

        assert service.extractUnderlinedText(page).underlinesDetected is True
        assert service.extractUnderlinedText(plain).underlinesDetected is False

    def test_accepts_encoded_image_bytes(self, page, adjacentRegions):
        drawPencilLine(page, 505, 95, 560)
        ok, encoded = cv2.imencode(".png", page)
        assert ok

        result = createService(StaticTextRecognizer(adjacentRegions)).extractUnderlinedText(
            encoded.tobytes()
        )

        assert result.underlinedRegions == 2


class TestErrors:
    """Test failure paths."""

    def test_no_observations(self, page):
        with pytest.raises(NoTextDetectedError):
            createService(StaticTextRecognizer([])).extractUnderlinedText(page)

    def test_nothing_survives_filter(self, page):
        regions = [makeRegion(text="12"), makeRegion(text="fragment", confidence=0.2)]

        with pytest.raises(NoTextDetectedError) as excInfo:
            createService(StaticTextRecognizer(regions)).extractUnderlinedText(page)

        assert "clear and well-lit" in excInfo.value.userMessage

    def test_recognizer_failure_is_wrapped(self, page):
        with pytest.raises(ProcessingFailedError) as excInfo:
            createService(FailingTextRecognizer()).extractUnderlinedText(page)

        assert excInfo.value.reason == "engine crashed"
        assert excInfo.value.userMessage == "Processing failed: engine crashed"

    def test_undecodable_image(self):
        with pytest.raises(ImageConversionFailedError):
            createService(StaticTextRecognizer([makeRegion()])).extractUnderlinedText(b"not an image")


class TestDebugOutput:
    """Test debug files written per step."""

    def test_debug_files_are_written(self, page, adjacentRegions, tmp_path):
        drawPencilLine(page, 505, 95, 560)
        service = createService(
            StaticTextRecognizer(adjacentRegions),
            debugEnabled=True,
            debugBasePath=str(tmp_path)
        )

        service.extractUnderlinedText(page, imageId="page1")

        base = tmp_path / "underline_ocr"
        assert (base / "regions" / "regions_page1.json").exists()
        assert (base / "underlines" / "underlines_page1.json").exists()
        assert (base / "underlines" / "overlay_page1.png").exists()

        result = json.loads((base / "result" / "result_page1.json").read_text(encoding="utf-8"))
        assert result["underlinesDetected"] is True
        assert result["underlinedRegions"] == 2

    def test_no_debug_files_when_disabled(self, page, adjacentRegions, tmp_path):
        service = createService(
            StaticTextRecognizer(adjacentRegions),
            debugBasePath=str(tmp_path)
        )

        service.extractUnderlinedText(page, imageId="page1")

        assert not (tmp_path / "underline_ocr").exists()
