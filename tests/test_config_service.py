"""
Tests for configuration loading.
"""
import json

import pytest

from services.impl.config_service import ConfigService

from conftest import CONFIG_PATH


class TestConfigService:
    """Test ConfigService loading and access."""

    def test_loads_shipped_config(self):
        config = ConfigService(str(CONFIG_PATH))

        assert config.getMinTextLength() == 10
        assert config.getMaxUnderlineGap() == pytest.approx(0.025)
        assert config.getMinOverlapRatio() == pytest.approx(0.4)
        assert config.getLineTolerance() == pytest.approx(0.015)
        assert config.getRecognitionMinConfidence() == pytest.approx(0.3)
        assert config.isDebugEnabled() is False

    def test_dot_notation_access(self):
        config = ConfigService(str(CONFIG_PATH))

        assert config.get("s3_underline_detection.thresholdOffset") == pytest.approx(25.0)
        assert config.get("s3_underline_detection.missing", "fallback") == "fallback"
        assert config.get("s2_region_filter.minTextLength.nested", 7) == 7

    def test_detection_section_matches_detector_arguments(self):
        from core.underline.pencil_underline_detector import PencilUnderlineDetector

        config = ConfigService(str(CONFIG_PATH))

        PencilUnderlineDetector(**config.getUnderlineDetectionConfig())

    def test_getters_fall_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"debug": {"enabled": True}}), encoding="utf-8")

        config = ConfigService(str(path))

        assert config.isDebugEnabled() is True
        assert config.getFilterMinConfidence() == pytest.approx(0.5)
        assert config.getMaxLeftEdge() == pytest.approx(0.5)
        assert config.getUnderlineDetectionConfig() == {}
        assert config.getDebugBasePath() == "output/debug"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(RuntimeError):
            ConfigService(str(tmp_path / "nope.json"))

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(RuntimeError):
            ConfigService(str(path))

    def test_set_debug_enabled(self):
        config = ConfigService(str(CONFIG_PATH))

        config.setDebugEnabled(True)

        assert config.isDebugEnabled() is True
