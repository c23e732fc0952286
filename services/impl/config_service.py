"""
Config Service Implementation.

Centralized configuration management for the underline OCR pipeline.
Loads configuration from application_config.json organized by pipeline step.

Defaults in the getters match the tuned values shipped in
config/application_config.json.

Follows:
- SRP: Only handles configuration management
- DIP: Provides configuration to other services via interface
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from services.interfaces.config_service_interface import IConfigService


logger = logging.getLogger(__name__)


class ConfigService(IConfigService):
    """
    Implementation of IConfigService.

    Loads and manages pipeline configuration from application_config.json.
    Configuration is organized by step section (s1_recognition,
    s2_region_filter, s3_underline_detection, ...).
    """

    def __init__(self, configPath: str = "config/application_config.json"):
        """
        Initialize ConfigService.

        Args:
            configPath: Path to the configuration file.
        """
        self._config: Dict[str, Any] = {}
        self._configPath = Path(configPath)
        self._debugEnabled = False

        if not self.loadConfig(configPath):
            raise RuntimeError(f"Failed to load configuration from: {configPath}")

    def loadConfig(self, configPath: str) -> bool:
        """Load configuration from JSON file."""
        path = Path(configPath)
        if not path.exists():
            logger.error(f"Config file not found: {configPath}")
            return False

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            return False
        except OSError as e:
            logger.error(f"Failed to load config: {e}")
            return False

        if not isinstance(config, dict):
            logger.error(f"Config root must be an object: {configPath}")
            return False

        self._config = config
        self._debugEnabled = bool(self.get("debug.enabled", False))

        logger.info(f"Configuration loaded from: {path.absolute()}")
        return True

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Generic Config Access
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key with dot notation support.

        Examples:
            get("s2_region_filter.minTextLength") -> 10
            get("s3_underline_detection.thresholdOffset") -> 25
        """
        value: Any = self._config
        for part in key.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(part)
            if value is None:
                return default
        return value

    def getServiceConfig(self, serviceName: str) -> Dict[str, Any]:
        config = self._config.get(serviceName, {})
        return config if isinstance(config, dict) else {}

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getDebugBasePath(self) -> str:
        return self.get("debug.basePath", "output/debug")

    def isDebugEnabled(self) -> bool:
        return self._debugEnabled

    def setDebugEnabled(self, enabled: bool) -> None:
        self._debugEnabled = enabled
        logger.info(f"Debug mode {'enabled' if enabled else 'disabled'}")

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S1 Recognition Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getOcrLang(self) -> str:
        return self.get("s1_recognition.lang", "en")

    def getOcrDevice(self) -> str:
        return self.get("s1_recognition.device", "cpu")

    def getRecognitionMinConfidence(self) -> float:
        """Recognized spans below this score never reach the region filter."""
        return self.get("s1_recognition.minConfidence", 0.3)

    def isUseTextlineOrientation(self) -> bool:
        return self.get("s1_recognition.useTextlineOrientation", False)

    def getTextDetThresh(self) -> float:
        return self.get("s1_recognition.textDetThresh", 0.3)

    def getTextDetBoxThresh(self) -> float:
        return self.get("s1_recognition.textDetBoxThresh", 0.5)

    def getTextDetLimitSideLen(self) -> int:
        return self.get("s1_recognition.textDetLimitSideLen", 1920)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S2 Region Filter Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getMinTextLength(self) -> int:
        return self.get("s2_region_filter.minTextLength", 10)

    def getMinWidthRatio(self) -> float:
        return self.get("s2_region_filter.minWidthRatio", 0.4)

    def getLeftMarginTolerance(self) -> float:
        return self.get("s2_region_filter.leftMarginTolerance", 0.15)

    def getMaxLeftEdge(self) -> float:
        return self.get("s2_region_filter.maxLeftEdge", 0.5)

    def getFilterMinConfidence(self) -> float:
        return self.get("s2_region_filter.minConfidence", 0.5)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S3 Underline Detection Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getUnderlineDetectionConfig(self) -> Dict[str, Any]:
        """
        Get underline detector parameters.

        Returns:
            Dict keyed by PencilUnderlineDetector argument names.
        """
        return self.getServiceConfig("s3_underline_detection")

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S4 Underline Matching Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getMaxUnderlineGap(self) -> float:
        return self.get("s4_underline_matching.maxGap", 0.025)

    def getMinOverlapRatio(self) -> float:
        return self.get("s4_underline_matching.minOverlapRatio", 0.4)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S5 Text Assembly Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getLineTolerance(self) -> float:
        return self.get("s5_text_assembly.lineTolerance", 0.015)
