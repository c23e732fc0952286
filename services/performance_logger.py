"""
Performance Logger Service

Tracks and logs per-stage timing for one run of the underline OCR pipeline.
A new PerformanceLogger is created for every extraction call, so nothing
is shared between concurrent calls.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Optional


logger = logging.getLogger(__name__)


@dataclass
class TimingInfo:
    """
    Timing information for a single extraction call.
    All times are in milliseconds.
    """
    stagesMs: Dict[str, float] = field(default_factory=dict)
    totalMs: float = 0.0

    def __repr__(self) -> str:
        stages = ", ".join(f"{name}={ms:.1f}ms" for name, ms in self.stagesMs.items())
        return f"{stages} | Total={self.totalMs:.1f}ms"


class PerformanceLogger:
    """
    Stage timer for the extraction pipeline.

    Usage:
        perf = PerformanceLogger()
        perf.startStage("recognizing")
        ...
        perf.endStage()
        timing = perf.endCycle()
    """

    def __init__(self, enabled: bool = True):
        """
        Initialize PerformanceLogger.

        Args:
            enabled: Enable/disable timing and the summary log line.
        """
        self._enabled = enabled
        self._timing = TimingInfo()
        self._cycleStartTime = time.perf_counter()
        self._stageStartTime: float = 0.0
        self._currentStage: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def currentStage(self) -> Optional[str]:
        """Name of the stage that is currently running, if any."""
        return self._currentStage

    def startStage(self, name: str) -> None:
        """
        Start timing a pipeline stage.
        Any stage still running is closed first.
        """
        if self._currentStage is not None:
            self.endStage()
        self._currentStage = name
        self._stageStartTime = time.perf_counter()

    def endStage(self) -> float:
        """
        End the current stage and record its time.

        Returns:
            Stage time in milliseconds.
        """
        if self._currentStage is None:
            return 0.0

        elapsed = (time.perf_counter() - self._stageStartTime) * 1000
        if self._enabled:
            self._timing.stagesMs[self._currentStage] = elapsed
            logger.debug(f"Stage '{self._currentStage}' took {elapsed:.2f}ms")
        self._currentStage = None
        return elapsed

    def endCycle(self) -> TimingInfo:
        """
        Close the running stage, compute the total and log a summary.

        Returns:
            TimingInfo with all metrics for this call.
        """
        self.endStage()
        if not self._enabled:
            return TimingInfo()

        self._timing.totalMs = (time.perf_counter() - self._cycleStartTime) * 1000
        logger.info(f"Performance: {self._timing}")
        return self._timing
