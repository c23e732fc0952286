# Services module for BookQuotes underline OCR
# Pipeline wiring lives in services/pipeline_orchestrator.py:
# from services.pipeline_orchestrator import PipelineOrchestrator

__all__ = []
