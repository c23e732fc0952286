"""
BookQuotes Underline OCR

Command-line entry point: extracts the pencil-underlined text from a
photographed book page and prints it, ready to paste into a quote.

Architecture:
- PipelineOrchestrator: Reads config and creates all pipeline components
- UnderlineOcrService: Runs recognition, filtering, detection, matching, assembly
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from core.errors import OcrError
from services.pipeline_orchestrator import PipelineOrchestrator


def setupLogging(debugMode: bool = False) -> None:
    """
    Setup application logging.

    Args:
        debugMode: If True, set log level to DEBUG.
    """
    level = logging.DEBUG if debugMode else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def parseArgs(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Extract underlined text from a photographed book page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py page.jpg
  python main.py page.jpg --json
  python main.py page.jpg --config config/application_config.json --debug
        """
    )
    parser.add_argument(
        "image",
        type=str,
        help="Path to the page photo"
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="config/application_config.json",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Print the full result as JSON"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Save debug output (regions, overlay image, result)"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parseArgs(argv)
    setupLogging(debugMode=os.environ.get("DEBUG", "").lower() == "true")

    logger = logging.getLogger(__name__)

    try:
        orchestrator = PipelineOrchestrator(
            args.config,
            debugEnabled=True if args.debug else None
        )
    except RuntimeError as e:
        logger.error(f"Failed to start: {e}")
        return 2

    try:
        result = orchestrator.extractUnderlinedText(args.image)
    except OcrError as e:
        logger.error(f"Extraction failed: {e}")
        print(e.userMessage, file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.toDict(), indent=2, ensure_ascii=False))
    else:
        if not result.underlinesDetected:
            print("No underlines detected, showing all text.", file=sys.stderr)
        print(result.text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
