# src/main.py — v3
"""CLI entry point: scan, classify and compare commands.

Usage:
    specscout scan <directory> [--all] [--patterns-only]
    specscout classify <file> [<file> ...]
    specscout compare <directory>

Results are written to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from specscout.config.settings import ConfigurationError, Settings, load_settings
from specscout.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="specscout",
        description=f"specscout v{__version__} - LLM-based API specification detector",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- scan ---
    p_scan = subparsers.add_parser(
        "scan", help="Detect API specifications in a directory",
    )
    p_scan.add_argument("directory", type=Path, help="Directory to scan")
    p_scan.add_argument(
        "--all", dest="show_all", action="store_true",
        help="Print every classification result, not only confirmed specs",
    )
    p_scan.add_argument(
        "--patterns-only", action="store_true",
        help="Skip the LLM and use filename/structure patterns only",
    )
    p_scan.set_defaults(func=_cmd_scan)

    # --- classify ---
    p_classify = subparsers.add_parser(
        "classify", help="Classify individual files",
    )
    p_classify.add_argument("files", type=Path, nargs="+", help="Files to classify")
    p_classify.set_defaults(func=_cmd_classify)

    # --- compare ---
    p_compare = subparsers.add_parser(
        "compare", help="Run LLM and pattern detection side by side",
    )
    p_compare.add_argument("directory", type=Path, help="Directory to scan")
    p_compare.set_defaults(func=_cmd_compare)

    return parser


async def _cmd_scan(args: argparse.Namespace, settings: Settings) -> int:
    """Scan a directory and print detected specs."""
    from specscout.batch.scanner import SpecScanner

    directory: Path = args.directory
    if not directory.is_dir():
        logger.error("Not a directory: %s", directory)
        return 1

    detector = None
    if settings.llm_enabled and not args.patterns_only:
        from specscout.detection.detector import SpecDetector
        detector = SpecDetector.from_settings(settings)

    scanner = SpecScanner(settings=settings, detector=detector)
    result = await scanner.detect_specs_with_fallback(directory)

    payload: dict[str, object] = {
        "scan_root": result.scan_root,
        "method": result.method,
        "candidates": len(result.candidates),
        "specs": [s.model_dump() for s in result.specs],
        "duration_seconds": result.duration_seconds,
    }
    if args.show_all and result.results:
        payload["results"] = [
            {"path": path, **r.model_dump(by_alias=True)}
            for path, r in zip(result.candidates, result.results)
        ]
    if detector is not None:
        payload["metrics"] = detector.get_metrics().model_dump()

    _print_json(payload)
    return 0


async def _cmd_classify(args: argparse.Namespace, settings: Settings) -> int:
    """Classify the given files and print one result per file."""
    from specscout.core.models import ClassificationRequest
    from specscout.detection.detector import SpecDetector

    requests: list[ClassificationRequest] = []
    for file_path in args.files:
        if not file_path.is_file():
            logger.error("File not found: %s", file_path)
            return 1
        requests.append(
            ClassificationRequest(
                path=file_path.as_posix(),
                content=file_path.read_text(encoding="utf-8", errors="replace"),
            )
        )

    detector = SpecDetector.from_settings(settings)
    results = await detector.classify_batch(requests)

    _print_json([
        {"path": req.path, **res.model_dump(by_alias=True)}
        for req, res in zip(requests, results)
    ])
    return 0


async def _cmd_compare(args: argparse.Namespace, settings: Settings) -> int:
    """Print LLM vs pattern detection results for a directory."""
    from specscout.batch.scanner import SpecScanner
    from specscout.detection.detector import SpecDetector

    directory: Path = args.directory
    if not directory.is_dir():
        logger.error("Not a directory: %s", directory)
        return 1

    detector = SpecDetector.from_settings(settings)
    scanner = SpecScanner(settings=settings, detector=detector)
    comparison = await scanner.compare_detection_methods(directory)

    _print_json({
        "scan_root": comparison.scan_root,
        "llm_method": comparison.llm.method,
        "llm_specs": [s.file_path for s in comparison.llm.specs],
        "pattern_specs": [s.file_path for s in comparison.pattern.specs],
        "additional_specs_found": comparison.additional_specs_found,
        "llm_only": comparison.llm_only,
        "pattern_only": comparison.pattern_only,
        "duration_seconds": comparison.duration_seconds,
        "metrics": detector.get_metrics().model_dump(),
    })
    return 0


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from specscout.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
