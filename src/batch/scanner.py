# src/batch/scanner.py — v3
"""Batch scanner: candidate file discovery and directory-level spec detection.

Scans a directory for YAML/JSON candidates within size bounds and hands
them to the LLM detector, or to the pattern-based detector when LLM
detection is disabled or fails.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from specscout.batch.models import DetectionComparison, ScanResult
from specscout.config.settings import Settings
from specscout.core.models import ClassificationRequest
from specscout.detection.spec_info import PatternDetector, extract_confirmed_specs

if TYPE_CHECKING:
    from specscout.detection.detector import SpecDetector

logger = logging.getLogger(__name__)


class CandidateScanner:
    """Discover candidate spec files under a directory.

    Workflow:
        1. List files with a candidate extension (recursive if enabled)
        2. Keep files strictly between scan_min_size and scan_max_size bytes
        3. Keep the first scan_max_files in sorted path order
        4. Read them as UTF-8 text (unreadable files are skipped)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or Settings()
        self._extensions = set(settings.scan_extensions_list)
        self._min_size = settings.scan_min_size
        self._max_size = settings.scan_max_size
        self._max_files = settings.scan_max_files
        self._recursive = settings.scan_recursive

    def scan(self, scan_root: Path) -> list[ClassificationRequest]:
        """Return candidate files as requests with root-relative POSIX paths.

        Raises:
            ValueError: If ``scan_root`` is not a directory.
        """
        if not scan_root.is_dir():
            msg = f"Scan root is not a directory: {scan_root}"
            raise ValueError(msg)

        pattern_fn = scan_root.rglob if self._recursive else scan_root.glob
        candidates: list[Path] = []
        for path in sorted(pattern_fn("*")):
            if not path.is_file() or path.suffix.lower() not in self._extensions:
                continue
            size = path.stat().st_size
            if size <= self._min_size or size >= self._max_size:
                continue
            candidates.append(path)

        if len(candidates) > self._max_files:
            logger.info(
                "Limiting %d candidates to the first %d for cost control",
                len(candidates), self._max_files,
            )
            candidates = candidates[: self._max_files]

        requests: list[ClassificationRequest] = []
        for path in candidates:
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not read %s: %s", path, e)
                continue
            rel = path.relative_to(scan_root).as_posix()
            requests.append(ClassificationRequest(path=rel, content=content))

        logger.info(
            "Scanned %s: %d candidate files (recursive=%s)",
            scan_root, len(requests), self._recursive,
        )
        return requests


class SpecScanner:
    """Directory-level spec detection: LLM first, patterns when LLM is off or fails."""

    def __init__(
        self,
        settings: Settings | None = None,
        detector: SpecDetector | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._detector = detector
        self._candidates = CandidateScanner(self._settings)
        self._patterns = PatternDetector()

    async def scan_repository(self, scan_root: Path) -> ScanResult:
        """Classify every candidate under ``scan_root`` with the LLM detector.

        If the LLM scan fails outright, the directory is scanned with
        pattern matching instead and the result carries ``method="pattern"``.

        Raises:
            ValueError: If no detector was configured or ``scan_root`` is not
                a directory.
        """
        if self._detector is None:
            raise ValueError("LLM detection requires a SpecDetector")

        t0 = time.perf_counter()
        requests = self._candidates.scan(scan_root)
        if not requests:
            logger.info("No candidate files found in %s", scan_root)

        try:
            results = await self._detector.classify_batch(requests)
            specs = extract_confirmed_specs(
                requests, results, self._detector.confidence_threshold
            )
        except Exception:
            logger.warning(
                "LLM scan failed for %s, falling back to pattern matching",
                scan_root, exc_info=True,
            )
            return self.pattern_scan(scan_root)

        duration = time.perf_counter() - t0
        logger.info(
            "LLM scan complete for %s: %d specs found in %.2fs",
            scan_root, len(specs), duration,
        )
        return ScanResult(
            scan_root=str(scan_root),
            method="llm",
            candidates=[r.path for r in requests],
            results=results,
            specs=specs,
            duration_seconds=round(duration, 2),
        )

    def pattern_scan(self, scan_root: Path) -> ScanResult:
        """Detect specs by well-known filenames and document structure only."""
        t0 = time.perf_counter()
        requests = self._candidates.scan(scan_root)
        specs = self._patterns.detect(requests)
        return ScanResult(
            scan_root=str(scan_root),
            method="pattern",
            candidates=[r.path for r in requests],
            specs=specs,
            duration_seconds=round(time.perf_counter() - t0, 2),
        )

    async def detect_specs_with_fallback(self, scan_root: Path) -> ScanResult:
        """Use LLM detection when enabled and configured, else (or on failure) patterns."""
        if self._settings.llm_enabled and self._detector is not None:
            return await self.scan_repository(scan_root)

        logger.info("LLM detection disabled, using pattern-based detection for %s", scan_root)
        return self.pattern_scan(scan_root)

    async def compare_detection_methods(self, scan_root: Path) -> DetectionComparison:
        """Run LLM and pattern detection on the same directory and diff the specs.

        Raises:
            ValueError: If no detector was configured.
        """
        logger.info("Comparing detection methods for %s", scan_root)
        t0 = time.perf_counter()
        llm = await self.scan_repository(scan_root)
        pattern = self.pattern_scan(scan_root)

        llm_paths = {s.file_path for s in llm.specs}
        pattern_paths = {s.file_path for s in pattern.specs}
        return DetectionComparison(
            scan_root=str(scan_root),
            llm=llm,
            pattern=pattern,
            additional_specs_found=len(llm.specs) - len(pattern.specs),
            llm_only=sorted(llm_paths - pattern_paths),
            pattern_only=sorted(pattern_paths - llm_paths),
            duration_seconds=round(time.perf_counter() - t0, 2),
        )
