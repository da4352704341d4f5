# src/tracking/call_logger.py — v2
"""Per-call ledger of answered oracle calls.

Only calls the provider actually answered are recorded (and charged);
timeouts and transport failures never produce usage. Records can be
dumped to JSON Lines for offline cost analysis.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from specscout.llm.models import LLMResponse
from specscout.tracking.cost_calculator import compute_total_cost
from specscout.tracking.models import LLMCallRecord

logger = logging.getLogger(__name__)


class CallLogger:
    """Append-only list of LLMCallRecord for one detector."""

    def __init__(self) -> None:
        self._records: list[LLMCallRecord] = []

    def record(
        self,
        path: str,
        response: LLMResponse,
        cost_usd: float,
        status: Literal["success", "failed"] = "success",
    ) -> LLMCallRecord:
        """Append one answered call.

        Args:
            path: File the call classified.
            response: Provider response carrying token usage.
            cost_usd: Amount charged to the budget for this call.
            status: "failed" when the answer could not be parsed.
        """
        entry = LLMCallRecord(
            call_id=uuid.uuid4().hex,
            timestamp=datetime.now(timezone.utc),
            path=path,
            provider=response.provider,
            model=response.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            total_tokens=response.total_tokens,
            latency_ms=response.latency_ms,
            status=status,
            estimated_cost_usd=cost_usd,
        )
        self._records.append(entry)
        return entry

    @property
    def records(self) -> list[LLMCallRecord]:
        return list(self._records)

    @property
    def total_calls(self) -> int:
        return len(self._records)

    @property
    def failed_calls(self) -> int:
        """Answered calls whose answer was unusable."""
        return sum(1 for r in self._records if r.status == "failed")

    @property
    def total_tokens(self) -> int:
        return sum(r.total_tokens for r in self._records)

    @property
    def total_cost_usd(self) -> float:
        return compute_total_cost(self._records)

    def save(self, path: Path) -> None:
        """Write every record as one JSON object per line."""
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = [json.dumps(r.model_dump(mode="json")) for r in self._records]
        path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
        logger.debug("Wrote %d oracle call records to %s", len(lines), path)
