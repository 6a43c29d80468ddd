"""Run results and their JSON reports."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

DEFAULT_REPORT_DIR = "output/run_reports"


@dataclass
class RunResult:
    """Outcome of one conversion run."""

    mode: str
    units: int = 0
    files: list[str] = field(default_factory=list)
    files_parsed: int = 0
    files_failed: int = 0
    elapsed_s: float = 0.0
    capture: Optional[dict[str, Any]] = None

    def as_report(self) -> dict[str, Any]:
        report: dict[str, Any] = {
            "mode": self.mode,
            "units": self.units,
            "files": list(self.files),
            "files_parsed": self.files_parsed,
            "files_failed": self.files_failed,
            "elapsed_s": round(self.elapsed_s, 3),
        }
        if self.capture is not None:
            report["capture"] = self.capture
        return report


def report_path(run_id: str, output_dir: str = DEFAULT_REPORT_DIR) -> str:
    return os.path.join(output_dir, f"doxy2md-{run_id}.json")


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = DEFAULT_REPORT_DIR,
) -> str:
    """Write a run report as JSON and return its path.

    ``run_id`` and a UTC timestamp are added unless the report has them.
    """
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = report_path(run_id, output_dir)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True, default=str)
    return path
