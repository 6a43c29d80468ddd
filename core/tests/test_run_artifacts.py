"""Tests for run results and report writing."""

import json
import tempfile
import unittest
from pathlib import Path

from core.run_artifacts import RunResult, report_path, write_run_report


class TestRunResult(unittest.TestCase):
    def test_report_without_capture(self) -> None:
        result = RunResult(mode="single", units=1, files=["api.md"], elapsed_s=0.12345)
        report = result.as_report()
        self.assertEqual(report["mode"], "single")
        self.assertEqual(report["files"], ["api.md"])
        self.assertEqual(report["elapsed_s"], 0.123)
        self.assertNotIn("capture", report)

    def test_report_with_capture(self) -> None:
        result = RunResult(mode="classes", capture={"page": {"kinds": ["page"], "attributes": []}})
        self.assertEqual(result.as_report()["capture"]["page"]["kinds"], ["page"])


class TestWriteRunReport(unittest.TestCase):
    def test_write_run_report(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_run_report(
                report={"mode": "groups", "files": ["api_core.md"]},
                run_id="run-123",
                output_dir=tmpdir,
            )
            self.assertEqual(path, report_path("run-123", tmpdir))
            self.assertEqual(Path(path).name, "doxy2md-run-123.json")
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
            self.assertEqual(payload["run_id"], "run-123")
            self.assertEqual(payload["mode"], "groups")
            self.assertEqual(payload["files"], ["api_core.md"])
            self.assertIn("timestamp_utc", payload)

    def test_creates_missing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "nested" / "reports"
            path = write_run_report({"mode": "single"}, run_id="r", output_dir=str(target))
            self.assertTrue(Path(path).is_file())


if __name__ == "__main__":
    unittest.main()
