"""
Conversion pipeline: output planning per mode and the end-to-end run.
"""

from pipeline.capture import StructureCapture
from pipeline.orchestrator import (
    OutputUnit,
    RunResult,
    iter_output_units,
    output_mode,
    run,
)

__all__ = [
    "OutputUnit",
    "RunResult",
    "StructureCapture",
    "iter_output_units",
    "output_mode",
    "run",
]
