"""Core shared options, logging and run reporting."""

from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    log_level_for,
    phase_scope,
    set_run_id,
)
from core.options import (
    ConfigValidationError,
    NoCompoundsFoundError,
    Options,
    load_options,
    load_options_file,
)
from core.run_artifacts import RunResult, report_path, write_run_report

__all__ = [
    "configure_structured_logging",
    "get_run_id",
    "log_level_for",
    "phase_scope",
    "set_run_id",
    "ConfigValidationError",
    "NoCompoundsFoundError",
    "Options",
    "load_options",
    "load_options_file",
    "RunResult",
    "report_path",
    "write_run_report",
]
