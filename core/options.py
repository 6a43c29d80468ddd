"""Conversion options and their validation.

Options are resolved in layers, later layers winning:

1. Defaults (this file)
2. An options file (YAML or JSON) given with ``--config``
3. Environment variables (``DOXY2MD_*``), including a ``.env`` file
4. Command-line flags
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from compound.config import Filters

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "api.md"
DEFAULT_SPLIT_OUTPUT = "api_%s.md"
DEFAULT_LOGFILE = "doxy2md.log"
DEFAULT_LANGUAGE = "cpp"

# Placeholder substituted with the group or class name in split modes
NAME_PLACEHOLDER = "%s"


class ConfigValidationError(RuntimeError):
    """Raised when the run configuration cannot produce any output."""


class NoCompoundsFoundError(ConfigValidationError):
    """Raised when an enabled output mode finds nothing to write."""


@dataclass
class Options:
    """Settings of one conversion run."""

    directory: Optional[str] = None
    output: Optional[str] = None
    groups: bool = False
    classes: bool = False
    pages: bool = False
    noindex: bool = False  # ignored with groups or classes
    anchors: bool = False
    html_anchors: bool = False
    language: str = DEFAULT_LANGUAGE
    templates: Optional[str] = None  # searched before the built-in language templates
    logfile: Optional[str] = None
    capture: bool = False
    filters: Filters = field(default_factory=Filters)

    @property
    def split_output(self) -> bool:
        return self.groups or self.classes

    def resolve_output(self) -> str:
        """Fill in the default output path for the selected mode."""
        if self.output is None:
            self.output = DEFAULT_SPLIT_OUTPUT if self.split_output else DEFAULT_OUTPUT
        return self.output

    def validate(self) -> None:
        """Reject combinations that cannot produce distinct output files."""
        output = self.resolve_output()
        if self.split_output and NAME_PLACEHOLDER not in output:
            raise ConfigValidationError(
                'The `output` file parameter must contain an "%s" for group or '
                "class name substitution when `groups` or `classes` are enabled."
            )


_BOOL_KEYS = ("groups", "classes", "pages", "noindex", "anchors", "html_anchors", "capture")
_STR_KEYS = ("directory", "output", "language", "templates", "logfile")

_ENV_MAP: dict[str, str] = {
    "DOXY2MD_DIRECTORY": "directory",
    "DOXY2MD_OUTPUT": "output",
    "DOXY2MD_GROUPS": "groups",
    "DOXY2MD_CLASSES": "classes",
    "DOXY2MD_PAGES": "pages",
    "DOXY2MD_NOINDEX": "noindex",
    "DOXY2MD_ANCHORS": "anchors",
    "DOXY2MD_HTML_ANCHORS": "html_anchors",
    "DOXY2MD_LANGUAGE": "language",
    "DOXY2MD_TEMPLATES": "templates",
    "DOXY2MD_LOGFILE": "logfile",
    "DOXY2MD_CAPTURE": "capture",
}


def _flag(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _expect_dict(payload: Any, ctx: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ConfigValidationError(f"{ctx} must be an object")
    return payload


def _expect_str_list(payload: Any, ctx: str) -> list[str]:
    if not isinstance(payload, list) or not all(isinstance(item, str) for item in payload):
        raise ConfigValidationError(f"{ctx} must be a list of strings")
    return list(payload)


def load_options_file(path: str) -> dict[str, Any]:
    """Load an options file (YAML, or JSON for ``.json`` files)."""
    options_path = Path(path)
    if not options_path.is_file():
        raise ConfigValidationError(f"Options file not found: {options_path}")

    text = options_path.read_text(encoding="utf-8")
    try:
        if options_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(f"Failed to parse options file {options_path}: {exc}") from exc

    if payload is None:
        logger.warning("Options file is empty: %s; using defaults", options_path)
        return {}
    return _expect_dict(payload, "options file")


def apply_mapping(options: Options, payload: dict[str, Any]) -> Options:
    """Apply a mapping of option values (file contents or CLI flags).

    ``None`` values are skipped so unset flags never override lower layers.
    """
    for key, value in payload.items():
        if value is None:
            continue
        if key in _BOOL_KEYS:
            setattr(options, key, bool(value))
        elif key in _STR_KEYS:
            setattr(options, key, str(value))
        elif key == "filters":
            filters = _expect_dict(value, "filters")
            if "members" in filters:
                options.filters.members = _expect_str_list(filters["members"], "filters.members")
            if "compounds" in filters:
                options.filters.compounds = _expect_str_list(filters["compounds"], "filters.compounds")
        else:
            logger.warning("Ignoring unknown option '%s'", key)
    return options


def apply_env(options: Options) -> Options:
    """Apply ``DOXY2MD_*`` environment overrides (a ``.env`` file is read first)."""
    load_dotenv()
    for env_key, attr in _ENV_MAP.items():
        raw = os.getenv(env_key)
        if raw is None:
            continue
        if attr in _BOOL_KEYS:
            setattr(options, attr, _flag(raw))
        else:
            setattr(options, attr, raw)
    return options


def load_options(
    config_path: Optional[str] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> Options:
    """Resolve options from every layer and validate the result."""
    options = Options()
    if config_path:
        apply_mapping(options, load_options_file(config_path))
    apply_env(options)
    if overrides:
        apply_mapping(options, overrides)
    options.validate()
    return options
