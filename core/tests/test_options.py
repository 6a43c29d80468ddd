"""Tests for option loading and validation."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from compound.config import DEFAULT_MEMBER_SECTIONS
from core.options import (
    ConfigValidationError,
    NoCompoundsFoundError,
    Options,
    load_options,
    load_options_file,
)

_CLEAN_ENV = {key: value for key, value in os.environ.items() if not key.startswith("DOXY2MD_")}


@patch("core.options.load_dotenv", lambda: None)
@patch.dict(os.environ, _CLEAN_ENV, clear=True)
class TestLoadOptions(unittest.TestCase):
    def _write(self, text: str, suffix: str = ".yml") -> str:
        handle = tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False)
        handle.write(text)
        handle.flush()
        handle.close()
        return handle.name

    def test_defaults(self) -> None:
        options = load_options()
        self.assertEqual(options.output, "api.md")
        self.assertFalse(options.groups)
        self.assertFalse(options.anchors)
        self.assertEqual(options.filters.members, DEFAULT_MEMBER_SECTIONS)

    def test_split_modes_default_to_placeholder_output(self) -> None:
        self.assertEqual(load_options(overrides={"groups": True}).output, "api_%s.md")
        self.assertEqual(load_options(overrides={"classes": True}).output, "api_%s.md")

    def test_split_mode_without_placeholder_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_options(overrides={"classes": True, "output": "api.md"})

    def test_no_compounds_error_is_config_error(self) -> None:
        self.assertTrue(issubclass(NoCompoundsFoundError, ConfigValidationError))

    def test_file_then_env_then_overrides(self) -> None:
        path = self._write(
            """
output: docs/from_file.md
pages: true
language: java
filters:
  members: [public-func, enum]
  compounds: [class]
"""
        )
        try:
            with patch.dict(os.environ, {"DOXY2MD_LANGUAGE": "cpp", "DOXY2MD_NOINDEX": "yes"}):
                options = load_options(path, overrides={"output": "docs/cli.md", "pages": None})
        finally:
            Path(path).unlink(missing_ok=True)

        self.assertEqual(options.output, "docs/cli.md")
        self.assertTrue(options.pages)
        self.assertTrue(options.noindex)
        self.assertEqual(options.language, "cpp")
        self.assertEqual(options.filters.members, ["public-func", "enum"])
        self.assertEqual(options.filters.compounds, ["class"])

    def test_templates_from_env(self) -> None:
        with patch.dict(os.environ, {"DOXY2MD_TEMPLATES": "my_templates"}):
            options = load_options(None, overrides={"templates": None})
        self.assertEqual(options.templates, "my_templates")
        self.assertEqual(options.language, "cpp")

    def test_json_options_file(self) -> None:
        path = self._write('{"groups": true, "output": "out/%s.md"}', suffix=".json")
        try:
            options = load_options(path)
        finally:
            Path(path).unlink(missing_ok=True)
        self.assertTrue(options.groups)
        self.assertEqual(options.output, "out/%s.md")

    def test_missing_options_file_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_options_file("/definitely/missing.yml")

    def test_invalid_filters_raise(self) -> None:
        path = self._write("filters:\n  members: public-func\n")
        try:
            with self.assertRaises(ConfigValidationError):
                load_options(path)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_non_mapping_file_raises(self) -> None:
        path = self._write("- groups\n- classes\n")
        try:
            with self.assertRaises(ConfigValidationError):
                load_options_file(path)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_empty_file_gives_defaults(self) -> None:
        path = self._write("")
        try:
            self.assertEqual(load_options_file(path), {})
        finally:
            Path(path).unlink(missing_ok=True)


class TestOptionsValidate(unittest.TestCase):
    def test_validate_fills_output(self) -> None:
        options = Options(pages=True)
        options.validate()
        self.assertEqual(options.output, "api.md")

    def test_explicit_placeholder_passes(self) -> None:
        Options(groups=True, output="api_%s.md").validate()


if __name__ == "__main__":
    unittest.main()
