"""Tests for specdocs.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import pytest

from specdocs.exceptions import MalformedSpecError
from specdocs.parser.loader import (
    _load_from_file,
    _load_from_stdin,
    _parse_content,
    load_spec,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


# ---------------------------------------------------------------------------
# load_spec dispatch
# ---------------------------------------------------------------------------


class TestLoadSpec:
    """Test load_spec dispatcher routes to the correct loader."""

    def test_loads_from_file_json(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "example_spec.json"))
        assert result["openapi"] == "3.0.0"
        assert result["info"]["title"] == "Examples API"

    def test_loads_from_file_yaml(self, tmp_path: Path) -> None:
        yaml_content = textwrap.dedent("""\
            openapi: "3.0.0"
            info:
              title: YAML Test
              version: "1.0.0"
            paths: {}
        """)
        yaml_file = tmp_path / "spec.yaml"
        yaml_file.write_text(yaml_content, encoding="utf-8")
        result = load_spec(str(yaml_file))
        assert result["openapi"] == "3.0.0"
        assert result["info"]["title"] == "YAML Test"

    def test_loads_from_yml_extension(self, tmp_path: Path) -> None:
        yml_file = tmp_path / "spec.yml"
        yml_file.write_text("openapi: '3.0.0'\npaths: {}\n", encoding="utf-8")
        result = load_spec(str(yml_file))
        assert result["paths"] == {}

    def test_loads_from_stdin(self) -> None:
        spec_json = json.dumps({"openapi": "3.0.0", "info": {"title": "stdin test"}})
        with patch("specdocs.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(spec_json)
            result = load_spec("-")
        assert result["info"]["title"] == "stdin test"


# ---------------------------------------------------------------------------
# _load_from_file
# ---------------------------------------------------------------------------


class TestLoadFromFile:
    """Test loading specs from local files."""

    def test_file_not_found_raises(self) -> None:
        with pytest.raises(MalformedSpecError, match="not found"):
            _load_from_file("/nonexistent/path/to/spec.json")

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("   \n", encoding="utf-8")
        with pytest.raises(MalformedSpecError, match="empty"):
            _load_from_file(str(empty))

    def test_invalid_json_extension_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        with pytest.raises(MalformedSpecError, match="Invalid JSON"):
            _load_from_file(str(bad))

    def test_unknown_extension_sniffs_yaml(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "spec.txt"
        spec_file.write_text("paths:\n  /a: {}\n", encoding="utf-8")
        assert _load_from_file(str(spec_file)) == {"paths": {"/a": {}}}


# ---------------------------------------------------------------------------
# _load_from_stdin
# ---------------------------------------------------------------------------


class TestLoadFromStdin:
    """Test reading specs from standard input."""

    def test_empty_stdin_raises(self) -> None:
        with patch("specdocs.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("")
            with pytest.raises(MalformedSpecError, match="stdin"):
                _load_from_stdin()

    def test_yaml_on_stdin(self) -> None:
        with patch("specdocs.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("paths: {}\n")
            assert _load_from_stdin() == {"paths": {}}


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    """Test JSON/YAML content detection."""

    def test_json_preferred(self) -> None:
        assert _parse_content('{"a": 1}') == {"a": 1}

    def test_yaml_fallback(self) -> None:
        assert _parse_content("a: 1\nb: [x, y]\n") == {"a": 1, "b": ["x", "y"]}

    def test_yaml_hint_skips_json(self) -> None:
        assert _parse_content('{"a": 1}', hint="yaml") == {"a": 1}

    def test_top_level_list_rejected(self) -> None:
        with pytest.raises(MalformedSpecError, match="list"):
            _parse_content("[1, 2]")

    def test_scalar_document_rejected(self) -> None:
        with pytest.raises(MalformedSpecError, match="object"):
            _parse_content("just a string")

    def test_unparseable_reports_both_errors(self) -> None:
        with pytest.raises(MalformedSpecError) as excinfo:
            _parse_content('{"a": [1, 2')
        assert "JSON error" in str(excinfo.value)
        assert "YAML error" in str(excinfo.value)
