"""Tests for specdocs.render.folder."""

from __future__ import annotations

import json
from typing import Any

import pytest

from specdocs.exceptions import NotFoundError
from specdocs.models import ExpansionPolicy
from specdocs.render.folder import (
    LineKind,
    classify,
    fold,
    generate_schema_text,
    merge_all_of,
)


class TestClassify:

    @pytest.mark.parametrize(
        "line, kind",
        [
            ('  "items": {', LineKind.OPEN_OBJECT),
            ("  {", LineKind.OPEN_OBJECT),
            ('  "enum": [', LineKind.OPEN_ARRAY),
            ("  },", LineKind.CLOSE_OBJECT),
            ("  ]", LineKind.CLOSE_ARRAY),
            ('  "type": "string",', LineKind.SCALAR),
            ("  42", LineKind.SCALAR),
            ('  "enum": ["a", "b"],', LineKind.COMPOSITE),
            ('  "items": { "type": "string" }', LineKind.COMPOSITE),
        ],
    )
    def test_kinds(self, line: str, kind: LineKind) -> None:
        assert classify(line) is kind

    def test_brace_inside_string_value_is_scalar(self) -> None:
        assert classify('  "pattern": "{",') is LineKind.SCALAR

    def test_brace_as_key_is_not_an_opener(self) -> None:
        assert classify('  "{": 1,') is LineKind.SCALAR

    def test_escaped_quote_in_key(self) -> None:
        assert classify('  "a\\"b": {') is LineKind.OPEN_OBJECT


class TestFold:
    """Single-entry objects and scalar arrays collapse onto one line."""

    def test_single_entry_object(self) -> None:
        text = json.dumps({"items": {"type": "string"}}, indent=2)
        assert fold(text) == '{\n  "items": { "type": "string" }\n}'

    def test_scalar_array(self) -> None:
        text = json.dumps({"enum": ["apples", "lemons"], "x": 1}, indent=2)
        assert fold(text) == '{\n  "enum": ["apples", "lemons"],\n  "x": 1\n}'

    def test_multi_entry_object_untouched(self) -> None:
        text = json.dumps({"a": {"b": 1, "c": 2}}, indent=2)
        assert fold(text) == text

    def test_array_of_objects_untouched(self) -> None:
        text = json.dumps({"a": [{"b": 1, "c": 2}]}, indent=2)
        assert fold(text) == text

    def test_empty_containers_untouched(self) -> None:
        text = json.dumps({"a": {}, "b": []}, indent=2)
        assert fold(text) == text

    def test_folds_innermost_level_only(self) -> None:
        text = json.dumps({"a": {"b": {"c": 1}}}, indent=2)
        assert fold(text) == '{\n  "a": {\n    "b": { "c": 1 }\n  }\n}'

    def test_idempotent(self, example_spec: dict[str, Any]) -> None:
        text = json.dumps(example_spec, indent=2)
        once = fold(text)
        assert fold(once) == once

    def test_preserves_value(self, example_spec: dict[str, Any]) -> None:
        text = json.dumps(example_spec, indent=2)
        assert json.loads(fold(text)) == example_spec

    def test_strings_with_delimiters_preserved(self) -> None:
        value = {"a": {"pattern": "^[a-z]{2},$"}, "b": ["x, y", "}", "]"]}
        assert json.loads(fold(json.dumps(value, indent=2))) == value


class TestMergeAllOf:

    def test_without_all_of_unchanged(self) -> None:
        schema = {"type": "object", "properties": {"a": {}}}
        assert merge_all_of(schema) is schema

    def test_later_fragments_win(self) -> None:
        schema = {
            "properties": {"a": {"type": "string"}},
            "allOf": [
                {"properties": {"a": {"type": "integer"}, "b": {"type": "string"}}},
                {"properties": {"b": {"type": "boolean"}}},
            ],
        }
        assert merge_all_of(schema) == {
            "properties": {"a": {"type": "integer"}, "b": {"type": "boolean"}},
        }


class TestGenerateSchemaText:

    def test_example_document(self, example_spec: dict[str, Any]) -> None:
        text = generate_schema_text(example_spec, "ExampleDocument")
        assert '  "required": ["name", "location"],' in text
        assert '    "location": { "$ref": "LocationDocument" }' in text
        assert '      "items": { "type": "string" }' in text

    def test_parses_back(self, example_spec: dict[str, Any]) -> None:
        text = generate_schema_text(example_spec, "ExampleDocument")
        parsed = json.loads(text)
        assert parsed["properties"]["fruits"]["enum"] == ["apples", "lemons"]

    def test_strip_fields(self, example_spec: dict[str, Any]) -> None:
        policy = ExpansionPolicy(strip_fields=["required", "x-filterable-fields"])
        parsed = json.loads(generate_schema_text(example_spec, "ExampleDocument", policy))
        assert "required" not in parsed
        assert "x-filterable-fields" not in parsed

    def test_all_of_schema_is_merged(self) -> None:
        spec = {
            "components": {
                "schemas": {
                    "Base": {"properties": {"id": {"type": "string"}}},
                    "Thing": {
                        "allOf": [
                            {"$ref": "#/components/schemas/Base"},
                            {"properties": {"size": {"type": "integer"}}},
                        ]
                    },
                }
            }
        }
        parsed = json.loads(generate_schema_text(spec, "Thing"))
        assert parsed == {
            "properties": {"id": {"type": "string"}, "size": {"type": "integer"}},
        }

    def test_unknown_schema(self, example_spec: dict[str, Any]) -> None:
        with pytest.raises(NotFoundError):
            generate_schema_text(example_spec, "MissingDocument")
