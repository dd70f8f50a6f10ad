"""Tests for specdocs.render.fields."""

from __future__ import annotations

from typing import Any

import pytest

from specdocs.exceptions import NoDisplayablePropertiesError, NotFoundError
from specdocs.models import FieldsConfig
from specdocs.render.fields import (
    build_attribute_string,
    format_property,
    generate_fields_text,
)


def _spec(schemas: dict[str, Any]) -> dict[str, Any]:
    return {"paths": {}, "components": {"schemas": schemas}}


class TestBuildAttributeString:

    def test_plain_type(self) -> None:
        assert build_attribute_string("a", {"type": "string"}, {"type": "string"}, []) == "(string)"

    def test_all_attributes(self) -> None:
        prop = {"type": "string", "readOnly": True, "enum": ["x", "y"]}
        assert (
            build_attribute_string("a", prop, prop, ["a"])
            == "(string, read-only, required, one of 'x', 'y')"
        )

    def test_ref_uses_definition_name(self) -> None:
        original = {"$ref": "#/components/schemas/LocationDocument"}
        expanded = {"type": "object", "properties": {}}
        assert build_attribute_string("loc", original, expanded, []) == "(LocationDocument)"

    def test_ref_to_scalar_uses_concrete_type(self) -> None:
        original = {"$ref": "#/components/schemas/Timestamp"}
        assert build_attribute_string("t", original, {"type": "integer"}, []) == "(integer)"

    def test_array_of_ref(self) -> None:
        original = {"type": "array", "items": {"$ref": "#/components/schemas/TagDocument"}}
        expanded = {"type": "array", "items": {"type": "object"}}
        assert build_attribute_string("t", original, expanded, []) == "(array of TagDocument)"

    def test_array_of_inline_items(self) -> None:
        prop = {"type": "array", "items": {"type": "number"}}
        assert build_attribute_string("c", prop, prop, []) == "(array of number)"

    def test_array_without_items(self) -> None:
        prop = {"type": "array"}
        assert build_attribute_string("c", prop, prop, []) == "(array of object)"

    def test_untyped_is_object(self) -> None:
        assert build_attribute_string("c", {}, {}, []) == "(object)"


class TestFormatProperty:

    def test_no_description(self) -> None:
        prop = {"type": "boolean"}
        assert format_property("flag", prop, prop, []) == ".flag (boolean)\n"

    def test_wraps_description(self) -> None:
        prop = {"type": "string", "description": "aaa bbb ccc ddd eee fff"}
        config = FieldsConfig(wrap_width=20, indent=2)
        assert format_property("s", prop, prop, [], config) == (
            ".s (string)\n  aaa bbb ccc ddd eee\n  fff\n"
        )

    def test_collapses_whitespace_in_description(self) -> None:
        prop = {"type": "string", "description": "one\n  two"}
        assert format_property("s", prop, prop, []) == ".s (string)\n    one two\n"


class TestGenerateFieldsText:

    def test_example_document(self, example_spec: dict[str, Any]) -> None:
        text = generate_fields_text(example_spec, "ExampleDocument")
        assert text == (
            ".name (string, required)\n"
            "    The friendly name of this resource.\n"
            "\n"
            ".createdAt (integer, read-only)\n"
            "    Timestamp when the resource was created.\n"
            "\n"
            ".tags (array of string)\n"
            "    Array of string tags associated with this resource.\n"
            "\n"
            ".customFields (object)\n"
            "    Object of case-sensitive key-value pairs of custom fields.\n"
            "\n"
            ".fruits (string, one of 'apples', 'lemons')\n"
            "    The kind of fruit.\n"
            "\n"
            ".location (LocationDocument, required)\n"
            "    Where a resource was last seen.\n"
        )

    def test_lines_fit_wrap_width(self, example_spec: dict[str, Any]) -> None:
        config = FieldsConfig(wrap_width=20, indent=4)
        text = generate_fields_text(example_spec, "ExampleDocument", config)
        for line in text.splitlines():
            if line.startswith("    "):
                assert len(line) <= 24

    def test_all_of_fragments(self) -> None:
        spec = _spec({
            "Base": {"properties": {"id": {"type": "string"}}},
            "Thing": {
                "allOf": [
                    {"$ref": "#/components/schemas/Base"},
                    {"properties": {"size": {"type": "integer"}}, "required": ["size"]},
                ]
            },
        })
        assert generate_fields_text(spec, "Thing") == ".id (string)\n\n.size (integer, required)\n"

    def test_all_of_fragment_without_properties(self) -> None:
        spec = _spec({
            "Base": {"type": "string"},
            "Thing": {"allOf": [{"$ref": "#/components/schemas/Base"}]},
        })
        with pytest.raises(NoDisplayablePropertiesError, match="Base"):
            generate_fields_text(spec, "Thing")

    def test_scalar_schema_has_nothing_to_display(self) -> None:
        with pytest.raises(NoDisplayablePropertiesError):
            generate_fields_text(_spec({"Name": {"type": "string"}}), "Name")

    def test_unknown_schema(self, example_spec: dict[str, Any]) -> None:
        with pytest.raises(NotFoundError, match="Ghost"):
            generate_fields_text(example_spec, "Ghost")
