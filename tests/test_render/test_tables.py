"""Tests for specdocs.render.tables."""

from __future__ import annotations

import json
from typing import Any

from specdocs.models import ExpansionPolicy
from specdocs.render.tables import generate_filter_table_text, generate_key_permissions_text


def _table_data(text: str) -> dict[str, Any]:
    assert text.startswith("[block:parameters]\n")
    assert text.endswith("\n[/block]")
    return json.loads(text[len("[block:parameters]\n"):-len("\n[/block]")])


class TestFilterTable:

    def test_example_spec(self, example_spec: dict[str, Any]) -> None:
        table = _table_data(generate_filter_table_text(example_spec))
        assert table == {
            "data": {
                "h-0": "Resource",
                "h-1": "Available Fields",
                "0-0": "Example",
                "0-1": "`name`, `createdAt`",
                "1-0": "Location",
                "1-1": "`timestamp`",
            },
            "cols": 2,
            "rows": 2,
        }

    def test_without_marker_keeps_full_name(self, example_spec: dict[str, Any]) -> None:
        policy = ExpansionPolicy(document_marker=None)
        table = _table_data(generate_filter_table_text(example_spec, policy))
        assert table["data"]["0-0"] == "ExampleDocument"

    def test_no_filterable_schemas(self) -> None:
        table = _table_data(generate_filter_table_text({"components": {"schemas": {"A": {}}}}))
        assert table["rows"] == 0
        assert table["data"] == {"h-0": "Resource", "h-1": "Available Fields"}


class TestKeyPermissions:

    def test_example_spec(self, example_spec: dict[str, Any]) -> None:
        assert generate_key_permissions_text(example_spec) == (
            "\n"
            "* `/examples`\n"
            "  * `POST` - Create an example (A, O)\n"
            "  * `GET` - Read all examples (D, U)\n"
            "\n"
            "* `/examples/:exampleId`\n"
            "  * `GET` - Read an example (T, O)\n"
            "  * `PUT` - Update an example ()\n"
            "  * `DELETE` - Delete an example (O)\n"
            "\n"
            "* `/locations`\n"
            "  * `GET` - Read all locations ()\n"
            "\n"
        )

    def test_paths_sorted(self) -> None:
        spec = {
            "paths": {
                "/b": {"get": {"summary": "B"}},
                "/a": {"get": {"summary": "A", "x-api-keys": ["Device"]}},
            }
        }
        assert generate_key_permissions_text(spec) == (
            "\n* `/a`\n  * `GET` - A (D)\n\n* `/b`\n  * `GET` - B ()\n\n"
        )
