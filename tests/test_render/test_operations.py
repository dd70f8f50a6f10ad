"""Tests for specdocs.render.operations."""

from __future__ import annotations

import json
from typing import Any

import pytest

from specdocs.exceptions import MissingExampleError, NotFoundError
from specdocs.models import SnippetConfig
from specdocs.render.operations import (
    find_summaries_for_tag,
    generate_operation_text,
    generate_operations_text,
)


def _blocks(text: str) -> list[dict[str, Any]]:
    """Parse every ``[block:code]`` widget in *text*."""
    blocks = []
    for chunk in text.split("[block:code]\n")[1:]:
        blocks.append(json.loads(chunk.split("\n[/block]", 1)[0]))
    return blocks


class TestFindSummariesForTag:

    def test_sorted(self, example_spec: dict[str, Any]) -> None:
        assert find_summaries_for_tag(example_spec, "Examples") == [
            "Create an example",
            "Delete an example",
            "Read all examples",
            "Read an example",
            "Update an example",
        ]

    def test_unknown_tag(self, example_spec: dict[str, Any]) -> None:
        with pytest.raises(NotFoundError, match="Nope"):
            find_summaries_for_tag(example_spec, "Nope")


class TestGenerateOperationText:

    def test_layout(self, example_spec: dict[str, Any]) -> None:
        text = generate_operation_text(example_spec, "Create an example")
        assert text.startswith(
            "## Create an example\n\nCreate a new example resource.\n[block:code]\n"
        )
        assert "[/block]\n[block:code]\n" in text
        assert text.endswith("[/block]\n___\n\n")

    def test_widgets(self, example_spec: dict[str, Any]) -> None:
        text = generate_operation_text(example_spec, "Create an example")
        request, response = _blocks(text)
        assert [code["language"] for code in request["codes"]] == ["http", "curl", "javascript"]
        assert response["codes"][0]["name"] == "Response"
        assert response["codes"][0]["code"].startswith("HTTP/1.1 201 Created\n")

    def test_snippet_config(self, example_spec: dict[str, Any]) -> None:
        config = SnippetConfig(base_url="https://api.test", sdk_name="client.js")
        request = _blocks(generate_operation_text(example_spec, "Read an example", config))[0]
        assert "https://api.test/examples/:exampleId" in request["codes"][1]["code"]
        assert request["codes"][2]["name"] == "client.js"

    def test_unknown_summary(self, example_spec: dict[str, Any]) -> None:
        with pytest.raises(NotFoundError):
            generate_operation_text(example_spec, "Frobnicate")

    def test_missing_example_propagates(self) -> None:
        spec = {
            "paths": {
                "/a": {
                    "post": {
                        "summary": "Make A",
                        "requestBody": {
                            "content": {"application/json": {"schema": {"title": "A"}}}
                        },
                        "responses": {"201": {"description": "Created"}},
                    }
                }
            }
        }
        with pytest.raises(MissingExampleError):
            generate_operation_text(spec, "Make A")


class TestGenerateOperationsText:

    def test_joined_in_given_order(self, example_spec: dict[str, Any]) -> None:
        first = generate_operation_text(example_spec, "Read an example")
        second = generate_operation_text(example_spec, "Delete an example")
        combined = generate_operations_text(
            example_spec, ["Read an example", "Delete an example"]
        )
        assert combined == first + "\n" + second

    def test_empty(self, example_spec: dict[str, Any]) -> None:
        assert generate_operations_text(example_spec, []) == ""
