"""Tests for specdocs.render.page."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from specdocs.exceptions import InvalidSelectionError, MissingExampleError, NotFoundError
from specdocs.models import GlobalConfig
from specdocs.render.definitions import generate_definition_text
from specdocs.render.operations import generate_operation_text
from specdocs.render.page import (
    PREAMBLE,
    assemble_page,
    generate_jump_to,
    generate_page,
    operation_anchor,
    write_page,
)
from specdocs.render.status import generate_api_status_text


def _answers(*lines: str) -> Callable[[], str]:
    """A line reader that returns *lines* one per call."""
    pending = list(lines)
    return lambda: pending.pop(0)


class TestJumpTo:

    def test_operation_anchor(self) -> None:
        assert operation_anchor("Read all Thngs") == "#section-read_all_thngs"

    def test_layout(self) -> None:
        assert generate_jump_to(["ThngDocument"], ["Create a Thng", "Read a Thng"]) == (
            "## Jump To&darr;\n"
            "[ThngDocument](#section-thngdocument-data-model)\n"
            "[Create a Thng](#section-create_a_thng)\n"
            "[Read a Thng](#section-read_a_thng)\n"
            "___\n\n\n"
        )


class TestAssemblePage:

    def test_sections_in_order(self, example_spec: dict[str, Any]) -> None:
        # Schemas: ExampleDocument, GeoJSONPointDocument, LocationDocument.
        # Summaries: Create, Delete, Read all, Read an, Update.
        text = assemble_page(example_spec, "Examples", read_line=_answers("2,0", "3"))

        expected = (
            PREAMBLE
            + generate_api_status_text(example_spec, "Examples")
            + "\n\n\n"
            + generate_jump_to(["LocationDocument", "ExampleDocument"], ["Read an example"])
            + generate_definition_text(example_spec, "LocationDocument") + "\n"
            + generate_definition_text(example_spec, "ExampleDocument") + "\n"
            + generate_operation_text(example_spec, "Read an example")
        )
        assert text == expected

    def test_candidates_are_listed(
        self, example_spec: dict[str, Any], capsys: pytest.CaptureFixture[str]
    ) -> None:
        assemble_page(example_spec, "Examples", read_line=_answers("0", "0"))
        out = capsys.readouterr().err
        assert "Generating Jump To (1/2)" in out
        assert "  1: GeoJSONPointDocument\n" in out
        assert "Generating Jump To (2/2)" in out
        assert "  4: Update an example\n" in out

    def test_status_label_from_config(self, example_spec: dict[str, Any]) -> None:
        config = GlobalConfig()
        config.pages.default_status_label = "Stable"
        text = assemble_page(example_spec, "Examples", config, _answers("0", "0"))
        assert "Stable:\n`/examples/{exampleId}`\n" in text

    def test_unknown_tag(self, example_spec: dict[str, Any]) -> None:
        with pytest.raises(NotFoundError):
            assemble_page(example_spec, "Nope", read_line=_answers())

    def test_invalid_selection(self, example_spec: dict[str, Any]) -> None:
        with pytest.raises(InvalidSelectionError):
            assemble_page(example_spec, "Examples", read_line=_answers("9"))


class TestWritePage:

    def test_writes_tag_file(self, tmp_path: Path) -> None:
        path = write_page("hello", "Things", str(tmp_path))
        assert path == tmp_path / "Things.md"
        assert path.read_text(encoding="utf-8") == "hello"

    def test_replaces_existing_file(self, tmp_path: Path) -> None:
        (tmp_path / "Things.md").write_text("old", encoding="utf-8")
        write_page("new", "Things", str(tmp_path))
        assert (tmp_path / "Things.md").read_text(encoding="utf-8") == "new"


class TestGeneratePage:

    def test_writes_to_configured_dir(self, example_spec: dict[str, Any], tmp_path: Path) -> None:
        config = GlobalConfig()
        config.pages.output_dir = str(tmp_path)
        path = generate_page(example_spec, "Locations", config, _answers("1", "0"))
        assert path == tmp_path / "Locations.md"
        text = path.read_text(encoding="utf-8")
        assert text.startswith(PREAMBLE + "**API Status**\n")
        assert "## LocationDocument Data Model" in text
        assert "## Read all locations" in text

    def test_failure_leaves_no_file(self, example_spec: dict[str, Any], tmp_path: Path) -> None:
        del example_spec["paths"]["/locations"]["get"]["responses"]["200"]["content"][
            "application/json"
        ]["example"]
        config = GlobalConfig()
        config.pages.output_dir = str(tmp_path)
        with pytest.raises(MissingExampleError):
            generate_page(example_spec, "Locations", config, _answers("1", "0"))
        assert list(tmp_path.iterdir()) == []
