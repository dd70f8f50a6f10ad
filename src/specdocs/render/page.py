"""Assemble and write a complete documentation page for one tag.

A page has five sections, always in this order:

1. a placeholder preamble for the author to replace,
2. the API status summary,
3. a "Jump To" list of the chosen definitions and operations,
4. the data model section of every chosen definition,
5. the request/response section of every chosen operation.

The operator picks and orders the definitions and operations once, through
:func:`~specdocs.interactive.ask_for_ordered_list`; the same choices feed
both the jump list and the sections. The whole page is built in memory
before anything is written, so a failing definition or operation leaves no
file behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from specdocs.config import atomic_write
from specdocs.interactive import ask_for_ordered_list
from specdocs.models import GlobalConfig
from specdocs.render.definitions import (
    find_schemas_for_tag,
    generate_definitions_text,
    section_anchor,
)
from specdocs.render.operations import find_summaries_for_tag, generate_operations_text
from specdocs.render.status import generate_api_status_text

logger = logging.getLogger(__name__)

PREAMBLE = "TODO: Preamble explaining general purpose and concepts of the API.\n___\n\n\n"

SCHEMAS_PROMPT = (
    "\nGenerating Jump To (1/2):\n"
    "  Found the following related definitions (some may not be relevant for this page)"
)
SUMMARIES_PROMPT = "\nGenerating Jump To (2/2):\n  Found the following related operations"


def operation_anchor(summary: str) -> str:
    """Approximate anchor of an operation heading; punctuation is kept as-is."""
    return "#section-" + summary.lower().replace(" ", "_")


def generate_jump_to(schema_names: list[str], summaries: list[str]) -> str:
    """Render the "Jump To" link list."""
    text = "## Jump To&darr;\n"
    text += "".join(f"[{name}]({section_anchor(name)})\n" for name in schema_names)
    text += "\n".join(f"[{summary}]({operation_anchor(summary)})" for summary in summaries)
    return text + "\n___\n\n\n"


def assemble_page(
    spec: dict[str, Any],
    tag: str,
    config: Optional[GlobalConfig] = None,
    read_line: Optional[Callable[[], str]] = None,
) -> str:
    """Build the full page text for *tag*.

    Args:
        spec: The loaded spec.
        tag: Operations whose first tag is *tag* belong to the page.
        config: Effective configuration; defaults to :class:`GlobalConfig()`.
        read_line: Operator input source passed to the orderer.

    Raises:
        NotFoundError: If the tag has no operations or related definitions.
        InvalidSelectionError: If the operator's selection is invalid.
        SpecdocsError: Any failure from the section renderers.
    """
    if config is None:
        config = GlobalConfig()

    status = generate_api_status_text(spec, tag, config.pages.default_status_label)
    schema_names = find_schemas_for_tag(spec, tag, config.expansion)
    summaries = find_summaries_for_tag(spec, tag)

    chosen_schemas = ask_for_ordered_list(schema_names, SCHEMAS_PROMPT, read_line)
    chosen_summaries = ask_for_ordered_list(summaries, SUMMARIES_PROMPT, read_line)

    return (
        PREAMBLE
        + status
        + "\n\n\n"
        + generate_jump_to(chosen_schemas, chosen_summaries)
        + generate_definitions_text(spec, chosen_schemas, config)
        + generate_operations_text(spec, chosen_summaries, config.snippets)
    )


def write_page(text: str, tag: str, output_dir: str = ".") -> Path:
    """Write *text* to ``{output_dir}/{tag}.md``, replacing any existing file."""
    path = Path(output_dir) / f"{tag}.md"
    atomic_write(path, text)
    logger.debug("Wrote %d characters to %s", len(text), path)
    return path


def generate_page(
    spec: dict[str, Any],
    tag: str,
    config: Optional[GlobalConfig] = None,
    read_line: Optional[Callable[[], str]] = None,
) -> Path:
    """Assemble the page for *tag* and write it to the configured directory."""
    if config is None:
        config = GlobalConfig()
    text = assemble_page(spec, tag, config, read_line)
    return write_page(text, tag, config.pages.output_dir)
