"""Operation sections: heading, description, request and response widgets."""

from __future__ import annotations

from typing import Any, Optional

from specdocs.exceptions import NotFoundError
from specdocs.models import SnippetConfig
from specdocs.parser.index import find_operation, operations_for_tag
from specdocs.render.snippets import request_widget, response_widget


def find_summaries_for_tag(spec: dict[str, Any], tag: str) -> list[str]:
    """Return the sorted summaries of every operation whose first tag is *tag*.

    Raises:
        NotFoundError: If the tag has no operations.
    """
    summaries = sorted(
        record.summary for record in operations_for_tag(spec, tag) if record.summary
    )
    if not summaries:
        raise NotFoundError(f"No operations found for tag '{tag}'")
    return summaries


def generate_operation_text(
    spec: dict[str, Any],
    summary: str,
    config: Optional[SnippetConfig] = None,
) -> str:
    """Render one operation as a documentation section.

    Raises:
        NotFoundError: If no operation has *summary*.
        MalformedSpecError: If the operation has no responses, or its body
            schema cannot be named.
        MissingExampleError: If a request or response example is missing.
    """
    record = find_operation(spec, summary)
    description = record.operation.get("description") or ""
    request = request_widget(spec, record, config).render()
    response = response_widget(spec, record).render()
    return f"## {summary}\n\n{description}\n{request}\n{response}\n___\n\n"


def generate_operations_text(
    spec: dict[str, Any],
    summaries: list[str],
    config: Optional[SnippetConfig] = None,
) -> str:
    """Render the given operations in order, separated by a blank line."""
    return "\n".join(generate_operation_text(spec, summary, config) for summary in summaries)
