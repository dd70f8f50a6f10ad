"""Inspect commands -- examine what a spec contains.

Provides the ``specdocs inspect`` sub-command group with read-only
commands listing the schemas, operations and tags of a spec. They help
documentation authors find the names the ``print`` commands expect (schema
names, operation summaries, tags).
"""

from __future__ import annotations

from typing import Any

import typer

from specdocs.output import error, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)

SPEC_HELP = "Path to the OpenAPI spec (JSON or YAML), or '-' for stdin."


def _load_spec(spec_path: str) -> dict[str, Any]:
    """Load the spec, exiting with the error's code on failure.

    Raises:
        typer.Exit: When the spec cannot be loaded.
    """
    from specdocs.exceptions import SpecdocsError
    from specdocs.parser import load_spec

    try:
        return load_spec(spec_path)
    except SpecdocsError as exc:
        error(f"Failed to load spec: {exc}")
        raise typer.Exit(code=exc.exit_code) from None


def _records(spec: dict[str, Any]):  # noqa: ANN202
    from specdocs.exceptions import SpecdocsError
    from specdocs.parser import build_operation_index

    try:
        return build_operation_index(spec)
    except SpecdocsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


@inspect_app.command("schemas")
def inspect_schemas(
    spec_path: str = typer.Argument(help=SPEC_HELP),
) -> None:
    """List all schemas defined in the spec.

    Shows each entry of ``components.schemas`` with its type, whether it is
    a document (shown by name rather than inlined), and up to five
    property names.

    Example::

        specdocs inspect schemas openapi.yaml
    """
    from specdocs.config import resolve_config
    from specdocs.parser.resolver import get_schemas

    spec = _load_spec(spec_path)
    schemas = get_schemas(spec)
    if not schemas:
        info("No schemas defined in this spec.")
        return

    policy = resolve_config().expansion
    headers = ["Schema", "Type", "Document", "Properties"]
    rows: list[list[str]] = []
    for name, schema in sorted(schemas.items()):
        if not isinstance(schema, dict):
            rows.append([name, "unknown", "", ""])
            continue
        prop_names = list((schema.get("properties") or {}).keys())
        props = ", ".join(prop_names[:5])
        if len(prop_names) > 5:
            props += "..."
        if not prop_names and "allOf" in schema:
            props = "(allOf)"
        rows.append([
            name,
            schema.get("type", "object"),
            "Yes" if policy.is_document(name, schema) else "",
            props,
        ])

    get_output().print_table(headers, rows, title=f"Schemas ({len(rows)})")


@inspect_app.command("operations")
def inspect_operations(
    spec_path: str = typer.Argument(help=SPEC_HELP),
) -> None:
    """List every operation with its method, path, summary, tag and status.

    Example::

        specdocs inspect operations openapi.yaml
    """
    from specdocs.config import resolve_config

    spec = _load_spec(spec_path)
    default_label = resolve_config().pages.default_status_label

    headers = ["Method", "Path", "Summary", "Tag", "Status"]
    rows = [
        [
            record.method.value.upper(),
            record.path,
            record.summary or "-",
            record.primary_tag or "-",
            record.status(default_label),
        ]
        for record in _records(spec)
    ]
    get_output().print_table(headers, rows, title=f"Operations ({len(rows)})")


@inspect_app.command("tags")
def inspect_tags(
    spec_path: str = typer.Argument(help=SPEC_HELP),
) -> None:
    """List the tags that group operations into pages, with operation counts.

    Example::

        specdocs inspect tags openapi.yaml
    """
    spec = _load_spec(spec_path)

    counts: dict[str, int] = {}
    for record in _records(spec):
        if record.primary_tag:
            counts[record.primary_tag] = counts.get(record.primary_tag, 0) + 1

    if not counts:
        info("No tagged operations in this spec.")
        return

    rows = [[tag, str(count)] for tag, count in counts.items()]
    get_output().print_table(["Tag", "Operations"], rows, title=f"Tags ({len(rows)})")
