"""Print commands -- render documentation fragments from a spec.

Provides the ``specdocs print`` sub-command group. Every command takes the
spec path (or ``-`` for stdin) as its first argument and writes the
rendered text to stdout, ready to paste into the documentation site. The
``definitions``, ``operations`` and ``page`` commands ask the operator to
choose and order the items to include.

Errors raised by the renderers are reported on stderr and mapped to the
error's exit code.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

import typer

from specdocs.exceptions import InvalidSelectionError, SpecdocsError
from specdocs.models import GlobalConfig
from specdocs.output import error, info, print_data, success, suggest


print_app = typer.Typer(no_args_is_help=True)

EDITING_REMINDER = "Please be aware this output still needs some editing ('See also', Example, etc)"

SPEC_HELP = "Path to the OpenAPI spec (JSON or YAML), or '-' for stdin."


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn a :class:`SpecdocsError` into an error message and exit code."""
    try:
        yield
    except SpecdocsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _load(spec_path: str) -> dict[str, Any]:
    from specdocs.parser import load_spec

    return load_spec(spec_path)


def _load_for_prompts(spec_path: str) -> dict[str, Any]:
    if spec_path == "-":
        raise InvalidSelectionError(
            "Interactive commands read the selection from stdin; pass the spec as a file path"
        )
    return _load(spec_path)


def _config(ctx: typer.Context, output_dir: Optional[str] = None) -> GlobalConfig:
    from specdocs.config import resolve_config

    obj = ctx.obj or {}
    return resolve_config(cli_base_url=obj.get("base_url"), cli_output_dir=output_dir)


def _list_schemas(spec: dict[str, Any]) -> None:
    from specdocs.parser.resolver import get_schemas

    names = list(get_schemas(spec))
    info("Available schema objects:\n- " + "\n- ".join(names))


@print_app.command("fields")
def print_fields(
    ctx: typer.Context,
    spec_path: str = typer.Argument(help=SPEC_HELP),
    schema_name: Optional[str] = typer.Argument(None, help="Schema to describe."),
) -> None:
    """Describe each field of a schema with its type and constraints.

    Without a schema name, lists the available schemas.

    Example::

        specdocs print fields openapi.yaml ThngDocument
    """
    from specdocs.render.fields import generate_fields_text

    with _reporting_errors():
        spec = _load(spec_path)
        if not schema_name:
            _list_schemas(spec)
            return
        config = _config(ctx)
        print_data(generate_fields_text(spec, schema_name, config.listing).strip())


@print_app.command("schema")
def print_schema(
    ctx: typer.Context,
    spec_path: str = typer.Argument(help=SPEC_HELP),
    schema_name: Optional[str] = typer.Argument(None, help="Schema to print."),
) -> None:
    """Print a schema expanded and folded into compact JSON.

    Example::

        specdocs print schema openapi.yaml ThngDocument
    """
    from specdocs.render.folder import generate_schema_text

    with _reporting_errors():
        spec = _load(spec_path)
        if not schema_name:
            _list_schemas(spec)
            return
        config = _config(ctx)
        print_data(generate_schema_text(spec, schema_name, config.expansion))


@print_app.command("definition")
def print_definition(
    ctx: typer.Context,
    spec_path: str = typer.Argument(help=SPEC_HELP),
    schema_name: Optional[str] = typer.Argument(None, help="Schema to document."),
    example: Optional[str] = typer.Option(
        None, "--example", "-e", help="Summary of an operation whose response holds the example."
    ),
) -> None:
    """Print the data model section (fields, schema, example) for a schema.

    Example::

        specdocs print definition openapi.yaml ThngDocument --example "Read a Thng"
    """
    from specdocs.render.definitions import generate_definition_text

    with _reporting_errors():
        spec = _load(spec_path)
        if not schema_name:
            _list_schemas(spec)
            return
        config = _config(ctx)
        print_data(generate_definition_text(spec, schema_name, example, config))
        suggest(EDITING_REMINDER)


@print_app.command("definitions")
def print_definitions(
    ctx: typer.Context,
    spec_path: str = typer.Argument(help=SPEC_HELP),
    tag: str = typer.Argument(help="Tag whose related definitions are offered."),
) -> None:
    """Choose and print the data model sections related to a tag."""
    from specdocs.interactive import ask_for_ordered_list
    from specdocs.render.definitions import find_schemas_for_tag, generate_definitions_text

    with _reporting_errors():
        spec = _load_for_prompts(spec_path)
        config = _config(ctx)
        names = ask_for_ordered_list(
            find_schemas_for_tag(spec, tag, config.expansion),
            "\nGenerating definitions:\n"
            "  Found the following related definitions (some may not be relevant for this page)",
        )
        print_data(generate_definitions_text(spec, names, config))
        suggest(EDITING_REMINDER)


@print_app.command("operation")
def print_operation(
    ctx: typer.Context,
    spec_path: str = typer.Argument(help=SPEC_HELP),
    summary: str = typer.Argument(help="Summary of the operation, e.g. 'Read all Thngs'."),
) -> None:
    """Print the request/response section for one operation.

    Example::

        specdocs print operation openapi.yaml "Create a Thng"
    """
    from specdocs.render.operations import generate_operation_text

    with _reporting_errors():
        spec = _load(spec_path)
        config = _config(ctx)
        print_data(generate_operation_text(spec, summary, config.snippets))
        suggest(EDITING_REMINDER)


@print_app.command("operations")
def print_operations(
    ctx: typer.Context,
    spec_path: str = typer.Argument(help=SPEC_HELP),
    tag: str = typer.Argument(help="Tag whose operations are offered."),
) -> None:
    """Choose and print the request/response sections of a tag's operations."""
    from specdocs.interactive import ask_for_ordered_list
    from specdocs.render.operations import find_summaries_for_tag, generate_operations_text

    with _reporting_errors():
        spec = _load_for_prompts(spec_path)
        config = _config(ctx)
        summaries = ask_for_ordered_list(
            find_summaries_for_tag(spec, tag),
            "\nGenerating operations:\n  Found the following operations",
        )
        print_data(generate_operations_text(spec, summaries, config.snippets))
        suggest(EDITING_REMINDER)


@print_app.command("api-status")
def print_api_status(
    ctx: typer.Context,
    spec_path: str = typer.Argument(help=SPEC_HELP),
    tag: str = typer.Argument(help="Tag whose paths are summarised."),
) -> None:
    """Print the API status block for the paths of a tag."""
    from specdocs.render.status import generate_api_status_text

    with _reporting_errors():
        spec = _load(spec_path)
        config = _config(ctx)
        print_data(generate_api_status_text(spec, tag, config.pages.default_status_label))


@print_app.command("filter-table")
def print_filter_table(
    ctx: typer.Context,
    spec_path: str = typer.Argument(help=SPEC_HELP),
) -> None:
    """Print the table of filterable fields for every resource."""
    from specdocs.render.tables import generate_filter_table_text

    with _reporting_errors():
        spec = _load(spec_path)
        config = _config(ctx)
        print_data(generate_filter_table_text(spec, config.expansion))


@print_app.command("key-permissions")
def print_key_permissions(
    spec_path: str = typer.Argument(help=SPEC_HELP),
) -> None:
    """Print which API keys may call each method of each path."""
    from specdocs.render.tables import generate_key_permissions_text

    with _reporting_errors():
        print_data(generate_key_permissions_text(_load(spec_path)))


@print_app.command("page")
def print_page(
    ctx: typer.Context,
    spec_path: str = typer.Argument(help=SPEC_HELP),
    tag: str = typer.Argument(help="Tag to build the page for."),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", "-o", help="Directory receiving {tag}.md."
    ),
) -> None:
    """Build a whole documentation page for a tag and write it to {tag}.md.

    Example::

        specdocs print page openapi.yaml Thngs --output-dir docs/
    """
    from specdocs.render.page import generate_page

    with _reporting_errors():
        spec = _load_for_prompts(spec_path)
        config = _config(ctx, output_dir)
        path = generate_page(spec, tag, config)
        success(f"Wrote {path}")
