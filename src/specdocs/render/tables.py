"""Spec-wide reference tables: filterable fields and API key permissions."""

from __future__ import annotations

from typing import Any, Optional

from specdocs.models import ExpansionPolicy, OperationRecord, ParametersTable
from specdocs.parser.index import build_operation_index
from specdocs.parser.resolver import get_schemas
from specdocs.render.snippets import fixup_path

# x-api-keys role names and their one-letter symbols.
ACTOR_SYMBOLS = {
    "Operator": "O",
    "Trusted Application": "T",
    "Application": "A",
    "Application User": "U",
    "Device": "D",
}


def _field_name(item: Any) -> str:
    if isinstance(item, dict):
        return str(item.get("name", ""))
    return str(item)


def generate_filter_table_text(
    spec: dict[str, Any],
    policy: Optional[ExpansionPolicy] = None,
) -> str:
    """Parameters table listing the filterable fields of every resource.

    The resource column drops the document marker from the schema name, so
    ``ThngDocument`` is listed as ``Thng``.
    """
    if policy is None:
        policy = ExpansionPolicy()

    rows = []
    for name, definition in get_schemas(spec).items():
        if not isinstance(definition, dict) or not definition.get("x-filterable-fields"):
            continue
        resource = name.split(policy.document_marker)[0] if policy.document_marker else name
        fields = ", ".join(f"`{_field_name(item)}`" for item in definition["x-filterable-fields"])
        rows.append([resource, fields])

    return ParametersTable(headers=["Resource", "Available Fields"], rows=rows).render()


def _actor_symbols(record: OperationRecord) -> str:
    roles = record.operation.get("x-api-keys") or []
    return ", ".join(ACTOR_SYMBOLS.get(role, role) for role in roles)


def generate_key_permissions_text(spec: dict[str, Any]) -> str:
    """List, per path, which actors' API keys may call each method.

    Example output::

        * `/thngs/:thngId`
          * `GET` - Read a Thng (O, T, A)
          * `DELETE` - Delete a Thng (O)
    """
    by_path: dict[str, list[OperationRecord]] = {}
    for record in build_operation_index(spec):
        by_path.setdefault(record.path, []).append(record)

    text = "\n"
    for path in sorted(by_path):
        text += f"* `{fixup_path(path)}`\n"
        for record in by_path[path]:
            text += (
                f"  * `{record.method.value.upper()}` - {record.summary or ''}"
                f" ({_actor_symbols(record)})\n"
            )
        text += "\n"
    return text
