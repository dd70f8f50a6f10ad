"""Data model sections: fields, schema and example for one named definition.

A definition section looks like::

    ## ThngDocument Data Model

    <description>
    [block:code] Fields / Schema / Example tabs [/block]
    See also: [`LocationDocument`](#section-locationdocument-data-model)

    ### Filterable Fields
    ...

This module also discovers which definitions belong on a tag's page
(:func:`find_schemas_for_tag`).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator, Optional

from specdocs.exceptions import MissingExampleError, NotFoundError
from specdocs.models import (
    CodeSample,
    CodeWidget,
    ExpansionPolicy,
    GlobalConfig,
    ParametersTable,
)
from specdocs.parser.index import build_operation_index, find_operation, operations_for_tag
from specdocs.parser.resolver import (
    SCHEMA_REF_PREFIX,
    dereference,
    get_schemas,
    lookup_schema,
    ref_name,
)
from specdocs.render.fields import generate_fields_text
from specdocs.render.folder import generate_schema_text

logger = logging.getLogger(__name__)

# Documents that never get a "See also" link.
SEE_ALSO_EXCEPTIONS = frozenset({"CustomFieldsDocument", "IdentifiersDocument", "TagsDocument"})

EXAMPLE_PLACEHOLDER = "TODO"

FILTERABLE_FIELDS_INTRO = (
    "\n\n### Filterable Fields\n\n"
    "This resource type can be filtered using the following fields and operators.\n"
)

_LISTED_RESPONSE_CODES = ("200", "201")


def section_anchor(name: str) -> str:
    """Anchor of a definition heading, e.g. ``#section-thngdocument-data-model``."""
    return f"#section-{name.lower()}-data-model"


def _document_category(policy: ExpansionPolicy) -> ExpansionPolicy:
    # Always-inlined names are still documents for discovery purposes.
    return policy.model_copy(update={"always_inline": []})


def _iter_refs(node: Any) -> Iterator[str]:
    """Yield every ``$ref`` string in *node*, depth first."""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            yield ref
        for key, value in node.items():
            if key != "$ref":
                yield from _iter_refs(value)
    elif isinstance(node, list):
        for item in node:
            yield from _iter_refs(item)


def _content_schema(spec: dict[str, Any], holder: Any) -> Any:
    holder = dereference(spec, holder)
    if not isinstance(holder, dict):
        return None
    for entry in (holder.get("content") or {}).values():
        if isinstance(entry, dict) and "schema" in entry:
            return entry["schema"]
    return None


def find_schemas_for_tag(
    spec: dict[str, Any],
    tag: str,
    policy: Optional[ExpansionPolicy] = None,
) -> list[str]:
    """Return the sorted document names related to a tag's operations.

    Starts from the schemas of each operation's request body and 200/201
    responses, then follows property, array-item and ``allOf`` references
    transitively.

    Raises:
        NotFoundError: If the tag has no operations or no related documents.
        UnresolvableReferenceError: If a followed ``$ref`` dangles.
    """
    policy = _document_category(policy or ExpansionPolicy())
    records = operations_for_tag(spec, tag)
    if not records:
        raise NotFoundError(f"No operations found for tag '{tag}'")

    pending: list[str] = []
    for record in records:
        operation = record.operation
        if "requestBody" in operation:
            pending.extend(_iter_refs(_content_schema(spec, operation["requestBody"])))
        for code, response in (operation.get("responses") or {}).items():
            if str(code) in _LISTED_RESPONSE_CODES:
                pending.extend(_iter_refs(_content_schema(spec, response)))

    seen: dict[str, dict[str, Any]] = {}
    while pending:
        ref = pending.pop()
        if not ref.startswith(SCHEMA_REF_PREFIX) or ref_name(ref) in seen:
            continue
        name, definition = lookup_schema(spec, ref)
        seen[name] = definition
        pending.extend(_iter_refs(definition))

    names = sorted(
        name for name, definition in seen.items() if policy.is_document(name, definition)
    )
    if not names:
        raise NotFoundError(f"No schemas found for tag '{tag}'")
    return names


def see_also(
    spec: dict[str, Any],
    schema_name: str,
    policy: Optional[ExpansionPolicy] = None,
) -> list[str]:
    """Documents referenced by the schema's properties, in property order."""
    policy = _document_category(policy or ExpansionPolicy())
    definition = get_schemas(spec).get(schema_name) or {}
    properties = definition.get("properties")
    if not properties:
        logger.debug("No properties found for %s", schema_name)
        return []

    names: list[str] = []
    for prop in properties.values():
        if not isinstance(prop, dict):
            continue
        ref = prop.get("$ref")
        if not ref and prop.get("type") == "array":
            ref = (prop.get("items") or {}).get("$ref")
        if not ref or not ref.startswith(SCHEMA_REF_PREFIX):
            continue
        name, target = lookup_schema(spec, ref)
        if (
            policy.is_document(name, target)
            and name not in SEE_ALSO_EXCEPTIONS
            and name not in names
        ):
            names.append(name)
    return names


def _response_example(spec: dict[str, Any], response: Any) -> Any:
    response = dereference(spec, response)
    if not isinstance(response, dict):
        return None
    for entry in (response.get("content") or {}).values():
        if not isinstance(entry, dict):
            continue
        if entry.get("example") is not None:
            return entry["example"]
        for example in (entry.get("examples") or {}).values():
            if isinstance(example, dict) and example.get("value") is not None:
                return example["value"]
    return None


def generate_example_text(
    spec: dict[str, Any],
    schema_name: str,
    example_summary: Optional[str] = None,
) -> str:
    """Pretty-printed example object for a definition.

    With *example_summary*, the first response example of that operation is
    used. Otherwise the first response example whose schema refers to
    *schema_name* (directly or as array items) is used, falling back to a
    placeholder.

    Raises:
        NotFoundError: If *example_summary* names no operation.
        MissingExampleError: If that operation has no response example.
    """
    if example_summary:
        record = find_operation(spec, example_summary)
        for response in (record.operation.get("responses") or {}).values():
            example = _response_example(spec, response)
            if example is not None:
                return json.dumps(example, indent=2, ensure_ascii=False)
        raise MissingExampleError(f"No example for '{example_summary}' was found")

    wanted = SCHEMA_REF_PREFIX + schema_name
    for record in build_operation_index(spec):
        for response in (record.operation.get("responses") or {}).values():
            schema = _content_schema(spec, response)
            if not isinstance(schema, dict):
                continue
            refs = {schema.get("$ref"), (schema.get("items") or {}).get("$ref")}
            if wanted not in refs:
                continue
            example = _response_example(spec, response)
            if example is not None:
                return json.dumps(example, indent=2, ensure_ascii=False)
    return EXAMPLE_PLACEHOLDER


def filterable_fields_table(fields: list[Any]) -> ParametersTable:
    """Field / Type / Operators table for ``x-filterable-fields`` entries."""
    rows = []
    for item in fields:
        if isinstance(item, dict):
            operators = ", ".join(f"`{op}`" for op in item.get("operators") or [])
            rows.append([
                f"`{item.get('name', '')}`",
                str(item.get("type", "")).capitalize(),
                operators,
            ])
        else:
            rows.append([f"`{item}`", "", ""])
    return ParametersTable(headers=["Field", "Type", "Operators"], rows=rows)


def generate_definition_text(
    spec: dict[str, Any],
    schema_name: str,
    example_summary: Optional[str] = None,
    config: Optional[GlobalConfig] = None,
) -> str:
    """Render the full data model section for one definition.

    Raises:
        NotFoundError: If the schema (or *example_summary*) does not exist.
        NoDisplayablePropertiesError: If the schema has no fields.
        UnresolvableReferenceError: If a ``$ref`` dangles.
    """
    if config is None:
        config = GlobalConfig()

    definition = get_schemas(spec).get(schema_name)
    if not isinstance(definition, dict):
        raise NotFoundError(f"Schema '{schema_name}' not found")

    text = f"## {schema_name} Data Model\n\n{definition.get('description') or ''}\n"
    text += CodeWidget(
        codes=[
            CodeSample(
                name="Fields",
                language="text",
                code=generate_fields_text(spec, schema_name, config.listing),
            ),
            CodeSample(
                name="Schema",
                language="json",
                code=generate_schema_text(spec, schema_name, config.expansion),
            ),
            CodeSample(
                name="Example",
                language="json",
                code=generate_example_text(spec, schema_name, example_summary),
            ),
        ]
    ).render()

    links = [
        f"[`{name}`]({section_anchor(name)})"
        for name in see_also(spec, schema_name, config.expansion)
    ]
    if links:
        text += "\nSee also: " + ", ".join(links)

    filterable = definition.get("x-filterable-fields")
    if filterable:
        text += FILTERABLE_FIELDS_INTRO + filterable_fields_table(filterable).render()

    return text + "\n___\n\n"


def generate_definitions_text(
    spec: dict[str, Any],
    schema_names: list[str],
    config: Optional[GlobalConfig] = None,
) -> str:
    """Render several definitions in the given order."""
    return "".join(
        generate_definition_text(spec, name, config=config) + "\n" for name in schema_names
    )
