"""Describe a schema's properties as human-readable field blocks.

Each property becomes one block: a header listing its type and constraints,
then its description word-wrapped underneath::

    .name (string, required)
        The name of the resource.

    .tags (array of string)
        Array of string tags associated with this resource.

Type information comes from two views of the same schema. The *original*
(unexpanded) schema still carries ``$ref`` strings, so it knows the names of
referenced definitions; the *expanded* schema (see
:func:`~specdocs.parser.resolver.expand_schema`) knows the concrete
``type`` behind every reference.
"""

from __future__ import annotations

import textwrap
from typing import Any, Optional

from specdocs.exceptions import NoDisplayablePropertiesError, NotFoundError
from specdocs.models import ExpansionPolicy, FieldsConfig
from specdocs.parser.resolver import expand_schema, get_schemas, lookup_schema, ref_name


def build_attribute_string(
    name: str,
    original: dict[str, Any],
    expanded: dict[str, Any],
    required: list[str],
) -> str:
    """Return the parenthesised attribute list for one property.

    Args:
        name: The property name.
        original: The property schema as written in the spec.
        expanded: The same property with references expanded.
        required: The owning schema's ``required`` names.

    Example::

        build_attribute_string("fruits", {...}, {"type": "string", "enum": ["apples", "lemons"]}, [])
        # "(string, one of 'apples', 'lemons')"
    """
    parts = [_type_label(original, expanded)]
    if expanded.get("readOnly") or original.get("readOnly"):
        parts.append("read-only")
    if name in required:
        parts.append("required")

    enum_values = expanded.get("enum") or original.get("enum")
    if enum_values:
        parts.append("one of " + ", ".join(f"'{value}'" for value in enum_values))

    return "(" + ", ".join(parts) + ")"


def _type_label(original: dict[str, Any], expanded: dict[str, Any]) -> str:
    prop_type = expanded.get("type")
    if prop_type == "array":
        items_ref = ref_name((original.get("items") or {}).get("$ref"))
        if items_ref:
            return f"array of {items_ref}"
        items = expanded.get("items") or {}
        return f"array of {items.get('type') or 'object'}"

    if prop_type in (None, "object"):
        return ref_name(original.get("$ref")) or "object"
    return prop_type


def format_property(
    name: str,
    original: dict[str, Any],
    expanded: dict[str, Any],
    required: list[str],
    config: Optional[FieldsConfig] = None,
) -> str:
    """Format one property as a header line plus wrapped description."""
    if config is None:
        config = FieldsConfig()

    block = f".{name} {build_attribute_string(name, original, expanded, required)}"
    description = original.get("description") or expanded.get("description")
    if description:
        padding = " " * config.indent
        block += "\n" + textwrap.fill(
            " ".join(str(description).split()),
            width=config.wrap_width + config.indent,
            initial_indent=padding,
            subsequent_indent=padding,
        )
    return block + "\n"


def format_fields(
    original: dict[str, Any],
    expanded: dict[str, Any],
    config: Optional[FieldsConfig] = None,
) -> str:
    """Format every entry of a ``properties`` map, in map order.

    Args:
        original: Schema holding the unexpanded ``properties`` and
            ``required`` list.
        expanded: The same schema with references expanded.
        config: Wrap width and indentation.

    Returns:
        One block per property, separated by a blank line.
    """
    required = list(original.get("required") or [])
    expanded_props = expanded.get("properties") or {}
    blocks = [
        format_property(
            name,
            prop if isinstance(prop, dict) else {},
            expanded_props.get(name) or {},
            required,
            config,
        )
        for name, prop in (original.get("properties") or {}).items()
    ]
    return "\n".join(blocks)


def generate_fields_text(
    spec: dict[str, Any],
    schema_name: str,
    config: Optional[FieldsConfig] = None,
) -> str:
    """Describe every field of the named schema.

    A schema built from ``allOf`` is described fragment by fragment: inline
    fragments with their own ``properties``, and ``$ref`` fragments through
    the referenced definition.

    Raises:
        NotFoundError: If *schema_name* is not a schema in the spec.
        NoDisplayablePropertiesError: If the schema, or a referenced
            ``allOf`` fragment, has nothing to describe.
        UnresolvableReferenceError: If a ``$ref`` dangles.
    """
    original = get_schemas(spec).get(schema_name)
    if not isinstance(original, dict):
        raise NotFoundError(f"Schema '{schema_name}' not found")
    return _schema_fields(spec, schema_name, original, config)


def _schema_fields(
    spec: dict[str, Any],
    schema_name: str,
    original: dict[str, Any],
    config: Optional[FieldsConfig],
) -> str:
    policy = ExpansionPolicy.inline_all()

    if "properties" in original:
        expanded = expand_schema(spec, original, policy, _path=frozenset({schema_name}))
        return format_fields(original, expanded, config)

    if "allOf" in original:
        texts = []
        for fragment in original["allOf"]:
            if not isinstance(fragment, dict):
                continue
            if "$ref" in fragment:
                name, definition = lookup_schema(spec, fragment["$ref"])
                if "properties" not in definition:
                    raise NoDisplayablePropertiesError(
                        f"allOf fragment '{name}' of '{schema_name}' has no properties to display"
                    )
                texts.append(_schema_fields(spec, name, definition, config))
            elif "properties" in fragment:
                expanded = expand_schema(spec, fragment, policy, _path=frozenset({schema_name}))
                texts.append(format_fields(fragment, expanded, config))
        return "\n".join(texts)

    raise NoDisplayablePropertiesError(
        f"Schema '{schema_name}' has neither 'properties' nor 'allOf'"
    )
