"""Fold pretty-printed schema JSON into a denser, still-valid JSON text.

``json.dumps(schema, indent=2)`` spends three lines on every one-key object
and one line per array element, which makes schema views long and hard to
scan. :func:`fold` makes a single top-to-bottom pass over the lines and
rewrites two shapes onto one line::

    "items": {                    "items": { "type": "string" }
      "type": "string"      ->
    },

    "enum": [                     "enum": ["apples", "lemons"]
      "apples",             ->
      "lemons"
    ]

Each line is first classified (open object, open array, close, scalar entry,
or an entry whose value was already folded). Only scalar entries may be
folded into a parent, so folding already-folded text changes nothing.
"""

from __future__ import annotations

import enum
import json
from typing import Any, Optional

from specdocs.models import ExpansionPolicy
from specdocs.parser.resolver import expand_named_schema


class LineKind(enum.Enum):
    OPEN_OBJECT = "open-object"
    OPEN_ARRAY = "open-array"
    CLOSE_OBJECT = "close-object"
    CLOSE_ARRAY = "close-array"
    SCALAR = "scalar"
    COMPOSITE = "composite"


def _entry_value(stripped: str) -> str:
    """Return the value part of an entry line, without a trailing comma."""
    value = stripped
    if stripped.startswith('"'):
        # Skip over the leading JSON string; it is a key when a colon follows.
        index = 1
        while index < len(stripped):
            char = stripped[index]
            if char == "\\":
                index += 2
                continue
            if char == '"':
                break
            index += 1
        rest = stripped[index + 1:]
        if rest.startswith(":"):
            value = rest[1:].strip()
    if value.endswith(","):
        value = value[:-1]
    return value


def classify(line: str) -> LineKind:
    """Classify one line of two-space-indented JSON text."""
    stripped = line.strip()
    if stripped in ("}", "},"):
        return LineKind.CLOSE_OBJECT
    if stripped in ("]", "],"):
        return LineKind.CLOSE_ARRAY

    value = _entry_value(stripped)
    if value == "{":
        return LineKind.OPEN_OBJECT
    if value == "[":
        return LineKind.OPEN_ARRAY
    if value[:1] in ("{", "["):
        return LineKind.COMPOSITE
    return LineKind.SCALAR


def fold(text: str) -> str:
    """Fold single-entry objects and scalar-only arrays onto one line.

    Args:
        text: JSON text as produced by ``json.dumps(obj, indent=2)``.

    Returns:
        The folded text. It parses to the same value as *text*.
    """
    lines = text.split("\n")
    kinds = [classify(line) for line in lines]
    folded: list[str] = []

    i = 0
    while i < len(lines):
        line, kind = lines[i], kinds[i]

        if kind is LineKind.OPEN_OBJECT and _is_single_entry_object(kinds, i):
            folded.append(f"{line} {lines[i + 1].strip()} {lines[i + 2].strip()}")
            i += 3
            continue

        if kind is LineKind.OPEN_ARRAY:
            end = _scalar_array_end(kinds, i)
            if end is not None:
                items = [item.strip() for item in lines[i + 1:end]]
                folded.append(f"{line}{' '.join(items)}{lines[end].strip()}")
                i = end + 1
                continue

        folded.append(line)
        i += 1

    return "\n".join(folded)


def _is_single_entry_object(kinds: list[LineKind], i: int) -> bool:
    return (
        i + 2 < len(kinds)
        and kinds[i + 1] is LineKind.SCALAR
        and kinds[i + 2] is LineKind.CLOSE_OBJECT
    )


def _scalar_array_end(kinds: list[LineKind], i: int) -> Optional[int]:
    """Index of the closing ``]`` when every entry after line *i* is scalar."""
    j = i + 1
    while j < len(kinds) and kinds[j] is LineKind.SCALAR:
        j += 1
    if j < len(kinds) and j > i + 1 and kinds[j] is LineKind.CLOSE_ARRAY:
        return j
    return None


def merge_all_of(schema: dict[str, Any]) -> dict[str, Any]:
    """Blend ``allOf`` fragments' ``properties`` into one ``properties`` map.

    Later fragments override earlier ones on a name collision. Schemas
    without ``allOf`` are returned unchanged.
    """
    if "allOf" not in schema:
        return schema

    merged = {key: value for key, value in schema.items() if key != "allOf"}
    properties: dict[str, Any] = dict(merged.get("properties") or {})
    for fragment in schema["allOf"]:
        if isinstance(fragment, dict):
            properties.update(fragment.get("properties") or {})
    merged["properties"] = properties
    return merged


def generate_schema_text(
    spec: dict[str, Any],
    schema_name: str,
    policy: Optional[ExpansionPolicy] = None,
) -> str:
    """Render the named schema as expanded, folded JSON text.

    Args:
        spec: The full spec.
        schema_name: Name under ``components.schemas``.
        policy: Expansion policy (document placeholders, stripped fields).

    Raises:
        NotFoundError: If the schema does not exist.
        UnresolvableReferenceError: If a nested ``$ref`` dangles.
    """
    expanded = merge_all_of(expand_named_schema(spec, schema_name, policy))
    return fold(json.dumps(expanded, indent=2, ensure_ascii=False))
