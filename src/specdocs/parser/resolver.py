"""Resolve ``$ref`` pointers into inline schema bodies, selectively.

OpenAPI documents use ``$ref`` pointers (e.g.,
``{"$ref": "#/components/schemas/Pet"}``) to avoid repetition. For display
purposes a fully dereferenced schema is too verbose: a ``ThngDocument`` that
embeds a ``ProductDocument`` that embeds a ``LocationDocument`` reads badly.
This module produces an *expanded copy* of a schema subtree that inlines
small referenced schemas but leaves *document-category* schemas (top-level
resources, see :class:`~specdocs.models.ExpansionPolicy`) as a short
placeholder carrying just their name::

    {"$ref": "LocationDocument"}

Circular references are detected via the explicit set of schema names on the
current expansion path; re-entering one yields the same placeholder.

Public functions:

* :func:`expand_schema` -- expand an arbitrary schema subtree.
* :func:`expand_named_schema` -- expand ``components.schemas[<name>]``.
* :func:`resolve_pointer` -- resolve any internal JSON pointer verbatim.
* :func:`ref_name` -- ``"#/components/schemas/Pet"`` -> ``"Pet"``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from specdocs.exceptions import NotFoundError, UnresolvableReferenceError
from specdocs.models import ExpansionPolicy

logger = logging.getLogger(__name__)

SCHEMA_REF_PREFIX = "#/components/schemas/"


def ref_name(ref: Optional[str]) -> str:
    """Return the schema name a ``$ref`` string points at, or ``""``.

    Example::

        ref_name("#/components/schemas/ThngDocument")  # 'ThngDocument'
    """
    if not ref:
        return ""
    return ref.rsplit("/", 1)[-1].replace("~1", "/").replace("~0", "~")


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Return ``components.schemas``, or an empty mapping when absent."""
    components = spec.get("components") or {}
    schemas = components.get("schemas") or {}
    return schemas if isinstance(schemas, dict) else {}


def lookup_schema(spec: dict[str, Any], ref: str) -> tuple[str, dict[str, Any]]:
    """Resolve a schema ``$ref`` to ``(name, definition)``.

    Raises:
        UnresolvableReferenceError: If *ref* is not a
            ``#/components/schemas/`` pointer or names an absent schema.
    """
    if not ref.startswith(SCHEMA_REF_PREFIX):
        raise UnresolvableReferenceError(
            f"Cannot resolve $ref '{ref}': only {SCHEMA_REF_PREFIX}<name> is supported here"
        )
    name = ref_name(ref)
    definition = get_schemas(spec).get(name)
    if not isinstance(definition, dict):
        raise UnresolvableReferenceError(
            f"Cannot resolve $ref '{ref}': schema '{name}' not found"
        )
    return name, definition


def expand_named_schema(
    spec: dict[str, Any],
    name: str,
    policy: Optional[ExpansionPolicy] = None,
) -> dict[str, Any]:
    """Expand the schema registered as ``components.schemas[name]``.

    The named schema itself is always expanded (it is the subject being
    displayed) even when it is a document; its own name is placed on the
    expansion path so self-references become placeholders.

    Raises:
        NotFoundError: If *name* is not a schema in the spec.
        UnresolvableReferenceError: If a nested ``$ref`` dangles.
    """
    definition = get_schemas(spec).get(name)
    if not isinstance(definition, dict):
        raise NotFoundError(f"Schema '{name}' not found")
    return expand_schema(spec, definition, policy, _path=frozenset({name}))


def expand_schema(
    spec: dict[str, Any],
    target: Any,
    policy: Optional[ExpansionPolicy] = None,
    _path: frozenset[str] = frozenset(),
) -> Any:
    """Return an expanded copy of *target* according to *policy*.

    Expansion rules, applied recursively:

    1. Scalars are returned as-is; lists are expanded element-wise (so a
       list of scalars is copied unchanged).
    2. Dicts without ``$ref`` are expanded value by value, dropping any key
       listed in ``policy.strip_fields`` (keys of a ``properties`` map are
       property names and are never stripped).
    3. A ``$ref`` to a document-category schema becomes
       ``{"$ref": "<Name>"}`` unless the name is always inlined.
    4. Any other ``$ref`` is replaced by its expanded target.

    ``allOf`` fragments are composition rather than references to a separate
    resource, so they are always inlined.

    Args:
        spec: The full spec, used to look up referenced schemas.
        target: The schema subtree to expand. Never mutated.
        policy: Expansion policy; defaults to :class:`ExpansionPolicy()`.
        _path: Schema names on the current expansion path (cycle guard).

    Raises:
        UnresolvableReferenceError: If a ``$ref`` names an absent schema.
    """
    if policy is None:
        policy = ExpansionPolicy()
    return _expand(spec, target, policy, _path, in_properties=False, force_inline=False)


def _expand(
    spec: dict[str, Any],
    node: Any,
    policy: ExpansionPolicy,
    path: frozenset[str],
    in_properties: bool,
    force_inline: bool,
) -> Any:
    if isinstance(node, list):
        return [_expand(spec, item, policy, path, False, force_inline) for item in node]

    if not isinstance(node, dict):
        return node

    ref = node.get("$ref")
    if isinstance(ref, str):
        return _expand_ref(spec, ref, policy, path, force_inline)

    result: dict[str, Any] = {}
    for key, value in node.items():
        if not in_properties and key in policy.strip_fields:
            continue
        result[key] = _expand(
            spec,
            value,
            policy,
            path,
            in_properties=(key == "properties" and not in_properties),
            force_inline=(key == "allOf" and not in_properties),
        )
    return result


def _expand_ref(
    spec: dict[str, Any],
    ref: str,
    policy: ExpansionPolicy,
    path: frozenset[str],
    force_inline: bool,
) -> dict[str, Any]:
    name, definition = lookup_schema(spec, ref)

    if name in path:
        logger.debug("Cycle at %s; substituting placeholder", name)
        return {"$ref": name}

    if not force_inline and policy.is_document(name, definition):
        return {"$ref": name}

    return _expand(spec, definition, policy, path | {name}, False, False)


def resolve_pointer(spec: dict[str, Any], ref: str) -> Any:
    """Resolve a single internal JSON pointer against the spec, verbatim.

    Parses references like ``#/components/requestBodies/ThngBody`` and
    navigates the spec to the referenced value, handling RFC 6901 escaping
    (``~0`` for ``~``, ``~1`` for ``/``). The target is returned without
    further expansion.

    Raises:
        UnresolvableReferenceError: If the reference is external or any
            segment does not exist.
    """
    if not ref.startswith("#/"):
        raise UnresolvableReferenceError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )

    current: Any = spec
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise UnresolvableReferenceError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found at path"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise UnresolvableReferenceError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise UnresolvableReferenceError(
                f"Cannot resolve $ref '{ref}': "
                f"cannot navigate into {type(current).__name__}"
            )

    return current


def dereference(spec: dict[str, Any], node: Any) -> Any:
    """Follow ``$ref`` chains on *node* (e.g. a request body) until a concrete object."""
    seen: set[str] = set()
    while isinstance(node, dict) and isinstance(node.get("$ref"), str):
        ref = node["$ref"]
        if ref in seen:
            raise UnresolvableReferenceError(f"Circular $ref chain at '{ref}'")
        seen.add(ref)
        node = resolve_pointer(spec, ref)
    return node
