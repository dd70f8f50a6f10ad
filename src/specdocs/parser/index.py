"""Flatten the spec's ``paths`` tree into a list of operation records.

OpenAPI nests operations two levels deep (path, then HTTP method) and mixes
path-level metadata such as ``x-api-status`` in with the methods. Every
renderer wants the flat view instead, so this module walks ``paths`` once
and returns one :class:`~specdocs.models.OperationRecord` per (path, method)
pair.

Enumeration order is the document's own: paths in declaration order, then
methods in the order they appear under each path.
"""

from __future__ import annotations

import copy
from typing import Any

from specdocs.exceptions import MalformedSpecError, NotFoundError
from specdocs.models import HTTPMethod, OperationRecord

# HTTP methods recognized by OpenAPI
_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)


def build_operation_index(spec: dict[str, Any]) -> list[OperationRecord]:
    """Return one :class:`~specdocs.models.OperationRecord` per path and method.

    Keys of a path item that are not HTTP methods (``parameters``,
    ``summary``, ``x-api-status`` or any other extension) are collected into
    the record's ``path_item`` and never treated as operations.

    Args:
        spec: The raw spec dictionary.

    Returns:
        Records in path-then-method declaration order.

    Raises:
        MalformedSpecError: If ``paths`` is missing or is not a mapping.

    Example::

        for record in build_operation_index(spec):
            print(record.method.value.upper(), record.path, record.summary)
    """
    paths = spec.get("paths")
    if not isinstance(paths, dict):
        raise MalformedSpecError("Spec has no 'paths' section")

    records: list[OperationRecord] = []
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue

        attributes = {
            key: value
            for key, value in path_item.items()
            if key not in _HTTP_METHODS
        }
        for key, operation in path_item.items():
            if key not in _HTTP_METHODS or not isinstance(operation, dict):
                continue
            records.append(
                OperationRecord(
                    method=HTTPMethod(key),
                    path=path,
                    operation=copy.deepcopy(operation),
                    path_item=copy.deepcopy(attributes),
                )
            )
    return records


def operations_for_tag(spec: dict[str, Any], tag: str) -> list[OperationRecord]:
    """Return the records whose *first* tag is *tag*, in index order."""
    return [r for r in build_operation_index(spec) if r.primary_tag == tag]


def find_operation(spec: dict[str, Any], summary: str) -> OperationRecord:
    """Look up an operation by its summary, which is unique within a spec.

    Raises:
        NotFoundError: If no operation carries *summary*.
    """
    for record in build_operation_index(spec):
        if record.summary == summary:
            return record
    raise NotFoundError(f"No operation with summary '{summary}'")
