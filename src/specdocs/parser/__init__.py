"""OpenAPI spec parser -- load, index operations, and expand ``$ref`` pointers.

This sub-package produces the normalised views of a spec that every renderer
consumes. It never mutates the loaded document: each function returns a new
structure.

Typical usage::

    from specdocs.parser import load_spec, build_operation_index, expand_named_schema

    raw = load_spec("openapi.yaml")
    records = build_operation_index(raw)
    thng = expand_named_schema(raw, "ThngDocument")

Sub-modules:

* :mod:`~specdocs.parser.loader` -- I/O layer (file, stdin) plus format
  detection.
* :mod:`~specdocs.parser.index` -- Flattens ``paths`` into
  :class:`~specdocs.models.OperationRecord` objects.
* :mod:`~specdocs.parser.resolver` -- Selective ``$ref`` expansion with
  circular-reference detection.
"""

from specdocs.parser.index import build_operation_index, find_operation, operations_for_tag
from specdocs.parser.loader import load_spec
from specdocs.parser.resolver import expand_named_schema, expand_schema

__all__ = [
    "load_spec",
    "build_operation_index",
    "find_operation",
    "operations_for_tag",
    "expand_schema",
    "expand_named_schema",
]
