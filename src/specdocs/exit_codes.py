"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specdocs.exceptions.SpecdocsError` subclass.
Documentation build scripts can inspect the exit code to determine the
failure class without parsing stderr.

Example::

    $ specdocs print fields openapi.yaml MissingDocument
    $ echo $?
    4   # EXIT_NOT_FOUND -- no schema with that name
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an invalid selection."""

EXIT_NOT_FOUND = 4
"""A requested tag, operation summary, or schema name does not exist."""

EXIT_MALFORMED_SPEC = 7
"""The OpenAPI document could not be read or lacks a required section."""

EXIT_UNRESOLVABLE_REFERENCE = 8
"""A ``$ref`` points at a definition that does not exist."""

EXIT_MISSING_CONTENT = 9
"""A schema or operation lacks content needed for rendering (properties, examples)."""
