"""Exception hierarchy for specdocs.

All exceptions inherit from :class:`SpecdocsError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specdocs.exit_codes`.
The top-level error handler in :func:`specdocs.app.main` catches
``SpecdocsError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Every error is a structural precondition violated by the (immutable) input
spec or by operator input, so none of them is ever retried.

Subclass hierarchy::

    SpecdocsError                     (exit 1)
    +-- ConfigError                   (exit 1)
    +-- InvalidSelectionError         (exit 2)
    +-- NotFoundError                 (exit 4)
    +-- MalformedSpecError            (exit 7)
    +-- UnresolvableReferenceError    (exit 8)
    +-- NoDisplayablePropertiesError  (exit 9)
    +-- MissingExampleError           (exit 9)
"""

from specdocs.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MALFORMED_SPEC,
    EXIT_MISSING_CONTENT,
    EXIT_NOT_FOUND,
    EXIT_UNRESOLVABLE_REFERENCE,
)


class SpecdocsError(Exception):
    """Base exception for all specdocs errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specdocs.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(SpecdocsError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidSelectionError(SpecdocsError):
    """Raised when operator input names a non-numeric or out-of-range index."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(SpecdocsError):
    """Raised when a tag, operation summary, or schema name matches nothing."""

    exit_code = EXIT_NOT_FOUND


class MalformedSpecError(SpecdocsError):
    """Raised when the spec cannot be loaded or lacks a required section."""

    exit_code = EXIT_MALFORMED_SPEC


class UnresolvableReferenceError(SpecdocsError):
    """Raised when a ``$ref`` points to a name absent from the spec."""

    exit_code = EXIT_UNRESOLVABLE_REFERENCE


class NoDisplayablePropertiesError(SpecdocsError):
    """Raised when a schema has neither ``properties`` nor ``allOf`` to list."""

    exit_code = EXIT_MISSING_CONTENT


class MissingExampleError(SpecdocsError):
    """Raised when a request body or response needs an example but declares none."""

    exit_code = EXIT_MISSING_CONTENT
