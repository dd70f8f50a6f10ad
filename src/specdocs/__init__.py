"""specdocs -- Render developer-portal documentation from OpenAPI 3.0 specs.

This package turns a single source-of-truth OpenAPI document into text
fragments ready to paste into (or publish as) documentation pages: field
listings, folded schema views, request/response code widgets, API status
summaries, and whole per-tag pages.

Typical workflow::

    specdocs print fields openapi.yaml ThngDocument
    specdocs print operation openapi.yaml "Create a Thng"
    specdocs print page openapi.yaml Thngs        # writes ./Thngs.md

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration loading and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    interactive: Operator-driven selection and ordering of candidates.
    output: stdout/stderr formatting system with Rich support.
    parser: Spec loading, operation indexing, and ``$ref`` expansion.
    render: Text renderers for fields, schemas, snippets, and pages.
"""

__version__ = "0.3.0"
