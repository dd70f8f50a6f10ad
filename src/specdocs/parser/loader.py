"""Load OpenAPI specifications from a local file or stdin.

This module handles all I/O for reading raw OpenAPI documents and converting
them into Python dictionaries. It supports both JSON and YAML formats with
automatic format detection. Specs are never fetched over the network: the
documentation pipeline works from the copy checked into the docs repository.

The single public function is :func:`load_spec`. After loading, the raw dict
is handed unchanged to :func:`~specdocs.parser.index.build_operation_index`
and the renderers; nothing downstream mutates it.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import yaml

from specdocs.exceptions import MalformedSpecError


def load_spec(source: str) -> dict[str, Any]:
    """Load an OpenAPI spec from a file path or stdin ('-').

    Supports JSON and YAML formats.
    Auto-detects format from content/extension.

    Args:
        source: A file path, or '-' for stdin.

    Returns:
        The parsed spec as a dictionary.

    Raises:
        MalformedSpecError: If the source cannot be read or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read spec from stdin.

    Reads all available input and attempts to parse as JSON, then YAML.

    Raises:
        MalformedSpecError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except (OSError, ValueError) as exc:
        raise MalformedSpecError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise MalformedSpecError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_file(path: str) -> dict[str, Any]:
    """Load spec from local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Raises:
        MalformedSpecError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise MalformedSpecError(f"Spec file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MalformedSpecError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise MalformedSpecError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        MalformedSpecError: If the content cannot be parsed as either format,
            or does not hold a mapping at the top level.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise MalformedSpecError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        return _require_mapping(result)

    msg = "Failed to parse spec as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise MalformedSpecError(msg)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise MalformedSpecError(f"Spec must be a JSON/YAML object (got {kind})")
    return result
