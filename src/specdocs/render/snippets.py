"""Request and response snippets for one operation.

Given an :class:`~specdocs.models.OperationRecord`, this module derives four
kinds of example text and bundles them into code widgets:

* **HTTP** -- the raw request line and headers, plus the body schema name.
* **cURL** -- an equivalent command line carrying the declared request
  example as its payload.
* **SDK** -- a JavaScript call on a generic resource handle, with the
  example re-serialised as an object literal.
* **Response** -- the first declared response's status line and example.

All derivation rules (which methods carry a body, which API key placeholder
to show, which status text goes with a code) are fixed tables at the top of
the module.
"""

from __future__ import annotations

import json
import re
from http import HTTPStatus
from typing import Any, Optional

from specdocs.exceptions import MalformedSpecError, MissingExampleError
from specdocs.models import CodeSample, CodeWidget, HTTPMethod, OperationRecord, SnippetConfig
from specdocs.parser.resolver import dereference, ref_name

JSON_MEDIA_TYPE = "application/json"

BODY_METHODS = frozenset({HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH})
PARTIAL_METHODS = frozenset({HTTPMethod.PUT, HTTPMethod.PATCH})
RESPONSE_CONTENT_METHODS = frozenset(
    {HTTPMethod.GET, HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH}
)

# Most privileged first.
API_KEY_PRECEDENCE = [
    ("Operator", "OPERATOR_API_KEY"),
    ("Trusted Application", "TRUSTED_APPLICATION_API_KEY"),
    ("Application", "APPLICATION_API_KEY"),
    ("Application User", "APPLICATION_USER_API_KEY"),
    ("Device", "DEVICE_API_KEY"),
]
DEFAULT_API_KEY = "OPERATOR_API_KEY"

RESPONSE_TEXT = {
    200: "OK",
    201: "Created",
    202: "Accepted",
    204: "No Content",
    301: "Temporary Redirect",
}

SDK_CALLS = {
    HTTPMethod.POST: ".create(payload)",
    HTTPMethod.GET: ".read()",
    HTTPMethod.PUT: ".update(payload)",
    HTTPMethod.PATCH: ".update(payload)",
    HTTPMethod.DELETE: ".delete();",
}

_JSON_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"(\s*:)?')
_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_MISSING = object()


# ------------------------------------------------------------------ #
# Derivation helpers
# ------------------------------------------------------------------ #


def fixup_path(path: str) -> str:
    """Rewrite ``{param}`` templating to ``:param``, e.g. ``/thngs/:thngId``."""
    return path.replace("{", ":").replace("}", "")


def api_key_placeholder(operation: dict[str, Any]) -> str:
    """Pick the API key placeholder for the most privileged permitted role."""
    roles = operation.get("x-api-keys") or []
    for role, placeholder in API_KEY_PRECEDENCE:
        if role in roles:
            return placeholder
    return DEFAULT_API_KEY


def status_text(code: Any) -> str:
    """Return the reason phrase for a response code, or ``""`` for ``default``."""
    try:
        numeric = int(code)
    except (TypeError, ValueError):
        return ""
    if numeric in RESPONSE_TEXT:
        return RESPONSE_TEXT[numeric]
    try:
        return HTTPStatus(numeric).phrase
    except ValueError:
        return ""


def _media_entry(holder: dict[str, Any], context: str) -> dict[str, Any]:
    """Return the JSON content entry of a request body or response."""
    content = holder.get("content")
    if not isinstance(content, dict) or not content:
        raise MalformedSpecError(f"{context} has no content")
    entry = content.get(JSON_MEDIA_TYPE)
    if entry is None:
        entry = next(iter(content.values()))
    return entry if isinstance(entry, dict) else {}


def _example_of(entry: dict[str, Any]) -> Any:
    if entry.get("example") is not None:
        return entry["example"]
    examples = entry.get("examples")
    if isinstance(examples, dict):
        for example in examples.values():
            if isinstance(example, dict) and "value" in example:
                return example["value"]
    return _MISSING


def request_body(spec: dict[str, Any], record: OperationRecord) -> Optional[dict[str, Any]]:
    """Return the operation's request body with any ``$ref`` followed, or ``None``."""
    body = record.operation.get("requestBody")
    if body is None:
        return None
    body = dereference(spec, body)
    return body if isinstance(body, dict) else None


def body_schema_name(spec: dict[str, Any], record: OperationRecord) -> str:
    """Name of the request body's schema.

    The ``$ref`` name, the array items' ``$ref`` name, or an inline schema's
    ``title``, in that order.

    Raises:
        MalformedSpecError: If the body has no schema or the schema has no
            nameable shape.
    """
    body = request_body(spec, record)
    context = f"Request body of '{record.summary}'"
    if body is None:
        raise MalformedSpecError(f"Operation '{record.summary}' has no request body")

    schema = _media_entry(body, context).get("schema")
    if not isinstance(schema, dict):
        raise MalformedSpecError(f"{context} has no schema")

    name = ref_name(schema.get("$ref"))
    if not name and schema.get("type") == "array":
        name = ref_name((schema.get("items") or {}).get("$ref"))
    if not name:
        name = schema.get("title") or ""
    if not name:
        raise MalformedSpecError(
            f"{context} uses an inline schema without a 'title' to name it"
        )
    return name


def request_example(spec: dict[str, Any], record: OperationRecord) -> Any:
    """Return the declared request body example.

    Raises:
        MissingExampleError: If the body declares no example.
    """
    body = request_body(spec, record)
    if body is None:
        raise MalformedSpecError(f"Operation '{record.summary}' has no request body")
    example = _example_of(_media_entry(body, f"Request body of '{record.summary}'"))
    if example is _MISSING:
        raise MissingExampleError(f"Request body of '{record.summary}' has no example")
    return example


def first_response(spec: dict[str, Any], record: OperationRecord) -> tuple[str, dict[str, Any]]:
    """Return ``(code, response)`` for the first declared response."""
    responses = record.operation.get("responses")
    if not isinstance(responses, dict) or not responses:
        raise MalformedSpecError(f"Operation '{record.summary}' declares no responses")
    code, response = next(iter(responses.items()))
    response = dereference(spec, response)
    return str(code), response if isinstance(response, dict) else {}


def to_js_literal(json_text: str) -> str:
    """Re-serialise JSON text in JavaScript object-literal style.

    Keys that are valid identifiers lose their quotes; every other string
    switches to single quotes::

        {"name": "Pallet", "x-y": 1}  ->  {name: 'Pallet', 'x-y': 1}
    """

    def _replace(match: re.Match) -> str:
        value = json.loads(f'"{match.group(1)}"')
        colon = match.group(2) or ""
        if colon and _JS_IDENTIFIER.match(value):
            return value + colon
        return _single_quoted(value) + colon

    return _JSON_STRING.sub(_replace, json_text)


def _single_quoted(value: str) -> str:
    escaped = json.dumps(value, ensure_ascii=False)[1:-1]
    return "'" + escaped.replace('\\"', '"').replace("'", "\\'") + "'"


def _pretty(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


# ------------------------------------------------------------------ #
# Snippets
# ------------------------------------------------------------------ #


def http_snippet(spec: dict[str, Any], record: OperationRecord) -> str:
    """Raw HTTP request: request line, headers, and the body schema name."""
    text = f"{record.method.value.upper()} {fixup_path(record.path)}\n"
    if record.method in BODY_METHODS:
        text += f"Content-Type: {JSON_MEDIA_TYPE}\n"
    text += f"Authorization: ${api_key_placeholder(record.operation)}"

    if request_body(spec, record) is not None:
        text += f"\n\n{body_schema_name(spec, record)}"
        if record.method in PARTIAL_METHODS:
            text += " (partial)"
    return text


def curl_snippet(
    spec: dict[str, Any],
    record: OperationRecord,
    config: Optional[SnippetConfig] = None,
) -> str:
    """cURL command line; the payload is the declared request example verbatim.

    Raises:
        MissingExampleError: If the operation has a request body without an
            example.
    """
    if config is None:
        config = SnippetConfig()

    text = "curl -i"
    if record.method in BODY_METHODS:
        text += f" -H Content-Type:{JSON_MEDIA_TYPE}"
    text += f" \\\n  -H Authorization:${api_key_placeholder(record.operation)} \\\n"
    text += f"  -X {record.method.value.upper()} {config.base_url}{fixup_path(record.path)}"

    if request_body(spec, record) is not None:
        text += f" \\\n  -d '{_pretty(request_example(spec, record))}'"
    return text


def sdk_snippet(
    spec: dict[str, Any],
    record: OperationRecord,
    config: Optional[SnippetConfig] = None,
) -> str:
    """JavaScript SDK call, preceded by a ``payload`` literal when there is a body."""
    if config is None:
        config = SnippetConfig()

    text = ""
    if request_body(spec, record) is not None:
        payload = to_js_literal(_pretty(request_example(spec, record)))
        text += f"const payload = {payload};\n\n"

    text += config.sdk_handle + SDK_CALLS.get(record.method, ".read()")
    if record.method is not HTTPMethod.DELETE:
        text += "\n  .then(console.log);"
    return text


def response_snippet(spec: dict[str, Any], record: OperationRecord) -> str:
    """Status line, content type and example of the first declared response.

    Raises:
        MalformedSpecError: If the operation declares no responses.
        MissingExampleError: If the response has content but no example.
    """
    code, response = first_response(spec, record)

    text = f"HTTP/1.1 {code} {status_text(code)}".rstrip() + "\n"
    if record.method in RESPONSE_CONTENT_METHODS:
        text += f"Content-Type: {JSON_MEDIA_TYPE}"
    text += "\n\n"

    if response.get("content"):
        context = f"Response {code} of '{record.summary}'"
        example = _example_of(_media_entry(response, context))
        if example is _MISSING:
            raise MissingExampleError(f"{context} has no example")
        text += _pretty(example)
    return text


# ------------------------------------------------------------------ #
# Widgets
# ------------------------------------------------------------------ #


def request_widget(
    spec: dict[str, Any],
    record: OperationRecord,
    config: Optional[SnippetConfig] = None,
) -> CodeWidget:
    """Bundle the HTTP, cURL and SDK snippets into one tabbed widget."""
    if config is None:
        config = SnippetConfig()
    return CodeWidget(
        codes=[
            CodeSample(language="http", code=http_snippet(spec, record)),
            CodeSample(language="curl", code=curl_snippet(spec, record, config)),
            CodeSample(
                name=config.sdk_name,
                language="javascript",
                code=sdk_snippet(spec, record, config),
            ),
        ]
    )


def response_widget(spec: dict[str, Any], record: OperationRecord) -> CodeWidget:
    """Wrap the response snippet in a single ``Response`` tab."""
    return CodeWidget(
        codes=[
            CodeSample(name="Response", language="http", code=response_snippet(spec, record)),
        ]
    )
