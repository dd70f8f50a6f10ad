"""Canonical Pydantic models shared across all specdocs modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- serialised as JSON in the user's config directory
or the project-local ``specdocs.json``:
    :class:`ExpansionPolicy`, :class:`FieldsConfig`, :class:`SnippetConfig`,
    :class:`PageConfig`, :class:`OutputConfig`, and :class:`GlobalConfig`.

**Parser output models** -- produced by the operation index:
    :class:`HTTPMethod` and :class:`OperationRecord`.

**Widget models** -- structured blocks consumed by the downstream
documentation renderer:
    :class:`CodeSample`, :class:`CodeWidget`, and :class:`ParametersTable`.

The spec itself is never modelled: it stays the plain ``dict`` tree produced
by :func:`~specdocs.parser.loader.load_spec`, and every model here holds
value copies with no back-reference into it.
"""

from __future__ import annotations

import enum
import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


DEFAULT_ALWAYS_INLINE = [
    "CustomFieldsDocument",
    "IdentifiersDocument",
    "ContributionsDocument",
    "GeoJSONPointDocument",
]


class ExpansionPolicy(BaseModel):
    """Controls which ``$ref`` targets the reference expander inlines.

    A *document-category* schema is a top-level resource that is shown by
    name rather than inlined, to keep rendered schemas short. A schema is a
    document when its ``annotation_key`` extension (``x-document: true``) says
    so; without the annotation, the name is checked for ``document_marker``.
    Names in ``always_inline`` are small structural documents that read
    better inline.

    Example::

        ExpansionPolicy(document_marker="Resource", always_inline=["TagResource"])
    """

    document_marker: Optional[str] = Field(
        default="Document",
        description="Substring marking document-category schema names; None disables",
    )
    always_inline: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALWAYS_INLINE),
        description="Document names that are always inlined",
    )
    strip_fields: list[str] = Field(
        default_factory=list,
        description="Schema keys removed from the expanded copy (e.g. 'required')",
    )
    annotation_key: str = Field(
        default="x-document",
        description="Schema extension that explicitly marks (or unmarks) a document",
    )

    @classmethod
    def inline_all(cls) -> ExpansionPolicy:
        """Return a policy that inlines every reference (cycles excepted)."""
        return cls(document_marker=None, always_inline=[], annotation_key="")

    def is_document(self, name: str, definition: Any = None) -> bool:
        """Return ``True`` when *name* should be shown as a placeholder.

        Args:
            name: Schema name under ``components.schemas``.
            definition: The schema definition, consulted for the explicit
                annotation before falling back to the naming convention.
        """
        if name in self.always_inline:
            return False
        if self.annotation_key and isinstance(definition, dict):
            flag = definition.get(self.annotation_key)
            if isinstance(flag, bool):
                return flag
        if not self.document_marker:
            return False
        return self.document_marker in name


class FieldsConfig(BaseModel):
    """Layout of field listings produced by the field formatter."""

    wrap_width: int = Field(default=60, description="Description text width in columns")
    indent: int = Field(default=4, description="Description indentation in spaces")


class SnippetConfig(BaseModel):
    """Values substituted into generated request/response snippets."""

    base_url: str = Field(
        default="https://api.example.com", description="Host prefix used in cURL snippets"
    )
    sdk_name: str = Field(default="sdk.js", description="Display name of the SDK tab")
    sdk_handle: str = Field(
        default="operator.TYPE()", description="Resource handle the SDK call starts from"
    )


class PageConfig(BaseModel):
    """Settings for per-tag page assembly."""

    default_status_label: str = Field(
        default="General Availability",
        description="Status used for paths without x-api-status",
    )
    output_dir: str = Field(default=".", description="Directory receiving {tag}.md")


class OutputConfig(BaseModel):
    """Default terminal output preferences stored in :class:`GlobalConfig`."""

    format: str = Field(default="auto", description="Output format: auto, plain, rich")


class GlobalConfig(BaseModel):
    """Effective configuration for one invocation.

    Loaded from ``~/.config/specdocs/config.json``, with the project-local
    ``specdocs.json`` layered on top; see
    :func:`~specdocs.config.resolve_config` for the full precedence chain.
    """

    expansion: ExpansionPolicy = Field(default_factory=ExpansionPolicy)
    listing: FieldsConfig = Field(default_factory=FieldsConfig)
    snippets: SnippetConfig = Field(default_factory=SnippetConfig)
    pages: PageConfig = Field(default_factory=PageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Parser Output Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects.

    Any other key of a path item (``parameters``, ``x-api-status``, ...) is
    path-level metadata, never an operation.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class OperationRecord(BaseModel):
    """One (path, method) pair flattened out of the spec's ``paths`` tree.

    ``operation`` and ``path_item`` are deep copies; ``path_item`` holds only
    the path-level attributes (extension keys such as ``x-api-status``), never
    sibling operations.
    """

    model_config = ConfigDict(frozen=True)

    method: HTTPMethod
    path: str
    operation: dict[str, Any] = Field(default_factory=dict)
    path_item: dict[str, Any] = Field(default_factory=dict)

    @property
    def summary(self) -> Optional[str]:
        return self.operation.get("summary")

    @property
    def tags(self) -> list[str]:
        return list(self.operation.get("tags") or [])

    @property
    def primary_tag(self) -> Optional[str]:
        """The first tag, which is the grouping key for pages."""
        tags = self.tags
        return tags[0] if tags else None

    def status(self, default: str) -> str:
        """Return the path-level ``x-api-status`` label, or *default*."""
        return self.path_item.get("x-api-status") or default


# --- Widget Models ---


class CodeSample(BaseModel):
    """One tab of a code widget."""

    name: Optional[str] = None
    language: str
    code: str


class CodeWidget(BaseModel):
    """An ordered bundle of code samples rendered as one tabbed block.

    The block format is recognised by the downstream documentation renderer::

        [block:code]
        {"codes": [{"language": "http", "code": "..."}]}
        [/block]
    """

    codes: list[CodeSample] = Field(default_factory=list)

    def render(self) -> str:
        data = {"codes": [c.model_dump(exclude_none=True) for c in self.codes]}
        return f"[block:code]\n{json.dumps(data, indent=2, ensure_ascii=False)}\n[/block]"


class ParametersTable(BaseModel):
    """A table widget keyed by ``"h-<col>"`` headers and ``"<row>-<col>"`` cells."""

    headers: list[str]
    rows: list[list[str]] = Field(default_factory=list)

    def render(self) -> str:
        data: dict[str, str] = {}
        for col, header in enumerate(self.headers):
            data[f"h-{col}"] = header
        for row_index, row in enumerate(self.rows):
            for col, cell in enumerate(row):
                data[f"{row_index}-{col}"] = cell
        block = {"data": data, "cols": len(self.headers), "rows": len(self.rows)}
        return (
            f"[block:parameters]\n{json.dumps(block, indent=2, ensure_ascii=False)}\n[/block]"
        )
