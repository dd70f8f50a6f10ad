"""Group a tag's paths by their ``x-api-status`` label."""

from __future__ import annotations

from typing import Any, Iterable

from specdocs.exceptions import NotFoundError
from specdocs.models import OperationRecord
from specdocs.parser.index import operations_for_tag

DEFAULT_STATUS_LABEL = "General Availability"


def group_by_status(
    records: Iterable[OperationRecord],
    default_label: str = DEFAULT_STATUS_LABEL,
) -> dict[str, list[str]]:
    """Map each status label to the paths carrying it.

    Labels and paths both keep first-occurrence order, and a path appears
    once per label even when several of its methods are in *records*.

    Example::

        group_by_status(records)
        # {"Beta": ["/examples/{id}"], "General Availability": ["/examples"]}
    """
    groups: dict[str, list[str]] = {}
    for record in records:
        paths = groups.setdefault(record.status(default_label), [])
        if record.path not in paths:
            paths.append(record.path)
    return groups


def generate_api_status_text(
    spec: dict[str, Any],
    tag: str,
    default_label: str = DEFAULT_STATUS_LABEL,
) -> str:
    """Render the ``**API Status**`` block for every path under *tag*.

    Raises:
        NotFoundError: If no operation has *tag* as its first tag.
    """
    records = operations_for_tag(spec, tag)
    if not records:
        raise NotFoundError(f"Tag '{tag}' is not associated with any paths")

    text = "**API Status**\n"
    for label, paths in group_by_status(records, default_label).items():
        text += f"{label}:\n"
        text += "".join(f"`{path}`\n" for path in paths)
    return text + "___"
