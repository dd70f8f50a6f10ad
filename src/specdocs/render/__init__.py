"""Renderers turning a loaded spec into documentation text.

Every function here is pure over the spec except
:func:`~specdocs.render.page.write_page`, the single place a file is
written.
"""

from specdocs.render.definitions import find_schemas_for_tag, generate_definition_text
from specdocs.render.fields import generate_fields_text
from specdocs.render.folder import fold, generate_schema_text
from specdocs.render.operations import find_summaries_for_tag, generate_operation_text
from specdocs.render.page import assemble_page, generate_page, write_page
from specdocs.render.status import generate_api_status_text, group_by_status
from specdocs.render.tables import generate_filter_table_text, generate_key_permissions_text

__all__ = [
    "fold",
    "generate_schema_text",
    "generate_fields_text",
    "generate_definition_text",
    "find_schemas_for_tag",
    "generate_operation_text",
    "find_summaries_for_tag",
    "group_by_status",
    "generate_api_status_text",
    "generate_filter_table_text",
    "generate_key_permissions_text",
    "assemble_page",
    "write_page",
    "generate_page",
]
