"""
JSON-array columns stored as text.

``users.districts``, ``users.categories`` and ``opportunities.attachments``
hold a JSON-encoded list. Rows written by older clients may hold a bare
string instead, so reads are tolerant: anything that is not a JSON list
becomes a single-element list.
"""

import json
from typing import Any

from bizconnect.core.logging import get_logger

logger = get_logger(__name__)


def serialize_list_field(value: Any) -> str | None:
    """Encode a list for storage; strings are stored as given."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return json.dumps(list(value))
    return str(value)


def parse_list_field(raw: Any) -> list[Any]:
    """
    Decode a stored list column.

    A string starting with ``[`` is parsed as JSON. Parse failures and any
    other non-empty value yield ``[raw]``; empty values yield ``[]``.
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return raw
    if isinstance(raw, str) and raw.startswith("["):
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.warning("Unparsable list field, keeping raw value", value=raw[:100])
            return [raw]
        if isinstance(parsed, list):
            return parsed
    return [raw]
