"""
Serialization utilities for built documents.

Documents are handed to an external sender; this module only turns them
into JSON text.
"""

import json
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional


class DocumentEncoder(json.JSONEncoder):
    """Custom JSON encoder for datetime, Enum, and bytes values."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, bytes):
            return obj.decode("utf-8", errors="replace")
        return super().default(obj)


def document_to_json(document: Any, indent: Optional[int] = None) -> str:
    """
    Serialize a document (or a list of documents) to JSON.

    Args:
        document: Built document
        indent: Pretty-print indentation, compact when None

    Returns:
        JSON text
    """
    return json.dumps(document, cls=DocumentEncoder, indent=indent)
