"""
Response Shapes

Interprets Web API responses: single record bodies, collection bodies and
the OData-EntityId header returned when a record is created.

Responses are duck-typed. Anything exposing ``status``, ``status_text``,
``headers`` and ``json()`` works, which covers Playwright's APIResponse and
SessionResponse from dataverse.transport.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from .exceptions import MalformedResponse, MissingIdentifierHeader, UnparseableIdentifier

logger = logging.getLogger(__name__)

ENTITY_ID_HEADER = 'odata-entityid'

# Captures the id from values such as
# https://org.crm.dynamics.com/api/data/v9.2/contacts(3fa85f64-5717-4562-b3fc-2c963f66afa6)
ENTITY_ID_PATTERN = re.compile(r'\(([^)]+)\)')


def _load_json(response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponse(response.status_text, e) from e


def parse_single(response) -> Dict[str, Any]:
    """Parse a body holding one JSON object and return it as a dict."""
    body = _load_json(response)
    if not isinstance(body, dict):
        raise MalformedResponse(
            response.status_text,
            TypeError(f"expected a JSON object, got {type(body).__name__}")
        )
    return body


def parse_collection(response) -> List[Dict[str, Any]]:
    """Parse a ``{"value": [...]}`` body and return the list."""
    body = _load_json(response)
    records = body.get('value') if isinstance(body, dict) else None
    if not isinstance(records, list):
        raise MalformedResponse(
            response.status_text,
            KeyError("expected a JSON object with a 'value' array")
        )
    return records


def _find_header(headers, name: str) -> Optional[str]:
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts from some transports keep the server's casing
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None


def extract_record_id(response) -> str:
    """
    Get the id of a newly created record from its OData-EntityId header.

    Raises:
        MissingIdentifierHeader: header absent or unreadable
        UnparseableIdentifier: header present but holds no ``(<id>)`` segment
    """
    try:
        header_value = _find_header(response.headers, ENTITY_ID_HEADER)
    except (AttributeError, TypeError) as e:
        raise MissingIdentifierHeader(response.status_text, e) from e

    if header_value is None:
        raise MissingIdentifierHeader(response.status_text)

    match = ENTITY_ID_PATTERN.search(header_value)
    if match is None:
        logger.error(f"Unexpected OData-EntityId header: {header_value}")
        raise UnparseableIdentifier(header_value)

    return match.group(1)
