"""
Dataverse Web API Gateway

Thin wrapper around the Dataverse Web API used by tests and fixtures to set
up, verify and tear down records. One request per call, no retries, no
local recovery: every failure reaches the caller as a DataverseError.

Usage:
    from dataverse import DataverseRequest

    web_api = DataverseRequest(page.request, config.web_api_url)
    record_id = web_api.post('contacts', {'firstname': 'Ada', 'lastname': 'Lovelace'})
    contact = web_api.get_one('contacts', record_id, select=['firstname'])
    web_api.delete('contacts', record_id)
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from playwright.sync_api import Error as PlaywrightError

from .exceptions import DataverseError, HttpStatusError, SchemaLookupFailure, TransportError
from .paths import build_path, build_url, required_for_create_path
from .responses import extract_record_id, parse_collection, parse_single
from .tables import DataverseTable, QueryOptions

logger = logging.getLogger(__name__)

Entity = Union[str, DataverseTable]


def collection_name(entity: Entity) -> str:
    """Resolve a collection name from a name or a table descriptor."""
    if isinstance(entity, DataverseTable):
        return entity.logical_collection_name
    return entity


def is_success(status: int) -> bool:
    """2xx and 3xx responses count as success."""
    return 200 <= status < 400


class DataverseRequest:
    """
    Gateway for Dataverse Web API record operations.

    Provides methods for:
        - Reading one record or a collection (get_one, get_many, get)
        - Creating, updating and deleting records (post, patch, delete)
        - Copying an existing record into a new one (initialize_from)

    Args:
        context: Authenticated transport. A Playwright APIRequestContext
            (``page.request``) or a dataverse.transport.SessionTransport.
            Playwright errors raised before a response arrives are re-raised
            as TransportError.
        web_api_url: Web API root, e.g. https://org.crm.dynamics.com/api/data/v9.2
    """

    def __init__(self, context, web_api_url: str):
        self.context = context
        self.web_api_url = web_api_url

    def _send(self, method: str, path: str, **kwargs):
        """Issue one request and fail on any status outside 200-399."""
        url = build_url(self.web_api_url, path)
        logger.debug(f"{method} {url}")

        send = getattr(self.context, method.lower())
        try:
            response = send(url, **kwargs)
        except PlaywrightError as e:
            logger.error(f"{method} {url} failed before a response: {e}")
            raise TransportError(f"{method} {url} failed: {e}", method=method, url=url) from e

        if not is_success(response.status):
            error_body = None
            try:
                error_body = response.text()
            except Exception:
                pass

            logger.error(f"{method} {url} returned {response.status} {response.status_text}")
            if error_body:
                logger.error(f"Response body: {error_body}")

            raise HttpStatusError(
                response.status,
                response.status_text,
                method=method,
                url=url,
                response_body=error_body
            )

        return response

    def get_one(self, entity: Entity, record_id: str,
                select: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """
        Fetch a single record by id.

        Args:
            entity: Collection name (e.g., "contacts") or table descriptor
            record_id: Id of the record to fetch
            select: Columns to return. All columns when omitted.

        Returns:
            The record as a flat dict

        Raises:
            HttpStatusError: status outside 200-399 (e.g., 404 for unknown ids)
            MalformedResponse: body is not a JSON object
        """
        response = self._send('GET', build_path(collection_name(entity), record_id, select))
        return parse_single(response)

    def get_many(self, entity: Entity,
                 select: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        """
        Fetch the records of a collection.

        Returns:
            The ``value`` array of the response
        """
        response = self._send('GET', build_path(collection_name(entity), select=select))
        return parse_collection(response)

    def get(self, entity: Entity,
            options: Optional[QueryOptions] = None) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """
        Fetch records according to ``options``.

        A record id in the options always yields a single record dict,
        with or without a column selection. Otherwise the collection
        list is returned. Prefer get_one/get_many where the shape is
        known up front.
        """
        options = options or QueryOptions()
        if options.record_id is not None:
            return self.get_one(entity, options.record_id, options.select)
        return self.get_many(entity, options.select)

    def post(self, entity: Entity, data: Any,
             headers: Optional[Dict[str, str]] = None) -> str:
        """
        Create a record.

        Args:
            entity: Collection name or table descriptor
            data: Request body. Dicts are sent as JSON unless a Content-Type
                header says otherwise.
            headers: Extra request headers

        Returns:
            Id of the created record, taken from the OData-EntityId header

        Raises:
            HttpStatusError: status outside 200-399
            MissingIdentifierHeader: no OData-EntityId header on the response
            UnparseableIdentifier: header holds no ``(<id>)`` segment
        """
        response = self._send('POST', collection_name(entity), data=data, headers=headers)
        record_id = extract_record_id(response)
        logger.info(f"Created {collection_name(entity)}({record_id})")
        return record_id

    def create(self, table: DataverseTable) -> str:
        """Create a record from the descriptor's fields."""
        return self.post(table, dict(table.fields))

    def patch(self, entity: Entity, record_id: str, data: Any,
              headers: Optional[Dict[str, str]] = None) -> int:
        """
        Update an existing record.

        ``If-Match: *`` is always sent, replacing any caller value for that
        header. No concurrency check happens here; the last write wins.

        Returns:
            HTTP status code, 204 (No Content) when successful
        """
        patch_headers = {
            key: value for key, value in (headers or {}).items()
            if key.lower() != 'if-match'
        }
        patch_headers['If-Match'] = '*'

        path = build_path(collection_name(entity), record_id)
        response = self._send('PATCH', path, data=data, headers=patch_headers)
        return response.status

    def delete(self, entity: Entity, record_id: str) -> int:
        """
        Delete a record.

        Returns:
            HTTP status code, 204 (No Content) when successful

        Raises:
            HttpStatusError: status outside 200-399, including an id that
                was already deleted
        """
        response = self._send('DELETE', build_path(collection_name(entity), record_id))
        logger.info(f"Deleted {collection_name(entity)}({record_id})")
        return response.status

    def required_create_fields(self, table: DataverseTable) -> List[str]:
        """
        Logical names of the attributes required on the table's form and
        valid to set on create.

        Raises:
            SchemaLookupHttpError, SchemaLookupMalformedResponse,
            SchemaLookupTransportError: the lookup request failed. Each is also
                the matching HttpStatusError, MalformedResponse or TransportError.
            SchemaLookupFailure: lookup succeeded but returned no attributes
        """
        try:
            response = self._send('GET', required_for_create_path(table.logical_name))
            attributes = parse_collection(response)
        except DataverseError as e:
            raise SchemaLookupFailure.from_cause(table.logical_name, e) from e

        logical_names = [a.get('LogicalName') for a in attributes if isinstance(a, dict)]
        logical_names = [name for name in logical_names if name]
        if not logical_names:
            raise SchemaLookupFailure(
                table.logical_name,
                message="metadata returned no attributes required for create"
            )
        return logical_names

    def initialize_from(self, table: DataverseTable, record_id: str,
                        id_field: Optional[str] = None) -> str:
        """
        Create a new record by copying the create-required fields of an
        existing one.

        Steps:
            1. Look up the attributes required for the form and valid for create
            2. Read the existing record, selecting exactly those attributes
            3. Drop the source id so it is not resubmitted
            4. Post the remaining values as a new record

        Without ``id_field``, step 3 removes the first property whose value
        equals ``record_id``. Any other column that happens to hold the same
        value makes that ambiguous; pass ``id_field`` to name the column
        explicitly.

        Once the new record exists, ``table.fields`` is replaced with the
        copied values. If the final post fails, nothing is cleaned up and
        ``table.fields`` is left as it was; the earlier steps are read-only.

        Returns:
            Id of the new record
        """
        logical_names = self.required_create_fields(table)
        record = self.get_one(table.logical_collection_name, record_id, select=logical_names)

        # OData annotations such as @odata.etag are not columns
        payload = {k: v for k, v in record.items() if not k.startswith('@')}

        if id_field is not None:
            payload.pop(id_field, None)
        else:
            remove_property_by_value(payload, record_id)

        new_id = self.post(table.logical_collection_name, payload)

        table.fields.clear()
        table.fields.update(payload)
        logger.info(f"Initialized {table.logical_collection_name}({new_id}) from {record_id}")
        return new_id


def remove_property_by_value(record: Dict[str, Any], value: Any) -> Optional[str]:
    """
    Remove the first property of ``record`` whose value equals ``value``.

    Returns:
        The removed key, or None when nothing matched
    """
    matches = [key for key, candidate in record.items() if candidate == value]
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(f"Several properties hold {value}: {matches}; removing only '{matches[0]}'")
    del record[matches[0]]
    return matches[0]
