"""
Dataverse Exceptions

Custom exceptions raised by the Web API gateway and its helpers.
"""

from typing import Optional


class DataverseError(Exception):
    """Base exception for all Dataverse suite errors."""
    pass


class ConfigurationError(DataverseError):
    """
    Raised when the suite configuration cannot be loaded.

    This covers an unreadable or invalid config.json.
    """
    pass


class TransportError(DataverseError):
    """Raised when a request never produced an HTTP response."""
    def __init__(self, message: str, method: str = None, url: str = None):
        self.method = method
        self.url = url
        super().__init__(message)


class HttpStatusError(DataverseError):
    """
    Raised when the server answers outside the 200-399 range.

    The body is never parsed in that case.
    """
    def __init__(self, status_code: int, status_text: str, method: str = None,
                 url: str = None, response_body: str = None):
        self.status_code = status_code
        self.status_text = status_text
        self.method = method
        self.url = url
        self.response_body = response_body
        super().__init__(f"{method} {url} failed: {status_code} {status_text}")


class MalformedResponse(DataverseError):
    """
    Raised when a response body is not the JSON shape the caller expects.

    Carries the response status text and the underlying parse error.
    """
    def __init__(self, status_text: str, parse_error: Exception):
        self.status_text = status_text
        self.parse_error = parse_error
        super().__init__(f"Response was {status_text}.  Failed to parse json :  {parse_error}")


class MissingIdentifierHeader(DataverseError):
    """Raised when a create response has no readable OData-EntityId header."""
    def __init__(self, status_text: str, cause: Optional[Exception] = None):
        self.status_text = status_text
        self.cause = cause
        detail = f" ({cause})" if cause else ""
        super().__init__(
            f"Response was {status_text}.  Failed to get odata entity ID{detail}"
        )


class UnparseableIdentifier(DataverseError):
    """Raised when the OData-EntityId header holds no parenthesized id."""
    def __init__(self, header_value: str):
        self.header_value = header_value
        super().__init__(f"Cannot retrieve the record id from odata-entityid header: {header_value}")


class SchemaLookupFailure(DataverseError):
    """
    Raised when the required-for-create metadata lookup fails.

    Lookup errors are raised through the classified subclasses below, so
    ``except HttpStatusError`` (or MalformedResponse, TransportError)
    catches a failed lookup the same way it catches any other request.
    The bare class is used only when the lookup succeeds but returns no
    usable attributes.
    """
    def __init__(self, logical_name: str, cause: Optional[Exception] = None,
                 message: str = None):
        self.logical_name = logical_name
        self.cause = cause
        # Explicit base call; the subclasses mix in bases with other signatures
        DataverseError.__init__(
            self, f"Failed to look up create fields for '{logical_name}': {message or cause}"
        )

    @classmethod
    def from_cause(cls, logical_name: str, cause: DataverseError) -> 'SchemaLookupFailure':
        """Wrap ``cause`` in the subclass sharing its classification."""
        for error_type, lookup_type in _LOOKUP_TYPES:
            if isinstance(cause, error_type):
                return lookup_type(logical_name, cause)
        return cls(logical_name, cause)


class SchemaLookupHttpError(SchemaLookupFailure, HttpStatusError):
    """Metadata lookup answered outside the 200-399 range."""
    def __init__(self, logical_name: str, cause: HttpStatusError):
        self.status_code = cause.status_code
        self.status_text = cause.status_text
        self.method = cause.method
        self.url = cause.url
        self.response_body = cause.response_body
        SchemaLookupFailure.__init__(self, logical_name, cause)


class SchemaLookupMalformedResponse(SchemaLookupFailure, MalformedResponse):
    """Metadata lookup body was not a ``{"value": [...]}`` object."""
    def __init__(self, logical_name: str, cause: MalformedResponse):
        self.status_text = cause.status_text
        self.parse_error = cause.parse_error
        SchemaLookupFailure.__init__(self, logical_name, cause)


class SchemaLookupTransportError(SchemaLookupFailure, TransportError):
    """Metadata lookup never produced a response."""
    def __init__(self, logical_name: str, cause: TransportError):
        self.method = cause.method
        self.url = cause.url
        SchemaLookupFailure.__init__(self, logical_name, cause)


_LOOKUP_TYPES = [
    (HttpStatusError, SchemaLookupHttpError),
    (MalformedResponse, SchemaLookupMalformedResponse),
    (TransportError, SchemaLookupTransportError),
]
