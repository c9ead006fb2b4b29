"""
Dataverse Test Support

Web API gateway, record entities and fixture helpers used by the UI test
suite to provision and verify records in a Dataverse environment.

Usage:
    from dataverse import DataverseRequest, ContactBuilder, provisioned_record

    web_api = DataverseRequest(page.request, config.web_api_url)
    contact = ContactBuilder().build_generic()
    with provisioned_record(web_api, 'contacts', contact.to_payload()) as contact_id:
        page.goto(urls.record_form('contact', contact_id))
"""

from .tables import (
    DataverseTable,
    QueryOptions,
    contact_table,
    account_table
)

from .exceptions import (
    DataverseError,
    ConfigurationError,
    TransportError,
    HttpStatusError,
    MalformedResponse,
    MissingIdentifierHeader,
    UnparseableIdentifier,
    SchemaLookupFailure,
    SchemaLookupHttpError,
    SchemaLookupMalformedResponse,
    SchemaLookupTransportError
)

from .entities import Account, AccountBuilder, Contact, ContactBuilder
from .gateway import DataverseRequest
from .transport import SessionTransport
from .provisioning import provisioned_record
from .assertions import assert_contains_contact, contains_contact

__all__ = [
    # Tables
    'DataverseTable',
    'QueryOptions',
    'contact_table',
    'account_table',

    # Exceptions
    'DataverseError',
    'ConfigurationError',
    'TransportError',
    'HttpStatusError',
    'MalformedResponse',
    'MissingIdentifierHeader',
    'UnparseableIdentifier',
    'SchemaLookupFailure',
    'SchemaLookupHttpError',
    'SchemaLookupMalformedResponse',
    'SchemaLookupTransportError',

    # Entities
    'Account',
    'AccountBuilder',
    'Contact',
    'ContactBuilder',

    # Web API
    'DataverseRequest',
    'SessionTransport',

    # Fixtures
    'provisioned_record',
    'assert_contains_contact',
    'contains_contact',
]
