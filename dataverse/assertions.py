"""
Record assertions

Helpers that compare records observed through the Web API with the
entities a test created.
"""

from typing import Any, Dict, Iterable, List

from .entities import Contact

CONTACT_COLUMNS = ('firstname', 'lastname', 'emailaddress1', 'telephone1')


def _matches(record: Dict[str, Any], expected: Dict[str, Any]) -> bool:
    return all(record.get(key) == value for key, value in expected.items())


def contains_contact(records: Iterable[Dict[str, Any]], contact: Contact) -> bool:
    """True when some record carries every column the contact has set."""
    expected = {
        column: getattr(contact, column) for column in CONTACT_COLUMNS
        if getattr(contact, column) is not None
    }
    return any(_matches(record, expected) for record in records)


def assert_contains_contact(records: List[Dict[str, Any]], contact: Contact) -> None:
    """Fail with a readable message when ``records`` lacks ``contact``."""
    if not contains_contact(records, contact):
        raise AssertionError(
            f"Contact {contact.full_name} ({contact.emailaddress1}) "
            f"not found among {len(records)} record(s)"
        )
