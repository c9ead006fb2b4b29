"""
Contact Entity

Typed view of a row in the Dataverse contact table. Attribute names match
the table's column logical names so a Contact converts straight to and from
Web API payloads.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional

from .names import random_name, uniqueness_token, unix_timestamp


@dataclass(frozen=True)
class Contact:
    """
    A contact record.

    Only ``lastname`` and, once created, ``contactid`` are guaranteed to
    exist. ``contactid`` stays None until the record has been created and
    can be set only once (see with_id).
    """
    lastname: str
    firstname: Optional[str] = None
    emailaddress1: Optional[str] = None
    telephone1: Optional[str] = None
    contactid: Optional[str] = None

    ID_FIELD = 'contactid'

    @property
    def full_name(self) -> str:
        return ' '.join(part for part in (self.firstname, self.lastname) if part)

    def to_payload(self) -> Dict[str, str]:
        """Creation body: every set column except the id."""
        return {
            key: value for key, value in asdict(self).items()
            if value is not None and key != self.ID_FIELD
        }

    def with_id(self, contactid: str) -> 'Contact':
        """Return a copy carrying the id assigned by the server."""
        if self.contactid is not None:
            raise ValueError(f"Contact already has id {self.contactid}")
        return replace(self, contactid=contactid)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Contact':
        """Build a Contact from a Web API record dict, ignoring other columns."""
        return cls(
            lastname=record['lastname'],
            firstname=record.get('firstname'),
            emailaddress1=record.get('emailaddress1'),
            telephone1=record.get('telephone1'),
            contactid=record.get('contactid'),
        )


class ContactBuilder:
    """
    Accumulates contact values and emits a new immutable Contact per build.

    Usage:
        contact = ContactBuilder().set_first_name('Ada').set_last_name('Lovelace').build()
        generic = ContactBuilder().build_generic()
    """

    def __init__(self):
        self._draft: Dict[str, Optional[str]] = {}

    def set_first_name(self, name: str) -> 'ContactBuilder':
        self._draft['firstname'] = name
        return self

    def set_last_name(self, name: str) -> 'ContactBuilder':
        self._draft['lastname'] = name
        return self

    def set_email(self, email: str) -> 'ContactBuilder':
        self._draft['emailaddress1'] = email
        return self

    def set_telephone(self, number: str) -> 'ContactBuilder':
        self._draft['telephone1'] = number
        return self

    def build(self) -> Contact:
        if not self._draft.get('lastname'):
            raise ValueError("A contact needs a last name")
        return Contact(**self._draft)

    def build_generic(self) -> Contact:
        """
        Fabricate a minimally valid, unique contact.

        The email is always firstname + lastname + "@example.com" for the
        names chosen by this call.
        """
        firstname = random_name('firstname')
        lastname = random_name('lastname') + uniqueness_token()

        self.set_first_name(firstname)
        self.set_last_name(lastname)
        self.set_email(firstname + lastname + "@example.com")
        self.set_telephone(unix_timestamp())
        return self.build()
