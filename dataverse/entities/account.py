"""
Account Entity

Typed view of a row in the Dataverse account table.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional

from .names import random_name, uniqueness_token


@dataclass(frozen=True)
class Account:
    """An account record. Only ``name`` is required."""
    name: str
    telephone1: Optional[str] = None
    emailaddress1: Optional[str] = None
    accountid: Optional[str] = None

    ID_FIELD = 'accountid'

    def to_payload(self) -> Dict[str, str]:
        return {
            key: value for key, value in asdict(self).items()
            if value is not None and key != self.ID_FIELD
        }

    def with_id(self, accountid: str) -> 'Account':
        if self.accountid is not None:
            raise ValueError(f"Account already has id {self.accountid}")
        return replace(self, accountid=accountid)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Account':
        return cls(
            name=record['name'],
            telephone1=record.get('telephone1'),
            emailaddress1=record.get('emailaddress1'),
            accountid=record.get('accountid'),
        )


class AccountBuilder:
    """Accumulates account values and emits a new Account per build."""

    def __init__(self):
        self._draft: Dict[str, Optional[str]] = {}

    def set_name(self, name: str) -> 'AccountBuilder':
        self._draft['name'] = name
        return self

    def set_telephone(self, number: str) -> 'AccountBuilder':
        self._draft['telephone1'] = number
        return self

    def set_email(self, email: str) -> 'AccountBuilder':
        self._draft['emailaddress1'] = email
        return self

    def build(self) -> Account:
        if not self._draft.get('name'):
            raise ValueError("An account needs a name")
        return Account(**self._draft)

    def build_generic(self) -> Account:
        """Fabricate a unique account named like '<Lastname><token> PLC'."""
        self.set_name(random_name('lastname') + uniqueness_token() + ' PLC')
        return self.build()
