"""
Table Descriptors

Static descriptions of the Dataverse tables the suite works with, and the
per-call query options accepted by the gateway.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class DataverseTable:
    """
    Describes a queryable Dataverse table.

    Attributes:
        logical_name: Singular name used by UI routing (e.g., "contact")
        logical_collection_name: Plural Web API resource segment (e.g., "contacts")
        fields: Column name -> value. Used as a creation payload and as an
            in-memory cache of a record's attributes. Callers may mutate it.
    """
    logical_name: str
    logical_collection_name: str
    fields: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class QueryOptions:
    """
    Options for a single GET.

    Attributes:
        select: Ordered column names for $select. Empty returns all columns.
        record_id: When set, a single record is requested instead of a collection.
    """
    select: Tuple[str, ...] = ()
    record_id: Optional[str] = None

    def __post_init__(self):
        # Accept any iterable of names but store an ordered tuple
        object.__setattr__(self, 'select', tuple(self.select or ()))


def contact_table() -> DataverseTable:
    return DataverseTable('contact', 'contacts')


def account_table() -> DataverseTable:
    return DataverseTable('account', 'accounts')
