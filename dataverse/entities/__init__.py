"""
Dataverse record entities and their builders.
"""

from .account import Account, AccountBuilder
from .contact import Contact, ContactBuilder
from .names import random_name, uniqueness_token

__all__ = [
    'Account',
    'AccountBuilder',
    'Contact',
    'ContactBuilder',
    'random_name',
    'uniqueness_token',
]
