"""
Test data names

Random names and uniqueness tokens for synthesized records.
"""

import itertools
import random
import time
from datetime import datetime

FIRST_NAMES = [
    'Ada', 'Alan', 'Barbara', 'Claude', 'Dennis', 'Edsger', 'Frances',
    'Grace', 'Hedy', 'John', 'Katherine', 'Linus', 'Margaret', 'Niklaus',
    'Radia', 'Tim',
]

LAST_NAMES = [
    'Allen', 'Berners-Lee', 'Dijkstra', 'Hamilton', 'Hopper', 'Johnson',
    'Kay', 'Lamarr', 'Liskov', 'Lovelace', 'Perlman', 'Ritchie', 'Shannon',
    'Torvalds', 'Turing', 'Wirth',
]

_NAMES = {
    'firstname': FIRST_NAMES,
    'lastname': LAST_NAMES,
}

_counter = itertools.count()


def random_name(kind: str) -> str:
    """Pick a random 'firstname' or 'lastname'."""
    try:
        return random.choice(_NAMES[kind])
    except KeyError:
        raise ValueError(f"Unknown name kind: {kind}") from None


def uniqueness_token() -> str:
    """
    Timestamp plus a process-wide counter.

    Two calls in the same process never return the same token, even
    within one clock tick.
    """
    return f"{datetime.now().strftime('%Y%m%d%H%M%S')}{next(_counter):04d}"


def unix_timestamp() -> str:
    return str(int(time.time()))
