"""
Account Identifier Module

Generates 6-digit numeric account IDs from an injectable random source.
The generator does not guarantee uniqueness; the store rejects duplicates.
"""

import random
from typing import Optional

from .config import get_config

ID_MIN = 100000
ID_MAX = 999999


class AccountIdGenerator:
    """Random 6-digit account ID source"""

    def __init__(self, rng: Optional[random.Random] = None):
        if rng is None:
            rng = random.Random(get_config().id_seed)
        self._rng = rng

    def next(self) -> str:
        """Return a random ID in [100000, 999999]"""
        return str(self._rng.randint(ID_MIN, ID_MAX))
