# fakeout/ids.py
from __future__ import annotations
import random, string
from typing import Optional

ALPHABET = string.ascii_lowercase + string.digits

def new_id(rng: Optional[random.Random] = None, n: int = 8) -> str:
    """Short opaque token used for participant ids and answer ids."""
    rng = rng or random
    return ''.join(rng.choice(ALPHABET) for _ in range(n))
