"""
Random alias generation.

Aliases are not checked for collisions here; a duplicate is rejected by the
storage's uniqueness constraint when it is saved.
"""

import random
import string
import threading

ALPHABET = string.ascii_letters + string.digits

# One generator per process, seeded once from the OS
_rng = random.Random()
_rng_lock = threading.Lock()


def generate_alias(length: int) -> str:
    """
    Generate a random alias of `length` characters from [A-Za-z0-9].

    Not suitable for anything security related.

    Raises:
        ValueError: If length is negative
    """
    if length < 0:
        raise ValueError(f"alias length must not be negative, got {length}")

    with _rng_lock:
        return ''.join(_rng.choices(ALPHABET, k=length))
