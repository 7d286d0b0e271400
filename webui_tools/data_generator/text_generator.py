"""
================================================================================
Text Data Generator
================================================================================

Small random-data helpers for UI tests: unique usernames and passwords for the
login and registration flows.

================================================================================
"""

import random
import string

ALPHANUMERIC = string.ascii_letters + string.digits


def generate_random_text(length: int = 10) -> str:
    """
    Generate a random alphanumeric string.

    Args:
        length: Number of characters (0 gives an empty string)

    Returns:
        Random string made of ASCII letters and digits
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    return "".join(random.choices(ALPHANUMERIC, k=length))

