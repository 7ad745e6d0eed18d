"""Password hashing (bcrypt).

Salted, adaptive, deliberately slow. Used only for user passwords; bearer
token hashes use the keyed HMAC in ``token_lifecycle``.
"""

import bcrypt

DEFAULT_ROUNDS = 12


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check a password against a stored hash.

    Never raises: a mismatch, an empty hash or a malformed hash all return False.
    """
    if not plain or not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False
