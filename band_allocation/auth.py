# auth.py
"""Password hashing for user accounts.

Accounts created before hashing was introduced hold their password in
plain text; those still verify and are re-hashed on the next login.
"""

from typing import Optional, Tuple

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256", "plaintext"], deprecated=["plaintext"])


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, stored: str) -> Tuple[bool, Optional[str]]:
    """Check ``password`` against ``stored``.

    Returns ``(valid, new_hash)`` where ``new_hash`` is set when the stored
    value should be replaced, e.g. a legacy plain-text password.
    """
    return pwd_context.verify_and_update(password, stored)
