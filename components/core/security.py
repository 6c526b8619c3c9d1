"""Password hashing utilities."""

import hashlib
import os
from typing import Optional


def get_password_hash(password: str, salt: Optional[str] = None) -> str:
    """Generate password hash using SHA256 with salt."""
    if salt is None:
        salt = os.urandom(32).hex()
    hash_obj = hashlib.sha256()
    hash_obj.update(salt.encode())
    hash_obj.update(password.encode())
    return f"{salt}:{hash_obj.hexdigest()}"
