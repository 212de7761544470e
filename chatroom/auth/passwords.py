"""
Password hashing with bcrypt.

bcrypt only looks at 72 bytes (and bcrypt>=5 refuses longer input), so the
password is first reduced to a base64 SHA-256 digest: 44 ASCII bytes for any
password length or alphabet.
"""

import base64
import hashlib

import bcrypt

BCRYPT_ROUNDS = 12


def _prehash(password: str) -> bytes:
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str) -> str:
    """bcrypt hash of the password digest"""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """True when password matches a hash made by hash_password"""
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("ascii"))
    except ValueError:
        # malformed stored hash
        return False
