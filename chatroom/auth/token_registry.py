"""
In-memory registry of issued session credentials.

A credential is "<user_id>.<login>". It is valid only while it is a member
of the registry; the embedded identity is never trusted on its own.
Nothing is persisted, so a restart invalidates every credential.
"""

from threading import Lock
from typing import Optional, Set

from ..models.user import Identity

SEPARATOR = "."


def encode_credential(identity: Identity) -> str:
    return f"{identity.user_id}{SEPARATOR}{identity.login}"


def decode_credential(credential: str) -> Optional[Identity]:
    # user ids are UUIDs and never contain the separator; logins may
    user_id, sep, login = credential.partition(SEPARATOR)
    if not sep or not user_id:
        return None
    return Identity(user_id=user_id, login=login)


class TokenRegistry:
    """Process-lifetime set of valid credentials"""

    def __init__(self):
        self._tokens: Set[str] = set()
        self._lock = Lock()

    def issue(self, identity: Identity) -> str:
        """Mint the credential for identity and register it"""
        credential = encode_credential(identity)
        with self._lock:
            self._tokens.add(credential)
        return credential

    def is_valid(self, credential: Optional[str]) -> bool:
        if not credential:
            return False
        with self._lock:
            return credential in self._tokens

    def identity_of(self, credential: Optional[str]) -> Optional[Identity]:
        """Identity of a registered credential, None otherwise"""
        if not self.is_valid(credential):
            return None
        return decode_credential(credential)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
