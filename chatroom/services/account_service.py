"""
Account service: existence checks, registration and credential verification.
"""

from typing import Any

from ..auth.passwords import hash_password, verify_password
from ..models.user import Account, Identity
from ..utils.exceptions import AuthenticationError, ConflictError, ValidationError
from ..utils.logger import get_logger
from .user_store import UserStore

logger = get_logger(__name__)

EMPTY_FIELDS_MESSAGE = "Empty username or password"
DUPLICATE_LOGIN_MESSAGE = "Username already exists"
BAD_CREDENTIALS_MESSAGE = "Invalid login or password"


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


class AccountService:
    """Accounts backed by a UserStore"""

    def __init__(self, store: UserStore):
        self.store = store

    def exists(self, login: str) -> bool:
        return self.store.find_by_login(_clean(login)) is not None

    def create(self, login: Any, password: Any) -> Account:
        """
        Register a new account.

        Raises ValidationError for a blank login or password and
        ConflictError when the login is taken.
        """
        login = _clean(login)
        if not login or not _clean(password):
            raise ValidationError(EMPTY_FIELDS_MESSAGE)

        if self.exists(login):
            raise ConflictError(DUPLICATE_LOGIN_MESSAGE)

        account = Account(login=login, password_hash=hash_password(password))
        self.store.create_user(account)
        logger.info("Account created", login=login, user_id=account.id)
        return account

    def verify(self, login: Any, password: Any) -> Identity:
        """Identity for matching credentials, AuthenticationError otherwise"""
        if not isinstance(password, str):
            raise AuthenticationError(BAD_CREDENTIALS_MESSAGE)

        account = self.store.find_by_login(_clean(login))
        if not account or not verify_password(password, account.password_hash):
            raise AuthenticationError(BAD_CREDENTIALS_MESSAGE)
        return account.identity
