"""
Account storage in a single JSON file, indexed by login.
Replacing the file goes through a temp file in the same directory.
"""

import json
import shutil
import tempfile
from pathlib import Path
from threading import RLock
from typing import Dict, List, Optional

from ..models.user import Account
from ..utils.exceptions import ConfigError, ConflictError


class UserStore:
    """Accounts keyed by login; create_user is the only writer"""

    def __init__(self, users_path: Path):
        self.users_path = Path(users_path)
        self.users_path.parent.mkdir(exist_ok=True, parents=True)
        self.lock = RLock()

    def _read_index(self) -> Dict[str, Account]:
        if not self.users_path.exists():
            return {}
        try:
            raw = json.loads(self.users_path.read_text(encoding="utf-8"))
            return {login: Account(**data) for login, data in raw.get("accounts", {}).items()}
        except (json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"Corrupt account file {self.users_path}: {e}")

    def _write_index(self, index: Dict[str, Account]) -> None:
        payload = {"accounts": {login: account.model_dump() for login, account in index.items()}}
        with tempfile.NamedTemporaryFile(
            mode="w", dir=self.users_path.parent, suffix=".tmp", delete=False, encoding="utf-8"
        ) as tf:
            json.dump(payload, tf, indent=2, ensure_ascii=False)
            temp_path = Path(tf.name)
        try:
            shutil.move(str(temp_path), str(self.users_path))
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise ConfigError(f"Could not replace {self.users_path}: {e}")

    def load_users(self) -> List[Account]:
        return list(self._read_index().values())

    def find_by_login(self, login: str) -> Optional[Account]:
        return self._read_index().get(login)

    def create_user(self, user: Account) -> Account:
        """Add an account; the login must not be taken"""
        with self.lock:
            index = self._read_index()
            if user.login in index:
                raise ConflictError("Username already exists")
            index[user.login] = user
            self._write_index(index)
        return user
