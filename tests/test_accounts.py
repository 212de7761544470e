"""Tests for the account service and its JSON store"""

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from chatroom.services.account_service import AccountService
from chatroom.services.user_store import UserStore
from chatroom.utils.exceptions import AuthenticationError, ConfigError, ConflictError, ValidationError


@pytest.fixture
def accounts(tmp_path):
    return AccountService(UserStore(tmp_path / "users.json"))


@pytest.mark.parametrize("login,password", [
    ("", "pw"),
    ("   ", "pw"),
    ("alice", ""),
    ("alice", "   "),
    (None, "pw"),
    ("alice", None),
])
def test_create_rejects_blank_fields(accounts, login, password):
    with pytest.raises(ValidationError, match="Empty username or password"):
        accounts.create(login, password)
    assert accounts.store.load_users() == []


def test_create_and_verify(accounts):
    account = accounts.create("alice", "pw")
    assert accounts.exists("alice")
    assert account.password_hash != "pw"

    identity = accounts.verify("alice", "pw")
    assert identity.user_id == account.id
    assert identity.login == "alice"


def test_duplicate_login_rejected(accounts):
    accounts.create("alice", "pw")
    with pytest.raises(ConflictError, match="Username already exists"):
        accounts.create("alice", "other")
    assert len(accounts.store.load_users()) == 1


def test_verify_rejects_unknown_login_and_bad_password(accounts):
    accounts.create("alice", "pw")
    with pytest.raises(AuthenticationError):
        accounts.verify("bob", "pw")
    with pytest.raises(AuthenticationError):
        accounts.verify("alice", "wrong")
    with pytest.raises(AuthenticationError):
        accounts.verify("alice", None)


@pytest.mark.parametrize("password", ["p" * 80, "é" * 40, "x" * 1000])
def test_passwords_longer_than_72_bytes(accounts, password):
    accounts.create("alice", password)
    assert accounts.verify("alice", password).login == "alice"


def test_long_passwords_differ_past_72_bytes(accounts):
    accounts.create("alice", "a" * 72 + "first")
    with pytest.raises(AuthenticationError):
        accounts.verify("alice", "a" * 72 + "second")


def test_accounts_survive_a_new_store_instance(tmp_path):
    AccountService(UserStore(tmp_path / "users.json")).create("alice", "pw")
    reopened = AccountService(UserStore(tmp_path / "users.json"))
    assert reopened.verify("alice", "pw").login == "alice"


def test_concurrent_registration_creates_one_account(accounts):
    def attempt(_):
        try:
            accounts.create("alice", "pw")
            return "created"
        except ConflictError:
            return "conflict"

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(attempt, range(4)))

    assert results.count("created") == 1
    assert results.count("conflict") == 3
    assert [u.login for u in accounts.store.load_users()] == ["alice"]


def test_store_file_is_indexed_by_login(tmp_path):
    path = tmp_path / "users.json"
    account = AccountService(UserStore(path)).create("alice", "pw")
    raw = json.loads(path.read_text(encoding="utf-8"))
    assert list(raw["accounts"]) == ["alice"]
    assert raw["accounts"]["alice"]["id"] == account.id
    assert list(tmp_path.glob("*.tmp")) == []


def test_corrupt_store_file_raises_config_error(tmp_path):
    path = tmp_path / "users.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Corrupt account file"):
        UserStore(path).find_by_login("alice")
