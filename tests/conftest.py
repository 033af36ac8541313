"""
Pytest configuration and shared fixtures.

The Supabase client is replaced by an in-memory fake that understands the
small part of the query builder and auth API the application uses.
"""

import sys
from copy import deepcopy
from pathlib import Path
from types import SimpleNamespace
from uuid import uuid4

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from schedule_app.config.settings import (  # noqa: E402
    AppSettings,
    LoggingSettings,
    StorageSettings,
    SupabaseSettings,
    SyncSettings,
    UiSettings,
)
from schedule_app.services import AuthService, ScheduleService, ServiceContext  # noqa: E402


class FakeQuery:
    def __init__(self, table, action, payload=None):
        self.table = table
        self.action = action
        self.payload = payload
        self.filters = []

    def select(self, *_columns):
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        self.table.calls.append(self.action)
        if self.table.failure is not None:
            raise RuntimeError(self.table.failure)
        rows = self.table.rows
        if self.action == "select":
            data = [deepcopy(row) for row in rows if self._matches(row)]
        elif self.action == "insert":
            row = deepcopy(self.payload)
            row.setdefault("id", str(uuid4()))
            rows.append(row)
            data = [deepcopy(row)]
        elif self.action == "update":
            data = []
            for row in rows:
                if self._matches(row):
                    row.update(deepcopy(self.payload))
                    data.append(deepcopy(row))
        elif self.action == "delete":
            data = [deepcopy(row) for row in rows if self._matches(row)]
            self.table.rows = [row for row in rows if not self._matches(row)]
        else:  # pragma: no cover - guarded by FakeTable
            raise AssertionError(self.action)
        return SimpleNamespace(data=data)


class FakeTable:
    def __init__(self):
        self.rows = []
        self.calls = []
        self.failure = None

    def select(self, *_columns):
        return FakeQuery(self, "select")

    def insert(self, payload):
        return FakeQuery(self, "insert", payload)

    def update(self, payload):
        return FakeQuery(self, "update", payload)

    def delete(self):
        return FakeQuery(self, "delete")


class FakeAuth:
    def __init__(self):
        self.accounts = {}
        self.confirm_email = False
        self.sign_out_calls = 0

    def add_account(self, email, password):
        user = SimpleNamespace(id=f"user-{len(self.accounts) + 1}", email=email)
        self.accounts[email] = (password, user)
        return user

    @staticmethod
    def _session(user):
        return SimpleNamespace(user=user, access_token=f"token-{user.id}")

    def sign_in_with_password(self, credentials):
        account = self.accounts.get(credentials["email"])
        if account is None or account[0] != credentials["password"]:
            raise RuntimeError("Invalid login credentials")
        return SimpleNamespace(user=account[1], session=self._session(account[1]))

    def sign_up(self, credentials):
        if credentials["email"] in self.accounts:
            raise RuntimeError("User already registered")
        if len(credentials["password"]) < 6:
            raise RuntimeError("Password should be at least 6 characters.")
        user = self.add_account(credentials["email"], credentials["password"])
        session = None if self.confirm_email else self._session(user)
        return SimpleNamespace(user=user, session=session)

    def sign_out(self):
        self.sign_out_calls += 1


class FakeSupabaseClient:
    def __init__(self):
        self.tables = {}
        self.auth = FakeAuth()

    def table(self, name):
        return self.tables.setdefault(name, FakeTable())


@pytest.fixture
def settings(tmp_path):
    return AppSettings(
        supabase=SupabaseSettings(url="https://example.supabase.co", anon_key="anon-key"),
        storage=StorageSettings(entries_table="schedules"),
        sync=SyncSettings(refresh_interval=0),
        ui=UiSettings(app_name="Schedule", organization="ScheduleApp"),
        logging=LoggingSettings(level="INFO", directory=tmp_path),
    )


@pytest.fixture
def fake_client():
    client = FakeSupabaseClient()
    client.auth.add_account("alice@example.com", "alice-secret")
    client.auth.add_account("bob@example.com", "bob-secret")
    return client


@pytest.fixture
def schedules_table(fake_client):
    return fake_client.table("schedules")


@pytest.fixture
def context(settings, fake_client):
    ctx = ServiceContext(settings=settings)
    ctx.gateway.use_client(fake_client)
    return ctx


@pytest.fixture
def auth_service(context):
    return AuthService(context)


@pytest.fixture
def schedule_service(context):
    service = ScheduleService(context)
    yield service
    service.stop_listening()


@pytest.fixture
def alice(auth_service):
    return auth_service.sign_in("alice@example.com", "alice-secret")
