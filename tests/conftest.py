from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Optional

import pytest

from config import AppConfig
from data.connection import SupabaseClient


def api_response(data: Any = None, count: Optional[int] = None):
    return SimpleNamespace(data=[] if data is None else data, count=count)


def auth_response(user_id: Optional[str], email: Optional[str] = None):
    user = SimpleNamespace(id=user_id, email=email) if user_id is not None else None
    return SimpleNamespace(user=user, session=None)


class FakeQuery:
    """Records the builder chain for one table call; `execute` replays the next queued response."""

    STEPS = {"select", "eq", "ilike", "in_", "gte", "order", "limit", "upsert"}

    def __init__(self, sb: "FakeSupabase", table: str):
        self.sb = sb
        self.table = table
        self.calls: list[tuple[str, tuple, dict]] = []

    def __getattr__(self, name):
        if name not in self.STEPS:
            raise AttributeError(name)

        def step(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return step

    def step(self, name):
        return [(args, kwargs) for n, args, kwargs in self.calls if n == name]

    def execute(self):
        return self.sb.next_response()


class FakeAuth:
    def __init__(self, sb: "FakeSupabase"):
        self.sb = sb

    def sign_up(self, credentials):
        self.sb.signups.append(credentials)
        return self.sb.next_response()


class FakeSupabase:
    """Stands in for supabase.Client: records table calls and sign-ups, replays queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.queries: list[FakeQuery] = []
        self.signups: list[dict] = []
        self.auth = FakeAuth(self)

    def table(self, name):
        q = FakeQuery(self, name)
        self.queries.append(q)
        return q

    def next_response(self):
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


@pytest.fixture
def cfg() -> AppConfig:
    return AppConfig(
        supabase_url="https://abcd1234.supabase.co",
        supabase_key="test-key",
        request_timeout_s=5.0,
        default_use_mock=False,
        currency_label="KSh",
        log_level="INFO",
    )


@pytest.fixture
def unconfigured_cfg() -> AppConfig:
    return AppConfig(
        supabase_url="",
        supabase_key=None,
        request_timeout_s=5.0,
        default_use_mock=False,
        currency_label="KSh",
        log_level="INFO",
    )


@pytest.fixture
def client_with(cfg):
    def _make(*responses) -> tuple[SupabaseClient, FakeSupabase]:
        sb = FakeSupabase(*responses)
        return SupabaseClient(cfg, sb=sb), sb

    return _make
