from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional, TypeVar, Union

import httpx
from postgrest.exceptions import APIError
from supabase import Client, ClientOptions, create_client
from supabase_auth.errors import AuthError

from config import AppConfig
from data.contracts import TableName, WriteModel
from data.queries import Select


logger = logging.getLogger(__name__)

T = TypeVar("T")


class BackendError(RuntimeError):
    def __init__(self, message: str, status: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.code = code


class BackendConfigError(BackendError):
    pass


@dataclass(frozen=True)
class QueryResult:
    rows: list[dict[str, Any]]
    count: Optional[int] = None


@dataclass(frozen=True)
class Identity:
    id: str
    email: str


def _filter_value(v: Any) -> Any:
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    if isinstance(v, bool):
        return "true" if v else "false"
    return v


def _api_status(code: Optional[str]) -> Optional[int]:
    # Non-JSON error bodies come back with the HTTP status as the code
    return int(code) if code and code.isdigit() else None


class SupabaseClient:
    """
    Thin wrapper over the hosted project's `supabase` client:
    - table reads with filters, ordering and exact counts
    - single-row upsert
    - identity creation through the auth API

    Every library or transport error surfaces as BackendError. Nothing is retried.
    """

    def __init__(self, cfg: AppConfig, sb: Optional[Client] = None):
        self.cfg = cfg
        self._sb = sb

    def is_configured(self) -> bool:
        return bool(self.cfg.supabase_url and self.cfg.supabase_key)

    @property
    def sb(self) -> Client:
        if self._sb is None:
            if not self.is_configured():
                raise BackendConfigError(
                    "Missing SUPABASE_URL or SUPABASE_PUBLISHABLE_KEY. "
                    "Set both for live data, or switch on mock data."
                )
            self._sb = create_client(
                self.cfg.supabase_url,
                self.cfg.supabase_key or "",
                options=ClientOptions(
                    postgrest_client_timeout=self.cfg.request_timeout_s,
                    auto_refresh_token=False,
                    persist_session=False,
                ),
            )
        return self._sb

    def _call(self, what: str, fn: Callable[[], T]) -> T:
        logger.debug("supabase %s", what)
        try:
            return fn()
        except APIError as e:
            raise BackendError(e.message or str(e), status=_api_status(e.code), code=e.code) from e
        except AuthError as e:
            raise BackendError(e.message, status=getattr(e, "status", None), code=getattr(e, "code", None)) from e
        except httpx.HTTPError as e:
            raise BackendError(f"{what} failed: {type(e).__name__}: {e}") from e

    def select(self, q: Select) -> QueryResult:
        def run():
            b = self.sb.table(q.table).select(q.columns, count=q.count, head=q.head)
            for col, v in q.eq:
                b = b.eq(col, _filter_value(v))
            for col, pattern in q.ilike:
                b = b.ilike(col, pattern)
            for col, values in q.in_:
                b = b.in_(col, [_filter_value(v) for v in values])
            for col, v in q.gte:
                b = b.gte(col, _filter_value(v))
            if q.order:
                col, asc = q.order
                b = b.order(col, desc=not asc)
            if q.limit is not None:
                b = b.limit(q.limit)
            return b.execute()

        resp = self._call(f"select {q.table}", run)
        count = resp.count if q.count else None
        if q.head:
            return QueryResult(rows=[], count=count)

        rows = resp.data if resp.data is not None else []
        if not isinstance(rows, list):
            raise BackendError(f"Expected a list of rows from {q.table}, got {type(rows).__name__}")
        return QueryResult(rows=rows, count=count)

    def upsert(self, table: TableName, row: Union[WriteModel, dict[str, Any]]) -> dict[str, Any]:
        payload = row.payload() if isinstance(row, WriteModel) else row
        resp = self._call(f"upsert {table}", lambda: self.sb.table(table).upsert(payload).execute())
        if not resp.data:
            raise BackendError(f"Upsert into {table} returned no row")
        return resp.data[0]

    def create_identity(self, email: str, password: str, metadata: Optional[dict[str, Any]] = None) -> Identity:
        resp = self._call(
            "signup",
            lambda: self.sb.auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata or {}}}
            ),
        )
        user = resp.user
        if user is None or not user.id:
            raise BackendError("Signup response did not include a user id")
        return Identity(id=str(user.id), email=str(user.email or email))


def get_client(cfg: AppConfig, sb: Optional[Client] = None) -> SupabaseClient:
    return SupabaseClient(cfg, sb=sb)
