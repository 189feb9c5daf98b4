from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

import pandas as pd

from config import AppConfig
from data import mock_data
from data import queries
from data.connection import BackendError, SupabaseClient, get_client
from data.contracts import ContractViolation, parse_rows
from data.queries import Select


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataResult:
    rows: list[Any]
    source: str  # "mock" | "supabase"
    count: Optional[int] = None
    warning: str | None = None

    @property
    def df(self) -> pd.DataFrame:
        # Embedded records flatten to dotted columns, e.g. "profiles.full_name".
        if not self.rows:
            return pd.DataFrame()
        return pd.json_normalize([r.model_dump() for r in self.rows])


def _fetch(
    cfg: AppConfig,
    use_mock: bool,
    q: Select,
    fn_mock: Callable[[], list[dict]],
    client: Optional[SupabaseClient] = None,
) -> DataResult:
    if use_mock:
        raw = fn_mock()
        rows = [] if q.head else parse_rows(q.table, raw, q.model)
        return DataResult(rows=rows, source="mock", count=len(raw) if q.count else None)

    try:
        res = (client or get_client(cfg)).select(q)
        rows = parse_rows(q.table, res.rows, q.model)
    except (BackendError, ContractViolation) as e:
        logger.exception("Query on %s failed; showing an empty result", q.table)
        return DataResult(
            rows=[],
            source="supabase",
            count=0 if q.count else None,
            warning=f"Could not load {q.table}: {type(e).__name__}: {e}",
        )
    return DataResult(rows=rows, source="supabase", count=res.count)


# --- dashboard ---

def get_member_count(cfg: AppConfig, use_mock: bool, client: Optional[SupabaseClient] = None) -> DataResult:
    return _fetch(cfg, use_mock, queries.q_member_count(), mock_data.members_mock, client)


def get_savings_balances(cfg: AppConfig, use_mock: bool, client: Optional[SupabaseClient] = None) -> DataResult:
    return _fetch(cfg, use_mock, queries.q_savings_balances(), mock_data.savings_accounts_mock, client)


def get_active_loan_balances(cfg: AppConfig, use_mock: bool, client: Optional[SupabaseClient] = None) -> DataResult:
    return _fetch(cfg, use_mock, queries.q_active_loan_balances(), mock_data.active_loans_mock, client)


# --- pages ---

def get_members(cfg: AppConfig, use_mock: bool, client: Optional[SupabaseClient] = None) -> DataResult:
    return _fetch(cfg, use_mock, queries.q_members(), mock_data.members_mock, client)


def get_savings_accounts(cfg: AppConfig, use_mock: bool, client: Optional[SupabaseClient] = None) -> DataResult:
    return _fetch(cfg, use_mock, queries.q_savings_accounts(), mock_data.savings_accounts_mock, client)


def get_loans(cfg: AppConfig, use_mock: bool, client: Optional[SupabaseClient] = None) -> DataResult:
    return _fetch(cfg, use_mock, queries.q_loans(), mock_data.loans_mock, client)


# --- reports ---

def get_loan_amounts(cfg: AppConfig, use_mock: bool, client: Optional[SupabaseClient] = None) -> DataResult:
    return _fetch(cfg, use_mock, queries.q_loan_amounts(), mock_data.loans_mock, client)


def get_transactions_since(
    cfg: AppConfig, use_mock: bool, start: datetime, client: Optional[SupabaseClient] = None
) -> DataResult:
    return _fetch(
        cfg,
        use_mock,
        queries.q_transactions_since(start),
        lambda: mock_data.transactions_since_mock(start),
        client,
    )
