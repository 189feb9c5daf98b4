"""
Plain reductions over fetched rows.

Every page turns a `DataResult.df` into a handful of numbers. Missing,
null or non-numeric amounts count as 0, and an empty frame reduces to 0.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

import pandas as pd

from data.contracts import ACTIVE_LOAN_STATUSES


def _numeric(df: pd.DataFrame, column: str) -> pd.Series:
    if column not in df.columns:
        return pd.Series(dtype="float64")
    return pd.to_numeric(df[column], errors="coerce").fillna(0.0)


def total(df: pd.DataFrame, column: str) -> float:
    return float(_numeric(df, column).sum())


def average(df: pd.DataFrame, column: str) -> float:
    s = _numeric(df, column)
    return float(s.mean()) if len(s) else 0.0


def with_status(df: pd.DataFrame, statuses: Iterable[str], column: str = "status") -> pd.DataFrame:
    if column not in df.columns:
        return df.iloc[0:0]
    return df[df[column].isin(list(statuses))]


def count_status(df: pd.DataFrame, statuses: Iterable[str], column: str = "status") -> int:
    return int(len(with_status(df, statuses, column)))


def search(df: pd.DataFrame, term: str, columns: Sequence[str]) -> pd.DataFrame:
    """Case-insensitive substring match on any of `columns`; blank term keeps every row."""
    term = (term or "").strip().lower()
    if not term or df.empty:
        return df
    mask = pd.Series(False, index=df.index)
    for col in columns:
        if col in df.columns:
            mask |= df[col].astype("string").str.lower().str.contains(term, regex=False, na=False)
    return df[mask]


def sum_by_type(df: pd.DataFrame, transaction_type: str) -> float:
    return total(with_status(df, [transaction_type], column="transaction_type"), "amount")


def start_of_month(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now().astimezone()
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


@dataclass(frozen=True)
class DashboardStats:
    total_members: int
    total_savings: float
    active_loans: int
    total_loan_amount: float


@dataclass(frozen=True)
class LoanPortfolio:
    active_loans: int
    total_outstanding: float
    total_disbursed: float


@dataclass(frozen=True)
class SavingsSummary:
    total_balance: float
    active_accounts: int
    average_interest_rate: float


@dataclass(frozen=True)
class ReportData:
    total_members: int
    total_savings: float
    total_loans: float
    total_outstanding: float
    monthly_deposits: float
    monthly_withdrawals: float
    loans_disbursed: float
    loans_repaid: float


def dashboard_stats(
    member_count: Optional[int],
    savings: pd.DataFrame,
    active_loan_count: Optional[int],
    active_loans: pd.DataFrame,
) -> DashboardStats:
    return DashboardStats(
        total_members=member_count or 0,
        total_savings=total(savings, "balance"),
        active_loans=active_loan_count or 0,
        total_loan_amount=total(active_loans, "outstanding_balance"),
    )


def loan_portfolio(loans: pd.DataFrame) -> LoanPortfolio:
    active = with_status(loans, ACTIVE_LOAN_STATUSES)
    return LoanPortfolio(
        active_loans=int(len(active)),
        total_outstanding=total(active, "outstanding_balance"),
        total_disbursed=total(loans, "principal_amount"),
    )


def savings_summary(accounts: pd.DataFrame) -> SavingsSummary:
    return SavingsSummary(
        total_balance=total(accounts, "balance"),
        active_accounts=count_status(accounts, ["active"]),
        average_interest_rate=average(accounts, "interest_rate"),
    )


def report_data(
    member_count: Optional[int],
    savings: pd.DataFrame,
    loans: pd.DataFrame,
    transactions: pd.DataFrame,
) -> ReportData:
    return ReportData(
        total_members=member_count or 0,
        total_savings=total(savings, "balance"),
        total_loans=total(loans, "principal_amount"),
        total_outstanding=total(loans, "outstanding_balance"),
        monthly_deposits=sum_by_type(transactions, "deposit"),
        monthly_withdrawals=sum_by_type(transactions, "withdrawal"),
        loans_disbursed=sum_by_type(transactions, "loan_disbursement"),
        loans_repaid=sum_by_type(transactions, "loan_repayment"),
    )
