from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Type

from pydantic import BaseModel

from data.contracts import (
    ACTIVE_LOAN_STATUSES,
    LoanAmounts,
    LoanBalance,
    LoanWithMember,
    ProfileId,
    ProfileRow,
    SavingsAccountWithMember,
    SavingsBalance,
    TableName,
    TransactionFlow,
    embed_select,
)


MEMBER_REF_COLUMNS = ("full_name", "member_number")


@dataclass(frozen=True)
class Select:
    table: TableName
    model: Type[BaseModel]
    columns: str = "*"
    eq: tuple[tuple[str, Any], ...] = ()
    ilike: tuple[tuple[str, str], ...] = ()
    in_: tuple[tuple[str, tuple[Any, ...]], ...] = ()
    gte: tuple[tuple[str, Any], ...] = ()
    order: Optional[tuple[str, bool]] = None  # (column, ascending)
    count: Optional[str] = None  # "exact" | None
    head: bool = False
    limit: Optional[int] = None


def escape_like(value: str) -> str:
    """Makes `value` match literally inside a LIKE / ILIKE pattern."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# --- dashboard ---

def q_member_count() -> Select:
    return Select(table="profiles", model=ProfileId, columns="*", count="exact", head=True)


def q_savings_balances() -> Select:
    return Select(table="savings_accounts", model=SavingsBalance, columns="balance")


def q_active_loan_balances() -> Select:
    return Select(
        table="loans",
        model=LoanBalance,
        columns="outstanding_balance",
        in_=(("status", ACTIVE_LOAN_STATUSES),),
        count="exact",
    )


# --- pages ---

def q_members() -> Select:
    return Select(table="profiles", model=ProfileRow, order=("join_date", False))


def q_savings_accounts() -> Select:
    return Select(
        table="savings_accounts",
        model=SavingsAccountWithMember,
        columns="*," + embed_select("savings_accounts", "profiles", MEMBER_REF_COLUMNS),
        order=("opened_date", False),
    )


def q_loans() -> Select:
    return Select(
        table="loans",
        model=LoanWithMember,
        columns="*," + embed_select("loans", "profiles", MEMBER_REF_COLUMNS, via="loans_member_id_fkey"),
        order=("application_date", False),
    )


# --- reports ---

def q_loan_amounts() -> Select:
    return Select(table="loans", model=LoanAmounts, columns="principal_amount,outstanding_balance")


def q_transactions_since(start: datetime) -> Select:
    return Select(
        table="transactions",
        model=TransactionFlow,
        columns="transaction_type,amount",
        gte=(("transaction_date", start),),
    )


# --- member creation ---

def q_profile_by_email(email: str) -> Select:
    # Case-insensitive: profiles written elsewhere keep the case they were given
    return Select(table="profiles", model=ProfileId, columns="id", ilike=(("email", escape_like(email)),), limit=1)
