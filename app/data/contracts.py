"""
Typed data-access contracts for the hosted SACCO schema.

One Row / Insert / Update record per table, the closed enum value sets and the
declared foreign keys. The mapping is static: six tables, three enums.

- Row: what a `select=*` read returns
- Insert: what an insert/upsert accepts (server-defaulted fields optional)
- Update: what a partial update accepts (everything optional)

Constraint enforcement (uniqueness, foreign keys, enum membership) belongs to the
backend. The only runtime check done here is parsing rows at the service boundary.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Literal, Optional, Type, get_args

from pydantic import BaseModel, ConfigDict, ValidationError


TableName = Literal[
    "loan_repayments",
    "loans",
    "profiles",
    "savings_accounts",
    "transactions",
    "user_roles",
]
EnumName = Literal["app_role", "loan_status", "transaction_type"]

AppRole = Literal["admin", "staff", "member"]
LoanStatus = Literal["pending", "approved", "active", "completed", "defaulted"]
TransactionType = Literal[
    "deposit",
    "withdrawal",
    "loan_disbursement",
    "loan_repayment",
    "interest",
    "fees",
]

# Loans that still carry an outstanding balance.
ACTIVE_LOAN_STATUSES: tuple[LoanStatus, ...] = ("approved", "active")

ENUMS: dict[str, tuple[str, ...]] = {
    "app_role": get_args(AppRole),
    "loan_status": get_args(LoanStatus),
    "transaction_type": get_args(TransactionType),
}


class UnknownContractError(KeyError):
    pass


class ContractViolation(ValueError):
    """A row returned by the backend did not match its declared shape."""

    def __init__(self, table: str, index: int, error: ValidationError):
        self.table = table
        self.index = index
        self.error = error
        super().__init__(f"{table}[{index}]: {error.error_count()} invalid field(s): {error.errors()[0]['loc']}")


class RowModel(BaseModel):
    # Rows may carry embedded or newly added columns.
    model_config = ConfigDict(extra="ignore")


class WriteModel(BaseModel):
    # Payloads must only name real columns.
    model_config = ConfigDict(extra="forbid")

    def payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


# --- profiles ---

class ProfileRow(RowModel):
    id: str
    full_name: str
    email: str
    phone: Optional[str] = None
    national_id: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    member_number: Optional[str] = None
    join_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileInsert(WriteModel):
    id: str
    full_name: str
    email: str
    phone: Optional[str] = None
    national_id: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    member_number: Optional[str] = None
    join_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileUpdate(WriteModel):
    id: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    national_id: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    member_number: Optional[str] = None
    join_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- savings_accounts ---

class SavingsAccountRow(RowModel):
    id: str
    account_number: str
    balance: float
    interest_rate: Optional[float] = None
    status: Optional[str] = None
    opened_date: Optional[date] = None
    member_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SavingsAccountInsert(WriteModel):
    id: Optional[str] = None
    account_number: str
    balance: Optional[float] = None
    interest_rate: Optional[float] = None
    status: Optional[str] = None
    opened_date: Optional[date] = None
    member_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SavingsAccountUpdate(WriteModel):
    id: Optional[str] = None
    account_number: Optional[str] = None
    balance: Optional[float] = None
    interest_rate: Optional[float] = None
    status: Optional[str] = None
    opened_date: Optional[date] = None
    member_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- transactions ---

class TransactionRow(RowModel):
    id: str
    account_id: str
    amount: float
    balance_after: float
    transaction_type: TransactionType
    description: Optional[str] = None
    processed_by: Optional[str] = None
    reference_number: Optional[str] = None
    transaction_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class TransactionInsert(WriteModel):
    id: Optional[str] = None
    account_id: str
    amount: float
    balance_after: float
    transaction_type: TransactionType
    description: Optional[str] = None
    processed_by: Optional[str] = None
    reference_number: Optional[str] = None
    transaction_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class TransactionUpdate(WriteModel):
    id: Optional[str] = None
    account_id: Optional[str] = None
    amount: Optional[float] = None
    balance_after: Optional[float] = None
    transaction_type: Optional[TransactionType] = None
    description: Optional[str] = None
    processed_by: Optional[str] = None
    reference_number: Optional[str] = None
    transaction_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


# --- loans ---

class LoanRow(RowModel):
    id: str
    loan_number: str
    principal_amount: float
    outstanding_balance: float
    interest_rate: float
    duration_months: int
    monthly_payment: float
    status: Optional[LoanStatus] = None
    purpose: Optional[str] = None
    application_date: Optional[date] = None
    approval_date: Optional[date] = None
    disbursement_date: Optional[date] = None
    member_id: str
    approved_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoanInsert(WriteModel):
    id: Optional[str] = None
    loan_number: str
    principal_amount: float
    outstanding_balance: float
    interest_rate: float
    duration_months: int
    monthly_payment: float
    status: Optional[LoanStatus] = None
    purpose: Optional[str] = None
    application_date: Optional[date] = None
    approval_date: Optional[date] = None
    disbursement_date: Optional[date] = None
    member_id: str
    approved_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoanUpdate(WriteModel):
    id: Optional[str] = None
    loan_number: Optional[str] = None
    principal_amount: Optional[float] = None
    outstanding_balance: Optional[float] = None
    interest_rate: Optional[float] = None
    duration_months: Optional[int] = None
    monthly_payment: Optional[float] = None
    status: Optional[LoanStatus] = None
    purpose: Optional[str] = None
    application_date: Optional[date] = None
    approval_date: Optional[date] = None
    disbursement_date: Optional[date] = None
    member_id: Optional[str] = None
    approved_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# --- loan_repayments ---

class LoanRepaymentRow(RowModel):
    id: str
    loan_id: str
    amount: float
    principal_paid: float
    interest_paid: float
    balance_after: float
    processed_by: Optional[str] = None
    reference_number: Optional[str] = None
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class LoanRepaymentInsert(WriteModel):
    id: Optional[str] = None
    loan_id: str
    amount: float
    principal_paid: float
    interest_paid: float
    balance_after: float
    processed_by: Optional[str] = None
    reference_number: Optional[str] = None
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class LoanRepaymentUpdate(WriteModel):
    id: Optional[str] = None
    loan_id: Optional[str] = None
    amount: Optional[float] = None
    principal_paid: Optional[float] = None
    interest_paid: Optional[float] = None
    balance_after: Optional[float] = None
    processed_by: Optional[str] = None
    reference_number: Optional[str] = None
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


# --- user_roles ---

class UserRoleRow(RowModel):
    id: str
    user_id: str
    role: AppRole
    created_at: Optional[datetime] = None


class UserRoleInsert(WriteModel):
    id: Optional[str] = None
    user_id: str
    role: AppRole
    created_at: Optional[datetime] = None


class UserRoleUpdate(WriteModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    role: Optional[AppRole] = None
    created_at: Optional[datetime] = None


# --- joined + projected read shapes ---

class MemberRef(RowModel):
    full_name: str
    member_number: Optional[str] = None


class LoanWithMember(LoanRow):
    profiles: Optional[MemberRef] = None


class SavingsAccountWithMember(SavingsAccountRow):
    profiles: Optional[MemberRef] = None


class ProfileId(RowModel):
    id: str


class SavingsBalance(RowModel):
    balance: Optional[float] = None


class LoanBalance(RowModel):
    outstanding_balance: Optional[float] = None


class LoanAmounts(RowModel):
    principal_amount: Optional[float] = None
    outstanding_balance: Optional[float] = None


class TransactionFlow(RowModel):
    transaction_type: TransactionType
    amount: Optional[float] = None


# --- registry ---

@dataclass(frozen=True)
class ForeignKey:
    name: str
    column: str
    referenced_table: str
    referenced_column: str = "id"


@dataclass(frozen=True)
class TableContract:
    name: str
    row: Type[BaseModel]
    insert: Type[WriteModel]
    update: Type[WriteModel]
    relationships: tuple[ForeignKey, ...] = ()


TABLES: dict[str, TableContract] = {
    "loan_repayments": TableContract(
        "loan_repayments",
        LoanRepaymentRow,
        LoanRepaymentInsert,
        LoanRepaymentUpdate,
        (
            ForeignKey("loan_repayments_loan_id_fkey", "loan_id", "loans"),
            ForeignKey("loan_repayments_processed_by_fkey", "processed_by", "profiles"),
        ),
    ),
    "loans": TableContract(
        "loans",
        LoanRow,
        LoanInsert,
        LoanUpdate,
        (
            ForeignKey("loans_approved_by_fkey", "approved_by", "profiles"),
            ForeignKey("loans_member_id_fkey", "member_id", "profiles"),
        ),
    ),
    "profiles": TableContract("profiles", ProfileRow, ProfileInsert, ProfileUpdate),
    "savings_accounts": TableContract(
        "savings_accounts",
        SavingsAccountRow,
        SavingsAccountInsert,
        SavingsAccountUpdate,
        (ForeignKey("savings_accounts_member_id_fkey", "member_id", "profiles"),),
    ),
    "transactions": TableContract(
        "transactions",
        TransactionRow,
        TransactionInsert,
        TransactionUpdate,
        (
            ForeignKey("transactions_account_id_fkey", "account_id", "savings_accounts"),
            ForeignKey("transactions_processed_by_fkey", "processed_by", "profiles"),
        ),
    ),
    "user_roles": TableContract(
        "user_roles",
        UserRoleRow,
        UserRoleInsert,
        UserRoleUpdate,
        (ForeignKey("user_roles_user_id_fkey", "user_id", "profiles"),),
    ),
}


def contract(table: TableName) -> TableContract:
    try:
        return TABLES[table]
    except KeyError:
        raise UnknownContractError(f"Unknown table: {table!r}") from None


def row_model(table: TableName) -> Type[BaseModel]:
    return contract(table).row


def insert_model(table: TableName) -> Type[WriteModel]:
    return contract(table).insert


def update_model(table: TableName) -> Type[WriteModel]:
    return contract(table).update


def relationships(table: TableName) -> tuple[ForeignKey, ...]:
    return contract(table).relationships


def enum_values(name: EnumName) -> tuple[str, ...]:
    try:
        return ENUMS[name]
    except KeyError:
        raise UnknownContractError(f"Unknown enum: {name!r}") from None


def embed_select(table: TableName, referenced: TableName, columns: Iterable[str], via: Optional[str] = None) -> str:
    """
    Column expression embedding `referenced` into a read of `table`.

    When `table` has more than one foreign key to `referenced` the constraint
    must be named (`via`), otherwise the backend cannot pick one.
    """
    fks = [fk for fk in relationships(table) if fk.referenced_table == referenced]
    if via is not None:
        fks = [fk for fk in fks if fk.name == via or fk.column == via]
    if not fks:
        raise UnknownContractError(f"No relationship {table} -> {referenced}" + (f" via {via}" if via else ""))
    if len(fks) > 1:
        raise UnknownContractError(f"Ambiguous relationship {table} -> {referenced}; name the constraint")

    cols = ",".join(columns)
    hint = f"!{fks[0].name}" if via is not None else ""
    return f"{referenced}{hint}({cols})"


def parse_rows(table: TableName, rows: Iterable[dict[str, Any]], model: Optional[Type[BaseModel]] = None) -> list[Any]:
    model = model or row_model(table)
    parsed = []
    for i, raw in enumerate(rows):
        try:
            parsed.append(model.model_validate(raw))
        except ValidationError as e:
            raise ContractViolation(table, i, e) from e
    return parsed
