from datetime import datetime, timedelta, timezone

import pytest

from data import mock_data
from data.contracts import (
    ACTIVE_LOAN_STATUSES,
    LoanWithMember,
    ProfileRow,
    SavingsAccountWithMember,
    TransactionRow,
    parse_rows,
)


def test_mock_rows_satisfy_contracts():
    assert len(parse_rows("profiles", mock_data.members_mock(), ProfileRow)) == mock_data.N_MEMBERS
    parse_rows("savings_accounts", mock_data.savings_accounts_mock(), SavingsAccountWithMember)
    parse_rows("loans", mock_data.loans_mock(), LoanWithMember)
    parse_rows("transactions", mock_data.transactions_mock(), TransactionRow)


def test_mock_data_is_deterministic():
    assert mock_data.members_mock() == mock_data.members_mock()
    assert [r["loan_number"] for r in mock_data.loans_mock()] == [r["loan_number"] for r in mock_data.loans_mock()]


def test_member_emails_and_numbers_unique():
    members = mock_data.members_mock()
    assert len({m["email"] for m in members}) == len(members)
    assert len({m["member_number"] for m in members}) == len(members)


def test_accounts_and_loans_reference_mock_members():
    ids = {m["id"] for m in mock_data.members_mock()}
    assert all(a["member_id"] in ids for a in mock_data.savings_accounts_mock())
    assert all(loan["member_id"] in ids for loan in mock_data.loans_mock())


def test_completed_loans_have_nothing_outstanding():
    for loan in mock_data.loans_mock():
        if loan["status"] == "completed":
            assert loan["outstanding_balance"] == 0.0
        assert loan["outstanding_balance"] >= 0


def test_active_loans_mock_filters_statuses():
    assert all(r["status"] in ACTIVE_LOAN_STATUSES for r in mock_data.active_loans_mock())


def test_transactions_since_filters_by_date():
    start = datetime.now(timezone.utc) - timedelta(days=10)
    rows = mock_data.transactions_since_mock(start)
    assert rows
    assert all(datetime.fromisoformat(r["transaction_date"]) >= start for r in rows)
    assert len(rows) < len(mock_data.transactions_mock())


def test_balance_after_follows_signed_amounts_per_account():
    by_account: dict[str, list[dict]] = {}
    for r in sorted(mock_data.transactions_mock(), key=lambda r: r["transaction_date"]):
        by_account.setdefault(r["account_id"], []).append(r)

    assert len(by_account) > 1
    for rows in by_account.values():
        for prev, cur in zip(rows, rows[1:]):
            expected = prev["balance_after"] + mock_data.signed_amount(cur["transaction_type"], cur["amount"])
            assert cur["balance_after"] == pytest.approx(expected, abs=0.01)
        assert all(r["balance_after"] >= 0 for r in rows)


def test_signed_amount_by_type():
    assert mock_data.signed_amount("deposit", 100.0) == 100.0
    assert mock_data.signed_amount("loan_disbursement", 100.0) == 100.0
    assert mock_data.signed_amount("withdrawal", 100.0) == -100.0
    assert mock_data.signed_amount("fees", 100.0) == -100.0
