from datetime import datetime, timezone

import pandas as pd
import pytest

from data import aggregates as agg


MEMBERS = pd.DataFrame(
    [
        {"full_name": "Jane Doe", "email": "jane@x.com", "member_number": "MEM1001"},
        {"full_name": "Tom", "email": "tom@x.com", "member_number": "MEM2002"},
    ]
)

LOANS = pd.DataFrame(
    [
        {"status": "pending", "outstanding_balance": 100.0, "principal_amount": 100.0},
        {"status": "approved", "outstanding_balance": 200.0, "principal_amount": 250.0},
        {"status": "active", "outstanding_balance": 300.0, "principal_amount": 500.0},
        {"status": "completed", "outstanding_balance": 0.0, "principal_amount": 400.0},
        {"status": "defaulted", "outstanding_balance": 50.0, "principal_amount": 80.0},
    ]
)


def test_total_is_order_independent_and_repeatable():
    df = pd.DataFrame([{"balance": 100}, {"balance": 250.5}])
    assert agg.total(df, "balance") == 350.5
    assert agg.total(df, "balance") == 350.5
    assert agg.total(df.iloc[::-1], "balance") == 350.5


def test_total_treats_missing_and_bad_values_as_zero():
    df = pd.DataFrame({"balance": [10, None, "abc", "5.5"]})
    assert agg.total(df, "balance") == 15.5
    assert agg.total(df, "no_such_column") == 0.0
    assert agg.total(pd.DataFrame(), "balance") == 0.0


def test_average_counts_missing_as_zero():
    df = pd.DataFrame({"interest_rate": [4.0, None, 5.0]})
    assert agg.average(df, "interest_rate") == pytest.approx(3.0)
    assert agg.average(pd.DataFrame(), "interest_rate") == 0.0


def test_search_by_name_is_case_insensitive():
    out = agg.search(MEMBERS, "jane", ["full_name", "email", "member_number"])
    assert out["full_name"].tolist() == ["Jane Doe"]


def test_search_by_member_number():
    out = agg.search(MEMBERS, "MEM2002", ["full_name", "email", "member_number"])
    assert out["full_name"].tolist() == ["Tom"]


def test_search_blank_term_keeps_all_rows():
    assert len(agg.search(MEMBERS, "  ", ["full_name"])) == 2


def test_search_skips_null_cells_and_missing_columns():
    df = pd.DataFrame([{"loan_number": "LN1", "profiles.full_name": None}, {"loan_number": "LN2", "profiles.full_name": "Ann"}])
    out = agg.search(df, "ann", ["loan_number", "profiles.full_name", "profiles.member_number"])
    assert out["loan_number"].tolist() == ["LN2"]


def test_active_loan_partition():
    active = agg.with_status(LOANS, agg.ACTIVE_LOAN_STATUSES)
    assert sorted(active["status"]) == ["active", "approved"]

    portfolio = agg.loan_portfolio(LOANS)
    assert portfolio.active_loans == 2
    assert portfolio.total_outstanding == 500.0
    assert portfolio.total_disbursed == 1330.0


def test_loan_portfolio_of_empty_frame():
    assert agg.loan_portfolio(pd.DataFrame()) == agg.LoanPortfolio(0, 0.0, 0.0)


def test_savings_summary():
    df = pd.DataFrame(
        [
            {"balance": 1000, "status": "active", "interest_rate": 4.0},
            {"balance": 500, "status": "dormant", "interest_rate": 5.0},
            {"balance": 0, "status": None, "interest_rate": None},
        ]
    )
    s = agg.savings_summary(df)
    assert s.total_balance == 1500.0
    assert s.active_accounts == 1
    assert s.average_interest_rate == pytest.approx(3.0)


def test_dashboard_stats_defaults_missing_counts_to_zero():
    stats = agg.dashboard_stats(None, pd.DataFrame(), None, pd.DataFrame())
    assert stats == agg.DashboardStats(0, 0.0, 0, 0.0)


def test_report_data_sums_monthly_flows_by_type():
    txns = pd.DataFrame(
        [
            {"transaction_type": "deposit", "amount": 100},
            {"transaction_type": "deposit", "amount": 50},
            {"transaction_type": "withdrawal", "amount": 30},
            {"transaction_type": "loan_disbursement", "amount": 1000},
            {"transaction_type": "loan_repayment", "amount": 200},
            {"transaction_type": "fees", "amount": 5},
        ]
    )
    data = agg.report_data(3, pd.DataFrame({"balance": [10, 20]}), LOANS, txns)
    assert data.total_members == 3
    assert data.total_savings == 30.0
    assert data.total_loans == 1330.0
    assert data.total_outstanding == 650.0
    assert data.monthly_deposits == 150.0
    assert data.monthly_withdrawals == 30.0
    assert data.loans_disbursed == 1000.0
    assert data.loans_repaid == 200.0


def test_start_of_month():
    now = datetime(2024, 5, 17, 13, 45, 12, 999, tzinfo=timezone.utc)
    assert agg.start_of_month(now) == datetime(2024, 5, 1, tzinfo=timezone.utc)
