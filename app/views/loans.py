from __future__ import annotations

import streamlit as st

from components.metrics import Kpi, fmt_money, fmt_pct, render_kpi_row
from components.narrative import render_page_intro, render_warnings
from components.tables import fmt_date, loan_status_label, render_table
from config import AppConfig
from data.aggregates import loan_portfolio, search
from data.service import get_loans


SEARCH_COLUMNS = ["loan_number", "profiles.full_name", "profiles.member_number"]

TABLE_COLUMNS = {
    "loan_number": "Loan Number",
    "profiles.full_name": "Member",
    "principal_amount": "Principal",
    "outstanding_balance": "Outstanding",
    "interest_rate": "Rate",
    "duration_months": "Months",
    "monthly_payment": "Monthly Payment",
    "application_date": "Applied",
    "status": "Status",
}


def render(cfg: AppConfig, use_mock: bool) -> None:
    render_page_intro("Loans", "Manage credit and loans")

    res = get_loans(cfg, use_mock)
    render_warnings(res)

    df = res.df
    portfolio = loan_portfolio(df)

    def money(v) -> str:
        return fmt_money(float(v or 0), cfg.currency_label)

    render_kpi_row(
        [
            Kpi("Active Loans", f"{portfolio.active_loans:,}", help="Approved or active", tone="success"),
            Kpi("Outstanding Amount", money(portfolio.total_outstanding), tone="danger"),
            Kpi("Total Disbursed", money(portfolio.total_disbursed), tone="accent"),
        ]
    )

    st.subheader("All Loans")
    term = st.text_input("Search loans...", key="loans_search", placeholder="Loan number, member name or number")
    filtered = search(df, term, SEARCH_COLUMNS)
    render_table(
        filtered,
        TABLE_COLUMNS,
        empty_message="No loans found",
        formatters={
            "principal_amount": money,
            "outstanding_balance": money,
            "monthly_payment": money,
            "interest_rate": lambda v: fmt_pct(float(v)),
            "application_date": fmt_date,
            "status": loan_status_label,
        },
    )
    st.caption(f"{len(filtered)} of {len(df)} loans · source: **{res.source}**")
