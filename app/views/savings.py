from __future__ import annotations

import pandas as pd
import streamlit as st

from components.metrics import Kpi, fmt_money, fmt_pct, render_kpi_row
from components.narrative import render_page_intro, render_warnings
from components.tables import account_status_label, fmt_date, render_table
from config import AppConfig
from data.aggregates import savings_summary, search
from data.service import get_savings_accounts


SEARCH_COLUMNS = ["account_number", "profiles.full_name", "profiles.member_number"]

TABLE_COLUMNS = {
    "account_number": "Account Number",
    "profiles.full_name": "Member",
    "profiles.member_number": "Member Number",
    "balance": "Balance",
    "interest_rate": "Interest Rate",
    "opened_date": "Opened",
    "status": "Status",
}


def render(cfg: AppConfig, use_mock: bool) -> None:
    render_page_intro("Savings Accounts", "Manage member savings")

    res = get_savings_accounts(cfg, use_mock)
    render_warnings(res)

    df = res.df
    summary = savings_summary(df)
    render_kpi_row(
        [
            Kpi("Total Savings", fmt_money(summary.total_balance, cfg.currency_label)),
            Kpi("Active Accounts", f"{summary.active_accounts:,}", tone="success"),
            Kpi("Avg. Interest Rate", fmt_pct(summary.average_interest_rate)),
        ]
    )

    st.subheader("All Savings Accounts")
    term = st.text_input("Search accounts...", key="savings_search", placeholder="Account number, member name or number")
    filtered = search(df, term, SEARCH_COLUMNS)
    render_table(
        filtered,
        TABLE_COLUMNS,
        empty_message="No savings accounts found",
        formatters={
            "balance": lambda v: fmt_money(float(v or 0), cfg.currency_label),
            "interest_rate": lambda v: None if pd.isna(v) else fmt_pct(float(v)),
            "opened_date": fmt_date,
            "status": account_status_label,
        },
    )
    st.caption(f"{len(filtered)} of {len(df)} accounts · source: **{res.source}**")
