from __future__ import annotations

import streamlit as st

from components.metrics import Kpi, fmt_money, render_kpi_row
from components.narrative import render_callout, render_page_intro, render_warnings
from config import AppConfig
from data.aggregates import dashboard_stats
from data.service import get_active_loan_balances, get_member_count, get_savings_balances


def render(cfg: AppConfig, use_mock: bool) -> None:
    render_page_intro("Dashboard", "Overview of your SACCO operations")

    # --- load data (failures become empty results inside service) ---
    members = get_member_count(cfg, use_mock)
    savings = get_savings_balances(cfg, use_mock)
    loans = get_active_loan_balances(cfg, use_mock)
    render_warnings(members, savings, loans)

    stats = dashboard_stats(members.count, savings.df, loans.count, loans.df)

    render_kpi_row(
        [
            Kpi("Total Members", f"{stats.total_members:,}"),
            Kpi("Total Savings", fmt_money(stats.total_savings, cfg.currency_label)),
            Kpi("Active Loans", f"{stats.active_loans:,}", help="Approved or active"),
            Kpi("Outstanding Amount", fmt_money(stats.total_loan_amount, cfg.currency_label)),
        ]
    )
    st.caption(f"Data source: **{members.source}**")

    st.divider()
    c1, c2 = st.columns(2)
    with c1:
        render_callout("Recent Activity", "Recent transactions and activities will appear here.")
    with c2:
        render_callout("Quick Actions", "Add members from the Members page; exports live under Reports.")
