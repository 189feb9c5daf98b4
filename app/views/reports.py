from __future__ import annotations

from datetime import date

import pandas as pd
import streamlit as st

from components.metrics import Kpi, bar_chart, fmt_money, render_kpi_row
from components.narrative import render_page_intro, render_warnings
from config import AppConfig
from data.aggregates import ReportData, report_data, start_of_month
from data.service import (
    get_loan_amounts,
    get_loans,
    get_member_count,
    get_members,
    get_savings_accounts,
    get_savings_balances,
    get_transactions_since,
)


REPORTS = [
    ("financial", "Financial Summary", "Complete overview of all financial activities"),
    ("members", "Member Report", "Detailed member information and statistics"),
    ("savings", "Savings Report", "All savings accounts and balances"),
    ("loans", "Loans Report", "Loans disbursed, repayments, and outstanding"),
]


def summary_frame(data: ReportData) -> pd.DataFrame:
    return pd.DataFrame(
        [
            ("Total members", data.total_members),
            ("Total savings", data.total_savings),
            ("Loans disbursed (principal)", data.total_loans),
            ("Outstanding balance", data.total_outstanding),
            ("Deposits this month", data.monthly_deposits),
            ("Withdrawals this month", data.monthly_withdrawals),
            ("Loans issued this month", data.loans_disbursed),
            ("Loan repayments this month", data.loans_repaid),
        ],
        columns=["metric", "value"],
    )


def _export_frame(key: str, cfg: AppConfig, use_mock: bool, data: ReportData) -> pd.DataFrame:
    if key == "financial":
        return summary_frame(data)
    res = {"members": get_members, "savings": get_savings_accounts, "loans": get_loans}[key](cfg, use_mock)
    render_warnings(res)
    return res.df


def render(cfg: AppConfig, use_mock: bool) -> None:
    render_page_intro("Reports & Analytics", "Financial reports and accounting summaries")

    month_start = start_of_month()
    members = get_member_count(cfg, use_mock)
    savings = get_savings_balances(cfg, use_mock)
    loans = get_loan_amounts(cfg, use_mock)
    txns = get_transactions_since(cfg, use_mock, month_start)
    render_warnings(members, savings, loans, txns)

    data = report_data(members.count, savings.df, loans.df, txns.df)

    def money(v: float) -> str:
        return fmt_money(v, cfg.currency_label)

    render_kpi_row(
        [
            Kpi("Total Members", f"{data.total_members:,}"),
            Kpi("Total Savings", money(data.total_savings)),
            Kpi("Loans Disbursed", money(data.total_loans)),
            Kpi("Outstanding Balance", money(data.total_outstanding)),
        ]
    )

    st.subheader(f"This month ({month_start:%B %Y})")
    render_kpi_row(
        [
            Kpi("Deposits", money(data.monthly_deposits), tone="success"),
            Kpi("Withdrawals", money(data.monthly_withdrawals), tone="danger"),
            Kpi("Loans Issued", money(data.loans_disbursed), tone="accent"),
            Kpi("Loan Repayments", money(data.loans_repaid)),
        ]
    )
    flows = pd.DataFrame(
        {
            "flow": ["Deposits", "Withdrawals", "Loans Issued", "Loan Repayments"],
            "amount": [data.monthly_deposits, data.monthly_withdrawals, data.loans_disbursed, data.loans_repaid],
        }
    )
    bar_chart(flows, x="flow", y="amount", title="Cash flows this month", currency=cfg.currency_label)

    st.subheader("Export reports")
    cols = st.columns(len(REPORTS))
    for col, (key, title, description) in zip(cols, REPORTS):
        with col:
            st.markdown(
                f"""
<div class="report-card">
  <div class="report-card-title">{title}</div>
  <div class="report-card-body">{description}</div>
</div>
                """,
                unsafe_allow_html=True,
            )
            if st.button("Prepare export", key=f"prepare_{key}", use_container_width=True):
                st.session_state[f"export_{key}"] = _export_frame(key, cfg, use_mock, data).to_csv(index=False)
            csv = st.session_state.get(f"export_{key}")
            if csv is not None:
                st.download_button(
                    "⬇️ Download CSV",
                    csv.encode(),
                    f"{key}_report_{date.today():%Y%m%d}.csv",
                    "text/csv",
                    key=f"download_{key}",
                    use_container_width=True,
                )
