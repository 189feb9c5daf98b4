from __future__ import annotations

from typing import Callable, Optional

import pandas as pd
import streamlit as st


LOAN_STATUS_LABELS = {
    "pending": "🟡 Pending",
    "approved": "🔵 Approved",
    "active": "🟢 Active",
    "completed": "⚪ Completed",
    "defaulted": "🔴 Defaulted",
}

ACCOUNT_STATUS_LABELS = {
    "active": "🟢 active",
}


def loan_status_label(status: Optional[str]) -> str:
    # Unknown or missing statuses read as pending.
    return LOAN_STATUS_LABELS.get(status or "", LOAN_STATUS_LABELS["pending"])


def account_status_label(status: Optional[str]) -> str:
    if not status:
        return "—"
    return ACCOUNT_STATUS_LABELS.get(status, f"⚪ {status}")


def display_frame(
    df: pd.DataFrame,
    columns: dict[str, str],
    formatters: Optional[dict[str, Callable]] = None,
    na: str = "N/A",
) -> pd.DataFrame:
    """Select + rename `columns` (source -> label), apply per-column formatters."""
    out = pd.DataFrame(index=df.index)
    formatters = formatters or {}
    for src, label in columns.items():
        col = df[src] if src in df.columns else pd.Series(None, index=df.index, dtype="object")
        if src in formatters:
            col = col.map(formatters[src])
        out[label] = col.astype("object").where(col.notna(), na)
    return out.reset_index(drop=True)


def render_table(
    df: pd.DataFrame,
    columns: dict[str, str],
    empty_message: str,
    formatters: Optional[dict[str, Callable]] = None,
) -> pd.DataFrame:
    if df.empty:
        st.info(empty_message)
        return df
    show = display_frame(df, columns, formatters)
    st.dataframe(show, use_container_width=True, hide_index=True)
    return show


def fmt_date(v) -> Optional[str]:
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return None
    ts = pd.to_datetime(v, errors="coerce")
    return None if pd.isna(ts) else ts.strftime("%d %b %Y")
