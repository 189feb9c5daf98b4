from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from config import AppConfig


@dataclass(frozen=True)
class SidebarState:
    view: str
    use_mock: bool


NAV_ITEMS = [
    ("📊 Dashboard", "dashboard"),
    ("👥 Members", "members"),
    ("💰 Savings", "savings"),
    ("💳 Loans", "loans"),
    ("📑 Reports", "reports"),
]


def render_sidebar(cfg: AppConfig) -> SidebarState:
    with st.sidebar:
        st.markdown("### 🏦 SACCO Admin")
        st.caption("Savings & credit cooperative management")

        labels = [l for l, _ in NAV_ITEMS]
        default_label = st.session_state.get("nav_label", labels[0])
        idx = labels.index(default_label) if default_label in labels else 0

        label = st.radio(
            "Nav",
            labels,
            index=idx,
            label_visibility="collapsed",
        )
        st.session_state["nav_label"] = label
        view = dict(NAV_ITEMS)[label]

        with st.expander("⚙️ Settings", expanded=False):
            use_mock = st.toggle(
                "Use mock data",
                value=st.session_state.get("use_mock", cfg.default_use_mock),
                help="When off, pages read the hosted database. A failed read shows an empty result and a warning.",
            )
            st.session_state["use_mock"] = use_mock

            st.markdown("**Project**")
            st.code(cfg.project_ref or "(SUPABASE_URL not set)", language="text")
    use_mock = st.session_state.get("use_mock", cfg.default_use_mock)

    return SidebarState(view=view, use_mock=use_mock)
