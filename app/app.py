"""
Routing only.

All view logic lives in app/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import logging
import os
import sys

# Make `app/` importable as a flat module path when running:
#   streamlit run app/app.py
APP_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(APP_DIR, ".."))
for p in [APP_DIR, REPO_ROOT]:
    if p not in sys.path:
        sys.path.insert(0, p)

import streamlit as st  # noqa: E402

from components.styles import apply_theme  # noqa: E402
from components.sidebar import render_sidebar  # noqa: E402
from components.header import render_header  # noqa: E402
from config import get_config  # noqa: E402

from views import dashboard, loans, members, reports, savings  # noqa: E402


VIEWS = {
    "dashboard": dashboard.render,
    "members": members.render,
    "savings": savings.render,
    "loans": loans.render,
    "reports": reports.render,
}


def main() -> None:
    apply_theme()
    cfg = get_config()
    logging.basicConfig(
        level=cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    state = render_sidebar(cfg)

    render_header(
        app_name="SACCO Admin",
        subtitle="Members, savings and credit at a glance",
        right_pill=f"Data: {'Mock' if state.use_mock else 'Live database'}",
    )

    # Routing only
    view = VIEWS.get(state.view)
    if view is None:
        st.error("Unknown view")
        return
    view(cfg, state.use_mock)


if __name__ == "__main__":
    main()
