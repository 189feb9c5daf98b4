from __future__ import annotations

import streamlit as st

from config import THEME


APP_TITLE = "SACCO Admin"


def apply_theme() -> None:
    st.set_page_config(
        page_title=APP_TITLE,
        page_icon="💰",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    # Theme tokens (config.py) -> CSS variables
    radius = int(THEME["radius_px"])
    css = """
<style>
:root{
  --accent: __ACCENT__;
  --accent-soft: __ACCENT_SOFT__;
  --ink-900: __NAVY_900__;
  --ink-800: __NAVY_800__;

  --bg-primary: __BG_PRIMARY__;
  --bg-secondary: __BG_SECONDARY__;
  --card-bg: __CARD_BG__;
  --card-border: __CARD_BORDER__;

  --text-primary: __TEXT_PRIMARY__;
  --text-secondary: __TEXT_SECONDARY__;
  --shadow: __SHADOW__;
  --radius: __RADIUS_PX__px;

  --success: __SUCCESS__;
  --warning: __WARNING__;
  --danger: __DANGER__;
  --muted: __MUTED__;
}

#MainMenu { visibility: hidden; }
footer { visibility: hidden; }

html, body, [data-testid="stAppViewContainer"]{
  background: var(--bg-primary) !important;
  color: var(--text-primary) !important;
}
[data-testid="stSidebar"]{
  background: var(--bg-secondary) !important;
  border-right: 1px solid var(--card-border) !important;
}
[data-testid="stSidebar"] div[role="radiogroup"] > label{
  border: 1px solid var(--card-border) !important;
  border-radius: 10px !important;
  padding: 8px 12px !important;
  margin: 0 0 8px 0 !important;
}
[data-testid="stSidebar"] div[role="radiogroup"] > label:has(input:checked){
  border-color: var(--accent) !important;
}
.block-container{
  padding-top: 1rem !important;
  padding-bottom: 2rem !important;
}

/* Header bar */
.sacco-header{
  display:flex;
  align-items:center;
  justify-content:space-between;
  background: var(--bg-secondary);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 10px 14px;
  margin: 0 0 14px 0;
}
.sacco-title{ font-size: 20px; font-weight: 700; color: var(--ink-900); }
.sacco-subtitle{ font-size: 14px; color: var(--text-secondary); }
.pill{
  display:inline-flex;
  align-items:center;
  gap:6px;
  border: 1px solid var(--card-border);
  border-radius: 999px;
  padding: 6px 10px;
  font-size: 13px;
  font-weight: 600;
  color: var(--ink-800);
}
.pill .dot{ width:8px; height:8px; border-radius:999px; background: var(--accent); }

/* Page intro */
.page-intro{ margin: 0 0 14px 0; }
.page-intro-title{ font-size: 28px; font-weight: 700; color: var(--ink-900); }
.page-intro-subtitle{ font-size: 15px; color: var(--text-secondary); }

/* KPI cards */
.metric-card{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 12px 14px;
}
.metric-label{ font-size: 14px; font-weight: 500; color: var(--text-secondary); margin-bottom: 6px; }
.metric-value{ font-size: 24px; font-weight: 700; color: var(--text-primary); }
.metric-help{ margin-top: 4px; font-size: 12px; color: var(--text-secondary); }
.metric-card.success .metric-value{ color: var(--success); }
.metric-card.danger .metric-value{ color: var(--danger); }
.metric-card.accent .metric-value{ color: var(--accent); }

/* Report cards */
.report-card{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  padding: 12px 14px;
  margin-bottom: 8px;
}
.report-card-title{ font-size: 16px; font-weight: 600; color: var(--ink-900); }
.report-card-body{ font-size: 14px; color: var(--text-secondary); }

/* Callouts */
.callout{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-left: 4px solid var(--ink-800);
  border-radius: var(--radius);
  padding: 10px 14px;
  margin: 10px 0;
}
.callout-title{ font-size: 14px; font-weight: 700; color: var(--ink-900); }
.callout-body{ font-size: 14px; color: var(--text-secondary); }

div.stButton > button, div.stDownloadButton > button, div[data-testid="stFormSubmitButton"] > button{
  border-radius: 10px !important;
  font-weight: 600 !important;
}
div[data-testid="stPlotlyChart"], div[data-testid="stDataFrame"]{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  padding: 6px 8px;
}
</style>
"""

    tokens = {
        "__ACCENT__": str(THEME["accent_primary"]),
        "__ACCENT_SOFT__": str(THEME["accent_secondary"]),
        "__NAVY_900__": str(THEME["navy_900"]),
        "__NAVY_800__": str(THEME["navy_800"]),
        "__BG_PRIMARY__": str(THEME["bg_primary"]),
        "__BG_SECONDARY__": str(THEME["bg_secondary"]),
        "__CARD_BG__": str(THEME["bg_card"]),
        "__CARD_BORDER__": str(THEME["border_color"]),
        "__TEXT_PRIMARY__": str(THEME["text_primary"]),
        "__TEXT_SECONDARY__": str(THEME["text_secondary"]),
        "__SHADOW__": str(THEME["shadow"]),
        "__RADIUS_PX__": str(radius),
        "__SUCCESS__": str(THEME["success"]),
        "__WARNING__": str(THEME["warning"]),
        "__DANGER__": str(THEME["danger"]),
        "__MUTED__": str(THEME["muted"]),
    }
    for k, v in tokens.items():
        css = css.replace(k, v)

    st.markdown(css, unsafe_allow_html=True)
