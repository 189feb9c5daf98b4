from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from config import THEME


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    help: Optional[str] = None
    tone: Optional[str] = None  # "success" | "danger" | "accent" | None


def fmt_money(amount: float, currency: str = "KSh") -> str:
    return f"{currency} {amount:,.2f}"


def fmt_pct(rate: float) -> str:
    # Rates are stored as percentages already (4.5 == 4.5%).
    return f"{rate:.2f}%"


def render_kpi_row(kpis: list[Kpi]) -> None:
    cols = st.columns(len(kpis))
    for c, k in zip(cols, kpis):
        with c:
            help_html = f'<div class="metric-help">{k.help}</div>' if k.help else ""
            st.markdown(
                f"""
<div class="metric-card {k.tone or ''}">
  <div class="metric-label">{k.label}</div>
  <div class="metric-value">{k.value}</div>
  {help_html}
</div>
                """,
                unsafe_allow_html=True,
            )


def create_plotly_theme() -> dict:
    return {
        "font_color": THEME["text_primary"],
        "paper_bgcolor": THEME["bg_card"],
        "plot_bgcolor": THEME["bg_card"],
        "colorway": [
            THEME["accent_primary"],
            THEME["navy_800"],
            THEME["accent_secondary"],
            THEME["warning"],
            THEME["danger"],
            THEME["muted"],
        ],
        "gridcolor": THEME["grid"],
        "axis_linecolor": THEME["border_color"],
        "title_font": {"color": THEME["navy_900"], "size": 16},
    }


def apply_plotly_theme(fig: go.Figure, x_title: str, y_title: str) -> go.Figure:
    theme = create_plotly_theme()
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        font=dict(color=theme["font_color"]),
        paper_bgcolor=theme["paper_bgcolor"],
        plot_bgcolor=theme["plot_bgcolor"],
        colorway=theme["colorway"],
        title_font=theme["title_font"],
        showlegend=False,
    )
    fig.update_xaxes(title_text=x_title, gridcolor=theme["gridcolor"], linecolor=theme["axis_linecolor"])
    fig.update_yaxes(title_text=y_title, gridcolor=theme["gridcolor"], linecolor=theme["axis_linecolor"], zeroline=False)
    return fig


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    title: str = "",
    currency: Optional[str] = None,
) -> None:
    fig = px.bar(df, x=x, y=y, color=x, title=title)
    fig = apply_plotly_theme(fig, x_title="", y_title=y)
    if currency:
        fig.update_yaxes(tickprefix=f"{currency} ", separatethousands=True)
    st.plotly_chart(fig, use_container_width=True)
