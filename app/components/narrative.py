from __future__ import annotations

import streamlit as st


def render_page_intro(title: str, subtitle: str | None = None) -> None:
    st.markdown(
        f"""
<div class="page-intro">
  <div class="page-intro-title">{title}</div>
  {f'<div class="page-intro-subtitle">{subtitle}</div>' if subtitle else ''}
</div>
        """,
        unsafe_allow_html=True,
    )


def render_callout(title: str, body: str) -> None:
    st.markdown(
        f"""
<div class="callout">
  <div class="callout-title">{title}</div>
  <div class="callout-body">{body}</div>
</div>
        """,
        unsafe_allow_html=True,
    )


def render_warnings(*results) -> None:
    """One warning per failed read; the rest of the page still renders."""
    for res in results:
        if res.warning:
            st.warning(res.warning)
