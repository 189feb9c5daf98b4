from __future__ import annotations

import logging
from datetime import date

import streamlit as st
from streamlit.delta_generator import DeltaGenerator

from components.narrative import render_page_intro, render_warnings
from components.tables import fmt_date, render_table
from config import AppConfig
from data.aggregates import search
from data.connection import BackendError, get_client
from data.contracts import ContractViolation
from data.members import DuplicateEmailError, create_member, validate_member_form
from data.service import get_members


logger = logging.getLogger(__name__)

SEARCH_COLUMNS = ["full_name", "email", "member_number"]

TABLE_COLUMNS = {
    "member_number": "Member Number",
    "full_name": "Name",
    "email": "Email",
    "phone": "Phone",
    "join_date": "Join Date",
    "status": "Status",
}

FORM_FIELDS = ["full_name", "email", "phone", "national_id", "address", "date_of_birth", "member_number"]


def _render_add_member(cfg: AppConfig, use_mock: bool) -> None:
    # Error slots are filled after validation, in the same run as the submit
    slots: dict[str, DeltaGenerator] = {}
    with st.expander("➕ Add Member", expanded=st.session_state.get("add_member_open", False)):
        with st.form("add_member_form", clear_on_submit=False):
            c1, c2 = st.columns(2)
            with c1:
                full_name = st.text_input("Full name *", key="new_member_full_name")
                slots["full_name"] = st.empty()
                email = st.text_input("Email *", key="new_member_email", help="The invitation is sent here")
                slots["email"] = st.empty()
                phone = st.text_input("Phone", key="new_member_phone", help="e.g. +2547…")
                slots["phone"] = st.empty()
                national_id = st.text_input("National ID", key="new_member_national_id")
                slots["national_id"] = st.empty()
            with c2:
                member_number = st.text_input("Member number", key="new_member_number", help="e.g. MEM1001")
                slots["member_number"] = st.empty()
                address = st.text_input("Address", key="new_member_address")
                slots["address"] = st.empty()
                dob = st.date_input("Date of birth", value=None, min_value=date(1900, 1, 1), max_value=date.today())
                slots["date_of_birth"] = st.empty()
            submitted = st.form_submit_button("Create member", use_container_width=True, type="primary")

    if not submitted:
        return

    st.session_state["add_member_open"] = True
    values = dict(zip(FORM_FIELDS, [full_name, email, phone, national_id, address, dob, member_number]))
    member, errors = validate_member_form(values)
    if errors:
        for field, msg in errors.items():
            if field in slots:
                slots[field].error(msg)
            else:
                st.error(msg)
        return

    if use_mock:
        st.info("Switch off mock data in Settings to create members.")
        return

    try:
        profile = create_member(get_client(cfg), member)
    except DuplicateEmailError as e:
        st.error(str(e))
        return
    except (BackendError, ContractViolation) as e:
        logger.exception("Member creation failed")
        st.error(f"Could not create member: {e}")
        return

    st.session_state["add_member_open"] = False
    st.success(f"Member {profile.full_name} created. An invitation email has been sent to {profile.email}.")


def render(cfg: AppConfig, use_mock: bool) -> None:
    render_page_intro("Members", "Manage SACCO members")

    _render_add_member(cfg, use_mock)

    res = get_members(cfg, use_mock)
    render_warnings(res)

    st.subheader("All Members")
    term = st.text_input("Search members...", key="members_search", placeholder="Name, email or member number")

    df = res.df
    if not df.empty:
        df = df.assign(status="Active")
    filtered = search(df, term, SEARCH_COLUMNS)
    render_table(
        filtered,
        TABLE_COLUMNS,
        empty_message="No members found",
        formatters={"join_date": fmt_date},
    )
    st.caption(f"{len(filtered)} of {len(df)} members · source: **{res.source}**")
