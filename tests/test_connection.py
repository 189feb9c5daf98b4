from datetime import datetime, timezone

import httpx
import pytest
from postgrest.exceptions import APIError
from supabase_auth.errors import AuthError

from conftest import api_response, auth_response
from data import queries
from data.connection import BackendConfigError, BackendError, SupabaseClient
from data.contracts import ProfileInsert


class SignupRejected(AuthError):
    def __init__(self, message, status, code):
        Exception.__init__(self, message)
        self.message = message
        self.status = status
        self.code = code


def test_select_chains_columns_and_order(client_with):
    client, sb = client_with(api_response([{"id": "u1", "full_name": "A", "email": "a@x.com"}]))
    res = client.select(queries.q_members())

    assert res.rows[0]["id"] == "u1"
    assert res.count is None
    q = sb.queries[0]
    assert q.table == "profiles"
    assert q.step("select") == [(("*",), {"count": None, "head": False})]
    assert q.step("order") == [(("join_date",), {"desc": True})]
    assert q.step("limit") == []


def test_head_count_returns_no_rows(client_with):
    client, sb = client_with(api_response([], count=42))
    res = client.select(queries.q_member_count())

    assert res.rows == []
    assert res.count == 42
    assert sb.queries[0].step("select") == [(("*",), {"count": "exact", "head": True})]


def test_active_loan_balances_filter_on_statuses(client_with):
    client, sb = client_with(api_response([{"outstanding_balance": 10}, {"outstanding_balance": 5}], count=2))
    res = client.select(queries.q_active_loan_balances())

    assert res.count == 2
    assert len(res.rows) == 2
    assert sb.queries[0].step("in_") == [(("status", ["approved", "active"]), {})]


def test_loans_select_names_member_fkey(client_with):
    client, sb = client_with(api_response([]))
    client.select(queries.q_loans())
    (args, _), = sb.queries[0].step("select")
    assert args == ("*,profiles!loans_member_id_fkey(full_name,member_number)",)


def test_timestamps_are_sent_as_iso_strings(client_with):
    client, sb = client_with(api_response([]))
    client.select(queries.q_transactions_since(datetime(2024, 5, 1, tzinfo=timezone.utc)))
    assert sb.queries[0].step("gte") == [(("transaction_date", "2024-05-01T00:00:00+00:00"), {})]


def test_profile_lookup_is_case_insensitive_and_escaped(client_with):
    client, sb = client_with(api_response([]))
    client.select(queries.q_profile_by_email("jane_doe@x.com"))
    q = sb.queries[0]
    assert q.step("ilike") == [(("email", "jane\\_doe@x.com"), {})]
    assert q.step("eq") == []
    assert q.step("limit") == [((1,), {})]


def test_api_error_becomes_backend_error(client_with):
    client, _ = client_with(APIError({"message": "JWT expired", "code": "PGRST301", "hint": None, "details": None}))
    with pytest.raises(BackendError, match="JWT expired") as exc:
        client.select(queries.q_members())
    assert exc.value.code == "PGRST301"
    assert exc.value.status is None


def test_api_error_with_http_status_code(client_with):
    client, _ = client_with(APIError({"message": "Bad gateway", "code": "502", "hint": None, "details": None}))
    with pytest.raises(BackendError) as exc:
        client.select(queries.q_members())
    assert exc.value.status == 502


def test_transport_error_becomes_backend_error(client_with):
    client, _ = client_with(httpx.ConnectError("refused"))
    with pytest.raises(BackendError, match="ConnectError"):
        client.select(queries.q_members())


def test_non_list_body_is_rejected(client_with):
    client, _ = client_with(api_response({"id": "u1"}))
    with pytest.raises(BackendError, match="Expected a list"):
        client.select(queries.q_members())


def test_missing_config_raises_before_building_a_client(unconfigured_cfg):
    client = SupabaseClient(unconfigured_cfg)
    assert client.is_configured() is False
    with pytest.raises(BackendConfigError):
        client.select(queries.q_members())


def test_upsert_sends_payload(client_with):
    stored = {"id": "u1", "full_name": "Jane", "email": "jane@x.com"}
    client, sb = client_with(api_response([stored]))

    out = client.upsert("profiles", ProfileInsert(id="u1", full_name="Jane", email="jane@x.com"))

    assert out == stored
    q = sb.queries[0]
    assert q.table == "profiles"
    assert q.step("upsert") == [(({"id": "u1", "full_name": "Jane", "email": "jane@x.com"},), {})]


def test_upsert_without_returned_row_fails(client_with):
    client, _ = client_with(api_response([]))
    with pytest.raises(BackendError, match="returned no row"):
        client.upsert("profiles", {"id": "u1", "full_name": "Jane", "email": "jane@x.com"})


def test_create_identity_passes_metadata(client_with):
    client, sb = client_with(auth_response("auth-1", "jane@x.com"))
    ident = client.create_identity("jane@x.com", "pw", {"full_name": "Jane"})

    assert ident.id == "auth-1"
    assert ident.email == "jane@x.com"
    assert sb.signups == [{"email": "jane@x.com", "password": "pw", "options": {"data": {"full_name": "Jane"}}}]


def test_create_identity_without_user_fails(client_with):
    client, _ = client_with(auth_response(None))
    with pytest.raises(BackendError, match="user id"):
        client.create_identity("b@x.com", "pw")


def test_auth_error_becomes_backend_error(client_with):
    client, _ = client_with(SignupRejected("User already registered", 422, "user_already_exists"))
    with pytest.raises(BackendError, match="already registered") as exc:
        client.create_identity("b@x.com", "pw")
    assert exc.value.status == 422
    assert exc.value.code == "user_already_exists"
