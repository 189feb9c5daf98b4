from datetime import datetime, timezone

from data import queries
from data.contracts import ACTIVE_LOAN_STATUSES, LoanWithMember, ProfileId, SavingsAccountWithMember, TransactionFlow


def test_member_count_is_head_with_exact_count():
    q = queries.q_member_count()
    assert q.table == "profiles"
    assert q.head is True
    assert q.count == "exact"


def test_active_loan_balances_filters_on_active_statuses():
    q = queries.q_active_loan_balances()
    assert q.columns == "outstanding_balance"
    assert q.in_ == (("status", ACTIVE_LOAN_STATUSES),)
    assert q.count == "exact"
    assert q.head is False


def test_members_ordered_by_join_date_desc():
    assert queries.q_members().order == ("join_date", False)


def test_loans_embed_member_through_member_fkey():
    q = queries.q_loans()
    assert q.model is LoanWithMember
    assert q.columns == "*,profiles!loans_member_id_fkey(full_name,member_number)"
    assert q.order == ("application_date", False)


def test_savings_accounts_embed_member():
    q = queries.q_savings_accounts()
    assert q.model is SavingsAccountWithMember
    assert q.columns == "*,profiles(full_name,member_number)"
    assert q.order == ("opened_date", False)


def test_transactions_since_filters_on_start():
    start = datetime(2024, 5, 1, tzinfo=timezone.utc)
    q = queries.q_transactions_since(start)
    assert q.model is TransactionFlow
    assert q.columns == "transaction_type,amount"
    assert q.gte == (("transaction_date", start),)


def test_profile_by_email_matches_case_insensitively():
    q = queries.q_profile_by_email("jane@x.com")
    assert q.model is ProfileId
    assert q.eq == ()
    assert q.ilike == (("email", "jane@x.com"),)
    assert q.limit == 1


def test_escape_like_neutralises_wildcards():
    assert queries.escape_like("jane_doe%1@x.com") == "jane\\_doe\\%1@x.com"
    assert queries.escape_like("a\\b@x.com") == "a\\\\b@x.com"
    assert queries.escape_like("plain@x.com") == "plain@x.com"


def test_profile_lookup_escapes_underscore():
    assert queries.q_profile_by_email("first_last@x.com").ilike == (("email", "first\\_last@x.com"),)
