from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta, timezone

from faker import Faker

from data.contracts import ACTIVE_LOAN_STATUSES


fake = Faker()


N_MEMBERS = 48
N_LOANS = 30
N_TRANSACTIONS = 400

ACCOUNT_STATUSES = ["active"] * 8 + ["dormant", "closed"]
LOAN_STATUS_WEIGHTS = {"pending": 4, "approved": 3, "active": 10, "completed": 6, "defaulted": 1}
TRANSACTION_WEIGHTS = {
    "deposit": 10,
    "withdrawal": 5,
    "loan_disbursement": 2,
    "loan_repayment": 4,
    "interest": 1,
    "fees": 1,
}
# Types that add to the savings balance; the rest draw it down
CREDIT_TYPES = ("deposit", "interest", "loan_disbursement")


def _ts(d: date) -> str:
    return datetime.combine(d, time(9, 0), tzinfo=timezone.utc).isoformat()


def signed_amount(transaction_type: str, amount: float) -> float:
    return amount if transaction_type in CREDIT_TYPES else -amount


def _monthly_payment(principal: float, annual_rate_pct: float, months: int) -> float:
    r = annual_rate_pct / 100.0 / 12.0
    if r == 0:
        return round(principal / months, 2)
    return round(principal * r / (1 - (1 + r) ** -months), 2)


def members_mock(n: int = N_MEMBERS) -> list[dict]:
    fake.seed_instance(7)
    random.seed(7)
    today = date.today()
    rows = []
    for i in range(n):
        first, last = fake.first_name(), fake.last_name()
        joined = today - timedelta(days=random.randint(0, 3 * 365))
        rows.append(
            {
                "id": fake.uuid4(),
                "full_name": f"{first} {last}",
                "email": f"{first}.{last}{i}@example.com".lower(),
                "phone": f"+2547{random.randint(10_000_000, 99_999_999)}" if random.random() > 0.1 else None,
                "national_id": str(random.randint(20_000_000, 39_999_999)),
                "address": fake.city(),
                "date_of_birth": fake.date_of_birth(minimum_age=21, maximum_age=70).isoformat(),
                "member_number": f"MEM{1001 + i}",
                "join_date": joined.isoformat(),
                "created_at": _ts(joined),
                "updated_at": _ts(joined),
            }
        )
    return sorted(rows, key=lambda r: r["join_date"], reverse=True)


def _member_ref(m: dict) -> dict:
    return {"full_name": m["full_name"], "member_number": m["member_number"]}


def savings_accounts_mock() -> list[dict]:
    members = members_mock()
    random.seed(9)
    today = date.today()
    rows = []
    for i, m in enumerate(members):
        joined = date.fromisoformat(m["join_date"])
        opened = joined + timedelta(days=random.randint(0, max(0, (today - joined).days)))
        status = random.choice(ACCOUNT_STATUSES)
        balance = 0.0 if status == "closed" else round(max(0.0, random.gauss(85_000, 40_000)), 2)
        rows.append(
            {
                "id": fake.uuid4(),
                "account_number": f"SAV{100001 + i}",
                "balance": balance,
                "interest_rate": random.choice([3.5, 4.0, 4.5, 5.0]),
                "status": status,
                "opened_date": opened.isoformat(),
                "member_id": m["id"],
                "created_at": _ts(opened),
                "updated_at": _ts(today),
                "profiles": _member_ref(m),
            }
        )
    return sorted(rows, key=lambda r: r["opened_date"], reverse=True)


def loans_mock(n: int = N_LOANS) -> list[dict]:
    members = members_mock()
    random.seed(11)
    today = date.today()
    statuses = list(LOAN_STATUS_WEIGHTS)
    weights = list(LOAN_STATUS_WEIGHTS.values())
    rows = []
    for i in range(n):
        m = random.choice(members)
        status = random.choices(statuses, weights=weights)[0]
        principal = float(random.randrange(10_000, 500_000, 5_000))
        rate = random.choice([10.0, 12.0, 14.0])
        months = random.choice([6, 12, 18, 24, 36])
        monthly = _monthly_payment(principal, rate, months)
        total_due = round(monthly * months, 2)
        if status in ("pending", "approved"):
            outstanding = total_due
        elif status == "completed":
            outstanding = 0.0
        else:
            outstanding = round(total_due * random.uniform(0.15, 0.9), 2)

        applied = today - timedelta(days=random.randint(0, 540))
        approved = applied + timedelta(days=random.randint(1, 14)) if status != "pending" else None
        disbursed = approved + timedelta(days=random.randint(0, 7)) if approved and status != "approved" else None
        rows.append(
            {
                "id": fake.uuid4(),
                "loan_number": f"LN{applied:%Y}{i + 1:04d}",
                "principal_amount": principal,
                "outstanding_balance": outstanding,
                "interest_rate": rate,
                "duration_months": months,
                "monthly_payment": monthly,
                "status": status,
                "purpose": random.choice(["School fees", "Business stock", "Farm inputs", "Medical", "Development"]),
                "application_date": applied.isoformat(),
                "approval_date": approved.isoformat() if approved else None,
                "disbursement_date": disbursed.isoformat() if disbursed else None,
                "member_id": m["id"],
                "approved_by": None,
                "created_at": _ts(applied),
                "updated_at": _ts(today),
                "profiles": _member_ref(m),
            }
        )
    return sorted(rows, key=lambda r: r["application_date"], reverse=True)


def active_loans_mock() -> list[dict]:
    return [r for r in loans_mock() if r["status"] in ACTIVE_LOAN_STATUSES]


def transactions_mock(n: int = N_TRANSACTIONS, days: int = 90) -> list[dict]:
    accounts = savings_accounts_mock()
    random.seed(13)
    now = datetime.now(timezone.utc)
    types = list(TRANSACTION_WEIGHTS)
    weights = list(TRANSACTION_WEIGHTS.values())
    offsets = sorted((random.uniform(0, days) for _ in range(n)), reverse=True)

    # Each account's opening balance is its balance at the start of the window
    running = {a["id"]: a["balance"] for a in accounts}
    rows = []
    for offset in offsets:
        acct = random.choice(accounts)
        ttype = random.choices(types, weights=weights)[0]
        amount = round(max(100.0, random.gauss(15_000 if ttype.startswith("loan") else 4_000, 3_000)), 2)
        if ttype not in CREDIT_TYPES and amount > running[acct["id"]]:
            ttype = "deposit"
        running[acct["id"]] = round(running[acct["id"]] + signed_amount(ttype, amount), 2)
        rows.append(
            {
                "id": fake.uuid4(),
                "account_id": acct["id"],
                "amount": amount,
                "balance_after": running[acct["id"]],
                "transaction_type": ttype,
                "description": None,
                "processed_by": None,
                "reference_number": f"TX{random.randint(100000, 999999)}",
                "transaction_date": (now - timedelta(days=offset)).isoformat(),
            }
        )
    return sorted(rows, key=lambda r: r["transaction_date"], reverse=True)


def transactions_since_mock(start: datetime) -> list[dict]:
    if start.tzinfo is None:
        start = start.astimezone()
    return [r for r in transactions_mock() if datetime.fromisoformat(r["transaction_date"]) >= start]
