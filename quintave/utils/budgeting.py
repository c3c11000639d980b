# quintave/utils/budgeting.py
from collections import OrderedDict
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional

from quintave.models.transaction import TransactionType

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Any) -> Decimal:
    """Coerce a DB/JSON value to a 2-place Decimal (None counts as zero)."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


# ────────────────────────────────────────────────────────────────────────────────
# ALLOCATION
# ────────────────────────────────────────────────────────────────────────────────
def split_income(amount: Any, bucket_count: int) -> Decimal:
    """
    Per-bucket share of an income amount, rounded to cents.

    Every bucket receives the same rounded share, so the shares can sum to a
    cent or two more or less than `amount` (e.g. 100 / 3 → 33.33 each).
    """
    if bucket_count <= 0:
        return ZERO
    return (to_money(amount) / bucket_count).quantize(CENT, rounding=ROUND_HALF_UP)


def apply_income(buckets: Iterable[Any], amount: Any) -> Decimal:
    """Credit each bucket's `allocated` with its share. Returns the share."""
    buckets = list(buckets)
    share   = split_income(amount, len(buckets))
    for bucket in buckets:
        bucket.allocated = to_money(bucket.allocated) + share
    return share


def apply_expense(bucket: Any, amount: Any) -> Decimal:
    """Debit the bucket's balance; there is no floor, overspending goes negative."""
    bucket.balance = to_money(bucket.balance) - to_money(amount)
    return bucket.balance


# ────────────────────────────────────────────────────────────────────────────────
# DERIVED BUCKET FIGURES
# ────────────────────────────────────────────────────────────────────────────────
def summarize_bucket(bucket: Any, transactions: Iterable[Any]) -> Dict[str, Any]:
    """
    Spent/remaining/debt for a bucket, computed from its EXPENSE transactions.
    Nothing here is persisted.
    """
    spent = sum(
        (to_money(t.amount) for t in transactions
         if t.bucket_id == bucket.id and t.type == TransactionType.EXPENSE),
        ZERO,
    )
    allocated    = to_money(bucket.allocated)
    remaining    = allocated - spent
    percent_used = float(spent / allocated * 100) if allocated > 0 else 0.0
    is_overspent = spent > allocated
    debt         = spent - allocated if is_overspent else ZERO

    return {
        "id":           bucket.id,
        "user_id":      bucket.user_id,
        "name":         bucket.name,
        "balance":      to_money(bucket.balance),
        "allocated":    allocated,
        "spent":        spent,
        "remaining":    remaining,
        "percent_used": round(percent_used, 2),
        "is_overspent": is_overspent,
        "debt":         debt,
    }


def summarize_buckets(buckets: Iterable[Any], transactions: Iterable[Any]) -> Dict[str, Any]:
    transactions = list(transactions)
    summaries    = [summarize_bucket(b, transactions) for b in buckets]
    return {
        "buckets":    summaries,
        "total_debt": sum((s["debt"] for s in summaries), ZERO),
    }


# ────────────────────────────────────────────────────────────────────────────────
# ANALYTICS
# ────────────────────────────────────────────────────────────────────────────────
def build_financial_progress(
    transactions: Iterable[Any],
    days: int,
    today: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """
    One row per day from `today - days` to `today` inclusive with money in,
    money out and the running net across the window.
    """
    today      = today or datetime.utcnow().date()
    start_date = today - timedelta(days=days)

    daily: "OrderedDict[date, Dict[str, Any]]" = OrderedDict()
    day = start_date
    while day <= today:
        daily[day] = {"date": day.isoformat(), "money_in": 0.0, "money_out": 0.0, "net": 0.0}
        day += timedelta(days=1)

    for tx in transactions:
        row = daily.get(tx.date.date())
        if row is None:
            continue
        if tx.type == TransactionType.INCOME:
            row["money_in"] += float(tx.amount)
        else:
            row["money_out"] += float(tx.amount)

    running = 0.0
    for row in daily.values():
        running += row["money_in"] - row["money_out"]
        row["money_in"]  = round(row["money_in"], 2)
        row["money_out"] = round(row["money_out"], 2)
        row["net"]       = round(running, 2)

    return list(daily.values())
