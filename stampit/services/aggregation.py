"""Derived dashboard values computed from fetched rows.

Everything here is pure: rows come in as ORM objects, SQLAlchemy result
rows or plain dicts, and nothing touches the database.
"""
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP


STAR_COUNT = 5


def _value(row, key: str):
    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def compute_average_rating(reviews) -> str:
    """Average rating as a one-decimal display string.

    A missing rating counts as 0 and still counts toward the number of
    reviews. No reviews gives "0.0".
    """
    reviews = list(reviews or [])
    if not reviews:
        return "0.0"

    total = sum(_value(r, "rating") or 0 for r in reviews)
    # Decimal(float) keeps the exact binary value so x.x5 rounds like toFixed(1)
    average = Decimal(total / len(reviews))
    return str(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_business_stats(visits, rewards) -> dict:
    visits = list(visits or [])
    rewards = list(rewards or [])

    customers = {_value(v, "customer_id") for v in visits}

    return {
        "totalVisits": len(visits),
        "totalCustomers": len(customers),
        "totalRewards": len(rewards),
    }


def star_flags(rating) -> list[bool]:
    filled = rating or 0
    return [i < filled for i in range(STAR_COUNT)]


def _newest_first(rows):
    # rows without a timestamp sink to the bottom; equal timestamps order by id
    return sorted(
        rows,
        key=lambda r: (_value(r, "created_at") or datetime.min, str(_value(r, "id") or "")),
        reverse=True,
    )


def reviews_by_customer(reviews, customer_id):
    return _newest_first(r for r in reviews or [] if _value(r, "customer_id") == customer_id)


def reviews_for_business(reviews, business_id):
    return _newest_first(r for r in reviews or [] if _value(r, "business_id") == business_id)


def visits_until_reward(visit_count: int, visits_required: int | None) -> int | None:
    if not visits_required or visits_required <= 0:
        return None

    remainder = int(visit_count or 0) % visits_required
    return visits_required - remainder
