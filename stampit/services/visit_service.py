import logging
from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy.orm import Session

from stampit.models.business import Business
from stampit.models.reward import Reward
from stampit.models.visit import Visit
from stampit.services import view_cache
from stampit.services.aggregation import visits_until_reward
from stampit.services.contact_service import get_customer_by_phone, get_or_create_customer


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def count_visits(db: Session, business_id, customer_id) -> int:
    return (
        db.query(Visit.id)
        .filter(Visit.business_id == business_id, Visit.customer_id == customer_id)
        .count()
    )


# ============================================================
# RECORD VISIT (stamp)
# ============================================================
def record_visit(db: Session, business: Business, phone: str, *, name: str | None = None, notes: str | None = None):
    customer = get_or_create_customer(db, phone, name)

    visit = Visit(business_id=business.id, customer_id=customer.id, notes=notes)
    db.add(visit)
    db.flush()

    visit_count = count_visits(db, business.id, customer.id)
    remaining = visits_until_reward(visit_count, business.visits_required_for_reward)

    reward = None
    if remaining is not None and remaining == business.visits_required_for_reward:
        reward = issue_reward(db, business, customer)

    db.commit()
    db.refresh(visit)
    if reward is not None:
        db.refresh(reward)

    view_cache.invalidate(view_cache.BUSINESS_STATS, business.id)

    logger.info(
        "visit recorded",
        extra={"business_id": str(business.id), "customer_id": str(customer.id), "visit_count": visit_count},
    )
    return visit, reward, remaining


def issue_reward(db: Session, business: Business, customer):
    reward = Reward(business_id=business.id, customer_id=customer.id, is_redeemed=False)
    db.add(reward)
    db.flush()

    logger.info("reward issued", extra={"business_id": str(business.id), "customer_id": str(customer.id)})
    return reward


# ============================================================
# REDEEM REWARD
# ============================================================
def redeem_reward(db: Session, business: Business, reward_id):
    reward = (
        db.query(Reward)
        .filter(Reward.id == reward_id, Reward.business_id == business.id)
        .first()
    )
    if not reward:
        raise HTTPException(status_code=404, detail="Reward not found")

    if reward.is_redeemed:
        raise HTTPException(status_code=400, detail="Reward already redeemed")

    reward.is_redeemed = True
    reward.redeemed_date = _utcnow()
    db.commit()
    db.refresh(reward)

    logger.info("reward redeemed", extra={"reward_id": str(reward.id)})
    return reward


# ============================================================
# LISTS
# ============================================================
def list_business_rewards(db: Session, business_id, redeemed: bool | None = None):
    q = db.query(Reward).filter(Reward.business_id == business_id)
    if redeemed is not None:
        q = q.filter(Reward.is_redeemed.is_(redeemed))
    return q.order_by(Reward.earned_date.desc()).all()


def list_rewards_for_phone(db: Session, phone: str | None):
    customer = get_customer_by_phone(db, phone)
    if not customer:
        return []

    return (
        db.query(Reward)
        .filter(Reward.customer_id == customer.id)
        .order_by(Reward.earned_date.desc())
        .all()
    )


def get_progress(db: Session, phone: str | None, business: Business) -> dict:
    customer = get_customer_by_phone(db, phone)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    visit_count = count_visits(db, business.id, customer.id)
    rewards = (
        db.query(Reward)
        .filter(Reward.business_id == business.id, Reward.customer_id == customer.id)
        .all()
    )

    return {
        "businessId": business.id,
        "visits": visit_count,
        "rewardsEarned": len(rewards),
        "rewardsAvailable": len([r for r in rewards if not r.is_redeemed]),
        "visitsRequiredForReward": business.visits_required_for_reward,
        "visitsUntilReward": visits_until_reward(visit_count, business.visits_required_for_reward),
        "rewardDescription": business.reward_description,
    }
