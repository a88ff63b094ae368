import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stampit.models.business import Business
from stampit.models.review import Review
from stampit.models.reward import Reward
from stampit.models.visit import Visit
from stampit.services import view_cache
from stampit.services.aggregation import compute_average_rating, compute_business_stats
from stampit.services.auth_service import ROLE_BUSINESS, open_session, sign_up


logger = logging.getLogger(__name__)


def get_business(db: Session, business_id):
    business = db.query(Business).filter(Business.id == business_id).first()
    if not business:
        raise HTTPException(status_code=404, detail="Business not found")
    return business


def get_business_for_account(db: Session, account_id):
    return db.query(Business).filter(Business.user_id == account_id).first()


def search_businesses(db: Session, search: str | None = None):
    q = db.query(Business)
    if search:
        q = q.filter(Business.business_name.ilike(f"%{search}%"))
    return q.order_by(Business.business_name.asc()).all()


def register_business(
    db: Session,
    *,
    email: str,
    password: str,
    business_name: str,
    business_type: str | None = None,
    phone: str | None = None,
    address: str | None = None,
):
    """Sign up an account and create its business profile.

    The account is committed first. If the profile insert then fails the
    error is raised to the caller and the account stays in place.
    """
    account = sign_up(db, email, password, role=ROLE_BUSINESS)

    business = Business(
        user_id=account.id,
        business_name=business_name,
        business_type=business_type,
        phone=phone,
        address=address,
    )
    try:
        db.add(business)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(
            "business profile insert failed after sign-up",
            extra={"account_id": str(account.id), "error": str(e)},
        )
        raise HTTPException(status_code=400, detail=str(getattr(e, "orig", None) or e))

    db.refresh(business)
    logger.info("business registered", extra={"business_id": str(business.id)})

    session = open_session(db, role=ROLE_BUSINESS, account_id=account.id)
    return session, business


def update_business(db: Session, business: Business, data: dict):
    for k, v in data.items():
        if k in {"id", "user_id"}:
            continue
        setattr(business, k, v)

    db.commit()
    db.refresh(business)

    # name and type are embedded in every reviewer's "my reviews" view
    view_cache.invalidate_business(business.id)
    reviewer_ids = db.query(Review.customer_id).filter(Review.business_id == business.id).distinct().all()
    for (customer_id,) in reviewer_ids:
        view_cache.invalidate(view_cache.CUSTOMER_REVIEWS, customer_id)
    return business


# ============================================================
# DASHBOARD VIEWS
# ============================================================
def _load_stats(db: Session, business_id) -> dict:
    visits = db.query(Visit.id, Visit.customer_id).filter(Visit.business_id == business_id).all()
    rewards = db.query(Reward.id).filter(Reward.business_id == business_id).all()
    ratings = db.query(Review.rating).filter(Review.business_id == business_id).all()

    stats = compute_business_stats(visits, rewards)
    stats["averageRating"] = compute_average_rating(ratings)
    stats["reviewCount"] = len(ratings)
    return stats


def get_business_stats(db: Session, business_id) -> dict:
    return view_cache.get_or_load(
        view_cache.BUSINESS_STATS,
        business_id,
        lambda: _load_stats(db, business_id),
    )
