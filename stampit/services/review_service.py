import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from stampit.models.business import Business
from stampit.models.review import Review
from stampit.services import view_cache
from stampit.services.aggregation import reviews_by_customer, reviews_for_business, star_flags
from stampit.services.contact_service import get_customer_by_phone


logger = logging.getLogger(__name__)


def review_to_dict(review: Review, *, with_business: bool = False, with_customer: bool = False) -> dict:
    data = {
        "id": review.id,
        "business_id": review.business_id,
        "customer_id": review.customer_id,
        "rating": review.rating,
        "comment": review.comment,
        "created_at": review.created_at,
        "stars": star_flags(review.rating),
        "business": None,
        "customer": None,
    }
    if with_business and review.business is not None:
        data["business"] = {
            "business_name": review.business.business_name,
            "business_type": review.business.business_type,
        }
    if with_customer and review.customer is not None:
        data["customer"] = {
            "name": review.customer.name,
            "phone": review.customer.phone,
        }
    return data


# ============================================================
# SUBMIT REVIEW
# ============================================================
def submit_review(db: Session, *, phone: str, business_id, rating: int, comment: str | None = None):
    customer = get_customer_by_phone(db, phone)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    if not db.query(Business.id).filter(Business.id == business_id).first():
        raise HTTPException(status_code=404, detail="Business not found")

    if rating is None or not 1 <= int(rating) <= 5:
        raise HTTPException(status_code=400, detail="rating must be between 1 and 5")

    review = Review(
        business_id=business_id,
        customer_id=customer.id,
        rating=int(rating),
        comment=comment,
    )
    db.add(review)
    db.commit()
    db.refresh(review)

    # only after the write is acknowledged
    view_cache.invalidate(view_cache.CUSTOMER_REVIEWS, customer.id)
    view_cache.invalidate_business(business_id)

    logger.info(
        "review submitted",
        extra={"review_id": str(review.id), "business_id": str(business_id), "rating": review.rating},
    )
    return review


# ============================================================
# LISTS
# ============================================================
def _load_customer_reviews(db: Session, customer_id) -> list[dict]:
    reviews = (
        db.query(Review)
        .filter(Review.customer_id == customer_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
    return [review_to_dict(r, with_business=True) for r in reviews_by_customer(reviews, customer_id)]


def list_reviews_for_phone(db: Session, phone: str | None) -> list[dict]:
    """My reviews: the reviews of the customer behind phone, newest first."""
    customer = get_customer_by_phone(db, phone)
    if not customer:
        return []

    return view_cache.get_or_load(
        view_cache.CUSTOMER_REVIEWS,
        customer.id,
        lambda: _load_customer_reviews(db, customer.id),
    )


def _load_business_reviews(db: Session, business_id) -> list[dict]:
    reviews = (
        db.query(Review)
        .filter(Review.business_id == business_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )
    return [review_to_dict(r, with_customer=True) for r in reviews_for_business(reviews, business_id)]


def list_reviews_for_business(db: Session, business_id) -> list[dict]:
    return view_cache.get_or_load(
        view_cache.BUSINESS_REVIEWS,
        business_id,
        lambda: _load_business_reviews(db, business_id),
    )
