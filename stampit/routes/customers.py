from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from stampit.db import get_db
from stampit.deps.auth import get_current_customer_phone
from stampit.schemas.customer import CustomerOut, CustomerProgressOut
from stampit.schemas.review import ReviewCreate, ReviewOut
from stampit.schemas.reward import RewardOut
from stampit.services.business_service import get_business
from stampit.services.contact_service import get_customer_by_phone
from stampit.services.review_service import list_reviews_for_phone, review_to_dict, submit_review
from stampit.services.visit_service import get_progress, list_rewards_for_phone


router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/me", response_model=CustomerOut)
def read_me(phone: str = Depends(get_current_customer_phone), db: Session = Depends(get_db)):
    customer = get_customer_by_phone(db, phone)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("/me/reviews", response_model=list[ReviewOut])
def read_my_reviews(phone: str = Depends(get_current_customer_phone), db: Session = Depends(get_db)):
    return list_reviews_for_phone(db, phone)


@router.post("/me/reviews", response_model=ReviewOut)
def create_review(
    payload: ReviewCreate,
    phone: str = Depends(get_current_customer_phone),
    db: Session = Depends(get_db),
):
    review = submit_review(
        db,
        phone=phone,
        business_id=payload.business_id,
        rating=payload.rating,
        comment=payload.comment,
    )
    return review_to_dict(review, with_business=True)


@router.get("/me/rewards", response_model=list[RewardOut])
def read_my_rewards(phone: str = Depends(get_current_customer_phone), db: Session = Depends(get_db)):
    return list_rewards_for_phone(db, phone)


@router.get("/me/progress/{business_id}", response_model=CustomerProgressOut)
def read_my_progress(
    business_id: UUID,
    phone: str = Depends(get_current_customer_phone),
    db: Session = Depends(get_db),
):
    business = get_business(db, business_id)
    return get_progress(db, phone, business)
