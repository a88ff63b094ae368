from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stampit.db import get_db
from stampit.deps.auth import get_current_business
from stampit.models.business import Business
from stampit.schemas.business import BusinessOut, BusinessStatsOut, BusinessUpdate
from stampit.schemas.review import ReviewOut
from stampit.schemas.reward import RewardOut
from stampit.schemas.visit import VisitCreate, VisitRecordedOut
from stampit.services.business_service import (
    get_business,
    get_business_stats,
    search_businesses,
    update_business,
)
from stampit.services.review_service import list_reviews_for_business
from stampit.services.visit_service import list_business_rewards, record_visit, redeem_reward


router = APIRouter(prefix="/businesses", tags=["businesses"])


@router.get("", response_model=list[BusinessOut])
def list_businesses(search: str | None = None, db: Session = Depends(get_db)):
    return search_businesses(db, search)


# /me routes are declared before /{business_id} so "me" is never parsed as an id
@router.get("/me", response_model=BusinessOut)
def read_my_business(business: Business = Depends(get_current_business)):
    return business


@router.patch("/me", response_model=BusinessOut)
def update_my_business(
    payload: BusinessUpdate,
    business: Business = Depends(get_current_business),
    db: Session = Depends(get_db),
):
    data = payload.model_dump(exclude_unset=True)
    if "business_name" in data and data["business_name"] is None:
        data.pop("business_name")

    business = update_business(db, business, data)
    return business


@router.get("/me/stats", response_model=BusinessStatsOut)
def read_my_stats(
    business: Business = Depends(get_current_business),
    db: Session = Depends(get_db),
):
    return get_business_stats(db, business.id)


@router.get("/me/reviews", response_model=list[ReviewOut])
def read_my_reviews(
    business: Business = Depends(get_current_business),
    db: Session = Depends(get_db),
):
    return list_reviews_for_business(db, business.id)


@router.post("/me/visits", response_model=VisitRecordedOut)
def create_visit(
    payload: VisitCreate,
    business: Business = Depends(get_current_business),
    db: Session = Depends(get_db),
):
    visit, reward, remaining = record_visit(
        db,
        business,
        payload.phone,
        name=payload.name,
        notes=payload.notes,
    )
    return {"visit": visit, "reward": reward, "visitsUntilReward": remaining}


@router.get("/me/rewards", response_model=list[RewardOut])
def read_my_rewards(
    redeemed: bool | None = None,
    business: Business = Depends(get_current_business),
    db: Session = Depends(get_db),
):
    return list_business_rewards(db, business.id, redeemed)


@router.post("/me/rewards/{reward_id}/redeem", response_model=RewardOut)
def redeem_my_reward(
    reward_id: UUID,
    business: Business = Depends(get_current_business),
    db: Session = Depends(get_db),
):
    return redeem_reward(db, business, reward_id)


@router.get("/{business_id}", response_model=BusinessOut)
def read_business(business_id: UUID, db: Session = Depends(get_db)):
    return get_business(db, business_id)
