from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel, Field

from stampit.schemas.reward import RewardOut


class VisitCreate(BaseModel):
    phone: str = Field(min_length=1)
    name: Optional[str] = None
    notes: Optional[str] = None


class VisitOut(BaseModel):
    id: UUID
    business_id: Optional[UUID] = None
    customer_id: Optional[UUID] = None

    visit_date: Optional[datetime] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class VisitRecordedOut(BaseModel):
    visit: VisitOut
    reward: Optional[RewardOut] = None
    visitsUntilReward: Optional[int] = None
