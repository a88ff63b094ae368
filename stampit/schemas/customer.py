from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class CustomerOut(BaseModel):
    id: UUID
    phone: str
    name: Optional[str] = None

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CustomerProgressOut(BaseModel):
    businessId: UUID
    visits: int
    rewardsEarned: int
    rewardsAvailable: int
    visitsRequiredForReward: Optional[int] = None
    visitsUntilReward: Optional[int] = None
    rewardDescription: Optional[str] = None
