from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel, Field


class BusinessUpdate(BaseModel):
    business_name: Optional[str] = Field(default=None, min_length=1)
    business_type: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    reward_description: Optional[str] = None
    visits_required_for_reward: Optional[int] = Field(default=None, ge=0)


class BusinessOut(BaseModel):
    id: UUID
    user_id: Optional[UUID] = None

    business_name: str
    business_type: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    reward_description: Optional[str] = None
    visits_required_for_reward: Optional[int] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BusinessStatsOut(BaseModel):
    totalVisits: int = 0
    totalCustomers: int = 0
    totalRewards: int = 0
    averageRating: str = "0.0"
    reviewCount: int = 0
