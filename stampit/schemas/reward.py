from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class RewardOut(BaseModel):
    id: UUID
    business_id: Optional[UUID] = None
    customer_id: Optional[UUID] = None

    earned_date: Optional[datetime] = None
    is_redeemed: Optional[bool] = None
    redeemed_date: Optional[datetime] = None

    class Config:
        from_attributes = True
