from datetime import datetime
from typing import List, Optional

from uuid import UUID

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    business_id: UUID
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None


class ReviewBusinessOut(BaseModel):
    business_name: str
    business_type: Optional[str] = None


class ReviewCustomerOut(BaseModel):
    name: Optional[str] = None
    phone: str


class ReviewOut(BaseModel):
    id: UUID
    business_id: Optional[UUID] = None
    customer_id: Optional[UUID] = None

    rating: Optional[int] = None
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    stars: List[bool] = []

    business: Optional[ReviewBusinessOut] = None
    customer: Optional[ReviewCustomerOut] = None
