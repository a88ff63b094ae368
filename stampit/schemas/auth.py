from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel, Field

from stampit.schemas.business import BusinessOut
from stampit.schemas.customer import CustomerOut


class SignInRequest(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class BusinessSignUpRequest(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)

    business_name: str = Field(min_length=1)
    business_type: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class CustomerSignInRequest(BaseModel):
    phone: str = Field(min_length=1)
    name: Optional[str] = None


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
    expires_at: datetime


class BusinessSignUpOut(TokenOut):
    business: BusinessOut


class CustomerSignInOut(TokenOut):
    customer: CustomerOut


class SessionOut(BaseModel):
    id: UUID
    role: str
    account_id: Optional[UUID] = None
    phone: Optional[str] = None
    expires_at: datetime
    screen: str
