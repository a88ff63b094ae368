from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stampit.db import get_db
from stampit.deps.auth import get_current_session, get_optional_session
from stampit.models.auth_session import AuthSession
from stampit.schemas.auth import (
    BusinessSignUpOut,
    BusinessSignUpRequest,
    CustomerSignInOut,
    CustomerSignInRequest,
    SessionOut,
    SignInRequest,
    TokenOut,
)
from stampit.services.auth_service import create_access_token, sign_in, sign_in_customer, sign_out
from stampit.services.business_service import register_business
from stampit.services.shell import Screen, initial_screen


router = APIRouter(prefix="/auth", tags=["auth"])


def _token_payload(session: AuthSession) -> dict:
    return {
        "access_token": create_access_token(session),
        "token_type": "bearer",
        "role": session.role,
        "expires_at": session.expires_at,
    }


@router.post("/business/sign-up", response_model=BusinessSignUpOut)
def business_sign_up(payload: BusinessSignUpRequest, db: Session = Depends(get_db)):
    session, business = register_business(
        db,
        email=payload.email,
        password=payload.password,
        business_name=payload.business_name,
        business_type=payload.business_type,
        phone=payload.phone,
        address=payload.address,
    )
    return {**_token_payload(session), "business": business}


@router.post("/business/sign-in", response_model=TokenOut)
def business_sign_in(payload: SignInRequest, db: Session = Depends(get_db)):
    session = sign_in(db, payload.email, payload.password)
    return _token_payload(session)


@router.post("/customer", response_model=CustomerSignInOut)
def customer_sign_in(payload: CustomerSignInRequest, db: Session = Depends(get_db)):
    session, customer = sign_in_customer(db, payload.phone, payload.name)
    return {**_token_payload(session), "customer": customer}


@router.post("/sign-out")
def auth_sign_out(
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    sign_out(db, session)
    return {"signedOut": True, "screen": Screen.LANDING.value}


@router.get("/session", response_model=SessionOut | None)
def read_session(session: AuthSession | None = Depends(get_optional_session)):
    if session is None:
        return None

    return {
        "id": session.id,
        "role": session.role,
        "account_id": session.account_id,
        "phone": session.phone,
        "expires_at": session.expires_at,
        "screen": initial_screen(session).value,
    }
