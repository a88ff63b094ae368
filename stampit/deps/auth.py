from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from stampit.db import get_db
from stampit.models.auth_session import AuthSession
from stampit.services.auth_service import ROLE_BUSINESS, ROLE_CUSTOMER, get_session
from stampit.services.business_service import get_business_for_account


bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> AuthSession | None:
    token = credentials.credentials if credentials else None
    return get_session(db, token)


def get_current_session(session: AuthSession | None = Depends(get_optional_session)) -> AuthSession:
    if session is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def get_current_business(
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    if session.role != ROLE_BUSINESS:
        raise HTTPException(status_code=403, detail="Business account required")

    business = get_business_for_account(db, session.account_id)
    if not business:
        raise HTTPException(status_code=404, detail="Business profile not found")
    return business


def get_current_customer_phone(session: AuthSession = Depends(get_current_session)) -> str:
    if session.role != ROLE_CUSTOMER or not session.phone:
        raise HTTPException(status_code=403, detail="Customer session required")
    return session.phone
