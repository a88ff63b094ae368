import logging
import uuid
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from stampit.models.account import Account
from stampit.models.auth_session import AuthSession
from stampit.services.contact_service import get_or_create_customer
from stampit.settings import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, SECRET_KEY


logger = logging.getLogger(__name__)

ROLE_BUSINESS = "business"
ROLE_CUSTOMER = "customer"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def _utcnow() -> datetime:
    # Keep naive UTC timestamps to match the DB column types.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    return pwd_context.verify(password, hashed_password)


# ============================================================
# ACCOUNTS
# ============================================================
def sign_up(db: Session, email: str, password: str, role: str = ROLE_BUSINESS) -> Account:
    """Create and commit an account. The caller opens a session for it."""
    email = _normalize_email(email)

    if db.query(Account.id).filter(Account.email == email).first():
        raise HTTPException(status_code=400, detail="User already registered")

    account = Account(email=email, hashed_password=hash_password(password), role=role)
    db.add(account)
    db.commit()
    db.refresh(account)

    logger.info("account created", extra={"account_id": str(account.id), "role": role})
    return account


def authenticate(db: Session, email: str, password: str) -> Account:
    email = _normalize_email(email)
    account = db.query(Account).filter(Account.email == email).first()

    if not account or not verify_password(password, account.hashed_password):
        logger.warning("sign-in failed", extra={"email": email})
        raise HTTPException(status_code=400, detail="Invalid login credentials")

    return account


# ============================================================
# SESSIONS
# ============================================================
def open_session(db: Session, *, role: str, account_id=None, phone: str | None = None) -> AuthSession:
    session = AuthSession(
        role=role,
        account_id=account_id,
        phone=phone,
        expires_at=_utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    db.add(session)
    db.commit()
    db.refresh(session)

    logger.info("session opened", extra={"session_id": str(session.id), "role": role})
    return session


def sign_in(db: Session, email: str, password: str) -> AuthSession:
    account = authenticate(db, email, password)
    return open_session(db, role=account.role, account_id=account.id)


def sign_in_customer(db: Session, phone: str, name: str | None = None):
    if not phone:
        raise HTTPException(status_code=400, detail="phone is required")

    customer = get_or_create_customer(db, phone, name)
    db.commit()
    db.refresh(customer)

    session = open_session(db, role=ROLE_CUSTOMER, phone=customer.phone)
    return session, customer


def sign_out(db: Session, session: AuthSession) -> None:
    if session.revoked_at is None:
        session.revoked_at = _utcnow()
        db.commit()
        logger.info("session closed", extra={"session_id": str(session.id)})


def create_access_token(session: AuthSession) -> str:
    claims = {
        "sub": str(session.id),
        "role": session.role,
        "exp": session.expires_at.replace(tzinfo=timezone.utc),
    }
    return jwt.encode(claims, SECRET_KEY, algorithm=JWT_ALGORITHM)


def get_session(db: Session, token: str | None) -> AuthSession | None:
    """Active session for a bearer token, or None."""
    if not token:
        return None

    try:
        claims = jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None

    session_id = claims.get("sub")
    if not session_id:
        return None

    session = db.query(AuthSession).filter(AuthSession.id == _as_uuid(session_id)).first()
    if not session or session.revoked_at is not None:
        return None
    if session.expires_at <= _utcnow():
        return None

    return session


def _as_uuid(value: str):
    try:
        return uuid.UUID(value)
    except ValueError:
        return None
