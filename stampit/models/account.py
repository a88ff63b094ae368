import uuid
from sqlalchemy import Column, String, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from stampit.db import Base


class Account(Base):
    __tablename__ = "accounts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    email = Column(String(255), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)

    # business only for now; customers sign in by phone
    role = Column(String(20), nullable=False, default="business")

    created_at = Column(TIMESTAMP, server_default=func.now())
