import uuid
from sqlalchemy import Column, String, TIMESTAMP, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from stampit.db import Base


class Customer(Base):
    __tablename__ = "customers"

    __table_args__ = (UniqueConstraint("phone", name="uq_customers_phone"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    phone = Column(String(30), nullable=False)
    name = Column(String(255))

    created_at = Column(TIMESTAMP, server_default=func.now())
