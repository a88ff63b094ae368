import uuid
from sqlalchemy import Column, String, Integer, TIMESTAMP, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from stampit.db import Base


class Business(Base):
    __tablename__ = "businesses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id = Column(UUID(as_uuid=True), ForeignKey("accounts.id"), nullable=True)

    business_name = Column(String(255), nullable=False)
    business_type = Column(String(100))
    phone = Column(String(30))
    address = Column(String(255))

    reward_description = Column(String(255))
    # NULL / 0 = no stamp card
    visits_required_for_reward = Column(Integer, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
