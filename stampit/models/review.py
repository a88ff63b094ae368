import uuid
from sqlalchemy import CheckConstraint, Column, Integer, String, TIMESTAMP, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from stampit.db import Base


class Review(Base):
    __tablename__ = "reviews"

    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_reviews_rating_range"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    business_id = Column(UUID(as_uuid=True), ForeignKey("businesses.id"), nullable=True)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"), nullable=True)

    # 1..5, checked on write; legacy rows may be NULL
    rating = Column(Integer, nullable=True)
    comment = Column(String, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())

    business = relationship("Business", lazy="joined")
    customer = relationship("Customer", lazy="joined")
