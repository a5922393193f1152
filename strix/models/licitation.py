"""Licitation model."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    true,
)
from sqlalchemy.orm import relationship

from strix.database import Base
from strix.models.mixins import TimestampMixin


class Licitation(Base, TimestampMixin):
    """A time-bounded tender; is_lowest_price picks which bid wins."""

    __tablename__ = "licitations"
    __table_args__ = (CheckConstraint("end_date > start_date", name="ck_licitations_dates"),)

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    is_lowest_price = Column(Boolean, nullable=False, default=True, server_default=true())
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Relationships
    creator = relationship("User", back_populates="licitations")
