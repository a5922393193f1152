"""User model."""

from sqlalchemy import Boolean, Column, Integer, String, false, true
from sqlalchemy.orm import relationship

from strix.database import Base
from strix.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and licitation ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    is_admin = Column(Boolean, nullable=False, default=False, server_default=false())

    # Relationships
    licitations = relationship("Licitation", back_populates="creator")
