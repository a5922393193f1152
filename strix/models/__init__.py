"""SQLAlchemy models."""

from strix.models.licitation import Licitation
from strix.models.user import User

__all__ = [
    "User",
    "Licitation",
]
