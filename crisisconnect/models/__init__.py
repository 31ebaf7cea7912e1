"""SQLAlchemy ORM models."""

from crisisconnect.models.base import Base
from crisisconnect.models.report import Report
from crisisconnect.models.user import User

__all__ = ["Base", "Report", "User"]
