"""ORM model for incident reports."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from crisisconnect.models.base import Base, utcnow


class Report(Base):
    """
    Incident filed by a user.

    status starts as 'Pending' and is only changed by admins. It is a free
    string; values outside the known set are summarized as 'Other'.
    """

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(32), nullable=False, default="Pending", index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
    )

    user = relationship("User", back_populates="reports")
