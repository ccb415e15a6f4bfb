"""SQLAlchemy model for support tickets."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from helpdesk.infrastructure.database import Base
from helpdesk.utils import now_in_app_naive_datetime


class TicketModel(Base):
    """Database representation of a support ticket."""

    __tablename__ = "ticket"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="OPEN", index=True)
    priority = Column(String(20), nullable=False, default="MEDIUM")
    creator_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    assignee_id = Column(Integer, ForeignKey("user.id"), nullable=True, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["TicketModel"]
