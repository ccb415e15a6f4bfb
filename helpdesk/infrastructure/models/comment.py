"""SQLAlchemy model for ticket comments."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text

from helpdesk.infrastructure.database import Base
from helpdesk.utils import now_in_app_naive_datetime


class CommentModel(Base):
    """Database representation of a comment posted on a ticket."""

    __tablename__ = "comment"

    id = Column(Integer, primary_key=True, index=True)
    ticket_id = Column(
        Integer, ForeignKey("ticket.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["CommentModel"]
