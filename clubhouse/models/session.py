"""ORM model for server-side sessions."""

from sqlalchemy import Column, DateTime, String, Text, func

from clubhouse.models.base import Base


class SessionRecord(Base):
    """
    One login session. The id is the opaque token carried (signed) by the
    cookie; data is the encrypted {name, email} snapshot taken at login.
    """

    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    data = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
