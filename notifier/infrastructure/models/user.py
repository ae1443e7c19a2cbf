"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, DateTime, String, func

from notifier.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a user that may receive push notifications."""

    __tablename__ = "user"

    id = Column(String(64), primary_key=True)
    name = Column(String(120), nullable=False, default="")
    role = Column(String(50), nullable=False, index=True)
    fcm_token = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]
