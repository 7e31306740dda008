"""ORM model for persisted refresh tokens (server-side revocation)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from taskflow.models.base import Base, utcnow


class RefreshToken(Base):
    """One row per issued refresh token; a token is only honoured while its row exists."""

    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token = Column(Text, nullable=False, unique=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
