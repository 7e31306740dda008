"""Refresh-token sessions: issue, look up, revoke and purge persisted tokens."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from taskflow.core.config import Settings
from taskflow.core.security import create_refresh_token
from taskflow.models import RefreshToken, User

logger = logging.getLogger(__name__)


def issue_refresh_token(db: Session, user: User, settings: Settings) -> str:
    """Sign a refresh token for user and persist it so it can be revoked later."""
    token, expires_at = create_refresh_token(user.id, user.role, settings)
    db.add(RefreshToken(user_id=user.id, token=token, expires_at=expires_at))
    db.commit()
    return token


def find_refresh_token(db: Session, token: str) -> RefreshToken | None:
    return db.query(RefreshToken).filter(RefreshToken.token == token).first()


def revoke_refresh_token(db: Session, user_id: str, token: str) -> int:
    """Delete a single session belonging to user_id. Returns rows deleted (0 or 1)."""
    deleted = (
        db.query(RefreshToken)
        .filter(RefreshToken.user_id == user_id, RefreshToken.token == token)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted


def revoke_all_refresh_tokens(db: Session, user_id: str) -> int:
    """Delete every refresh token of user_id, ending all of their sessions."""
    deleted = (
        db.query(RefreshToken)
        .filter(RefreshToken.user_id == user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted


def purge_expired_refresh_tokens(db: Session, now: datetime | None = None) -> int:
    """Delete refresh tokens whose expiry has passed. Idempotent."""
    cutoff = now or datetime.now(UTC)
    deleted = (
        db.query(RefreshToken)
        .filter(RefreshToken.expires_at < cutoff)
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted > 0:
        logger.info(
            "Expired refresh tokens purged: cutoff=%s, deleted=%s",
            cutoff.isoformat(),
            deleted,
        )
    return deleted
