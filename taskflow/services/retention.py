"""Token retention: delete refresh tokens that have expired."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from taskflow.services.sessions import purge_expired_refresh_tokens

if TYPE_CHECKING:
    from taskflow.core.config import Settings

logger = logging.getLogger(__name__)


def run_retention(session: Session, settings: "Settings") -> int:
    """
    Delete refresh tokens past their expiry. Returns the number of rows deleted.

    Expired tokens are already rejected at /auth/refresh; this only keeps the
    table from growing. Idempotent: safe to run repeatedly.
    """
    if not settings.TOKEN_RETENTION_ENABLED:
        logger.info("Token retention is disabled (TOKEN_RETENTION_ENABLED=false); skipping.")
        return 0
    return purge_expired_refresh_tokens(session)
