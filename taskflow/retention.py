"""
CLI entrypoint for the refresh-token retention job. Run from cron, e.g.:

  python -m taskflow.retention

Or hourly: 0 * * * * cd /path/to/taskflow && .venv/bin/python -m taskflow.retention
"""

import logging
import sys

from taskflow.core.config import get_settings
from taskflow.core.database import build_engine, build_session_factory
from taskflow.services.retention import run_retention

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Run retention: delete expired refresh tokens."""
    settings = get_settings()
    engine = build_engine(settings)
    db = build_session_factory(engine)()
    try:
        deleted = run_retention(db, settings)
        logger.info("Retention completed: refresh_tokens_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Retention job failed: %s", e)
        return 1
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
