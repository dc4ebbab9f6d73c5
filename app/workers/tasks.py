"""
Maintenance Tasks for Worker
These tasks are executed by RQ workers to repair denormalized data
"""

import logging
from typing import Callable

from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.services.maintenance_service import purge_orphaned_answers, reconcile_counters

logger = logging.getLogger(__name__)


def _run(name: str, job: Callable[[Session], int], session_factory=SessionLocal) -> dict:
    """
    Open a session, run one maintenance job, and report the outcome.

    Failures are logged and reported in the result instead of raised,
    so a broken run does not kill the worker.
    """
    db = session_factory()
    try:
        logger.info(f"Starting {name}")
        affected = job(db)
        logger.info(f"Completed {name}: {affected} rows affected")
        return {
            "status": "success",
            "task": name,
            "affected": affected,
        }

    except Exception as e:
        logger.error(f"Unexpected error during {name}: {e}", exc_info=True)
        return {
            "status": "error",
            "task": name,
            "error": str(e),
        }

    finally:
        db.close()


def purge_orphans_task(session_factory=SessionLocal) -> dict:
    """Worker task: delete answers whose question is gone."""
    return _run("orphan sweep", purge_orphaned_answers, session_factory)


def reconcile_counters_task(session_factory=SessionLocal) -> dict:
    """Worker task: recompute all denormalized counters."""
    return _run("counter reconciliation", reconcile_counters, session_factory)
