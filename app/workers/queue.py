# app/workers/queue.py
"""
rq plumbing for the maintenance jobs (orphan sweep, counter reconciliation).

The web process only enqueues; ``worker_main`` runs the jobs.
"""
import logging
from typing import Any, Callable, Optional

from redis import Redis
from rq import Queue
from rq.exceptions import NoSuchJobError
from rq.job import Job

from app.core.config import settings

logger = logging.getLogger(__name__)

# both jobs walk every table, give them room on a big install
MAINTENANCE_JOB_TIMEOUT = 15 * 60
MAINTENANCE_RESULT_TTL = 24 * 60 * 60

_redis_conn: Optional[Redis] = None


def get_redis_connection() -> Redis:
    global _redis_conn
    if _redis_conn is None:
        _redis_conn = Redis.from_url(settings.REDIS_URL)
    return _redis_conn


def get_maintenance_queue() -> Queue:
    return Queue(settings.MAINTENANCE_QUEUE_NAME, connection=get_redis_connection())


def _enqueue_maintenance(task: Callable[..., Any], description: str) -> str:
    job = get_maintenance_queue().enqueue(
        task,
        job_timeout=MAINTENANCE_JOB_TIMEOUT,
        result_ttl=MAINTENANCE_RESULT_TTL,
        description=description,
    )
    logger.info(f"Enqueued {description} as job {job.id}")
    return job.id


def enqueue_orphan_sweep() -> str:
    from app.workers.tasks import purge_orphans_task

    return _enqueue_maintenance(purge_orphans_task, "orphan answer sweep")


def enqueue_counter_reconciliation() -> str:
    from app.workers.tasks import reconcile_counters_task

    return _enqueue_maintenance(reconcile_counters_task, "counter reconciliation")


def fetch_job_status(job_id: str) -> Optional[dict]:
    """Status and (once finished) the task's result dict, or None if unknown."""
    try:
        job = Job.fetch(job_id, connection=get_redis_connection())
    except NoSuchJobError:
        return None
    return {
        "job_id": job.id,
        "status": job.get_status(),
        "result": job.return_value(),
    }
