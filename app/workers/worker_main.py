# app/workers/worker_main.py
"""
Run the maintenance worker:

    python -m app.workers.worker_main            # keep listening
    python -m app.workers.worker_main --burst    # drain the queue and exit
"""
import argparse
import logging

from rq import SimpleWorker

from app.core.logging_config import setup_logging
from app.workers.queue import get_maintenance_queue, get_redis_connection

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Campus Q&A maintenance worker")
    parser.add_argument("--burst", action="store_true", help="exit once the queue is empty")
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    queue = get_maintenance_queue()
    logger.info(f"Worker listening on '{queue.name}' (burst={args.burst})")
    # SimpleWorker runs jobs in-process; no fork per job
    worker = SimpleWorker([queue], connection=get_redis_connection())
    worker.work(burst=args.burst)


if __name__ == "__main__":
    main()
