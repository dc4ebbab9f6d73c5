# app/core/logging_config.py
import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    global _configured
    level_name = (level or settings.LOG_LEVEL).upper()

    if not _configured:
        logging.basicConfig(level=level_name, format=LOG_FORMAT)
        _configured = True
    else:
        logging.getLogger().setLevel(level_name)

    # SQL echo is controlled by the engine, keep the driver loggers quiet
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
