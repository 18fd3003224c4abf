"""Package logger. One handler, configured once; every record carries the process run id."""
from __future__ import annotations
import logging
import uuid

from payrecon.config import settings

_RUN_ID = uuid.uuid4().hex[:8]


def get_run_id() -> str:
    """Identifier for this process, useful to correlate API and CLI logs."""
    return _RUN_ID


class _RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID
        return True


def _configure() -> logging.Logger:
    log = logging.getLogger("payrecon")
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(run_id)s] %(levelname)s %(name)s: %(message)s"
        ))
        handler.addFilter(_RunIdFilter())
        log.addHandler(handler)
    log.setLevel(settings.LOG_LEVEL.upper())
    return log


logger = _configure()
