"""Process-wide logging setup.

Log records always go to stderr: in stdio mode stdout carries protocol frames.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [session=%(session_id)s] %(name)s: %(message)s"


class _SessionIdFilter(logging.Filter):
    """Ensure every log record has a session_id attribute."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session_id"):
            record.session_id = "system"
        return True


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    root_logger = logging.getLogger()
    session_filter = _SessionIdFilter()
    for handler in root_logger.handlers:
        handler.addFilter(session_filter)
    # httpx logs every request at INFO; keep that behind DEBUG.
    if root_logger.level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
