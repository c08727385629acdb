import sys
import uuid
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from .core import LOG_DIR, PROGRAM_NAME

FILE_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(module)s:%(lineno)d | %(message)s | session=%(session)s"
CONSOLE_FORMAT = "[%(levelname)s] %(message)s"


class SessionFilter(logging.Filter):
    def __init__(self, session):
        super().__init__()
        self.session = session

    def filter(self, record):
        record.session = self.session
        return True


def new_session_id() -> str:
    return str(uuid.uuid4())[:8]


def setup_logging(settings: dict, session_id: Optional[str] = None, stream=None) -> logging.Logger:
    """Initialize logging for one run of the tool.

    - Console handler on stderr at INFO (DEBUG when settings["debug"] is set)
    - latest.log (rewritten each run) and a rotating debug.log when
      settings["file_logging"] is enabled, both under settings["log_dir"]
    - Every record carries the run's session id
    """
    session = session_id or new_session_id()
    log_level = logging.DEBUG if settings.get("debug") else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)
        h.close()

    sess_filter = SessionFilter(session)
    console_fmt = logging.Formatter(CONSOLE_FORMAT)
    file_fmt = logging.Formatter(FILE_FORMAT)

    # Console
    sh = logging.StreamHandler(stream if stream is not None else sys.stderr)
    sh.setLevel(log_level)
    sh.setFormatter(console_fmt)
    sh.addFilter(sess_filter)
    root_logger.addHandler(sh)

    if settings.get("file_logging"):
        log_dir = Path(settings.get("log_dir") or LOG_DIR).expanduser()
        log_dir.mkdir(parents=True, exist_ok=True)

        # latest.log
        lh = logging.FileHandler(log_dir / "latest.log", mode="w", encoding="utf-8")
        lh.setLevel(logging.DEBUG)
        lh.setFormatter(file_fmt)
        lh.addFilter(sess_filter)
        root_logger.addHandler(lh)

        # debug.log (rotating)
        rh = logging.handlers.RotatingFileHandler(
            log_dir / "debug.log", maxBytes=1_000_000, backupCount=5, encoding="utf-8"
        )
        rh.setLevel(logging.DEBUG)
        rh.setFormatter(file_fmt)
        rh.addFilter(sess_filter)
        root_logger.addHandler(rh)

    logging.captureWarnings(True)

    app_logger = logging.getLogger(PROGRAM_NAME)
    app_logger.setLevel(logging.DEBUG)
    app_logger.debug("Logger initialized | debug=%s | session=%s", bool(settings.get("debug")), session)
    return app_logger
