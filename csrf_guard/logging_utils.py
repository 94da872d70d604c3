import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# csrf_guard.request already writes one access line per request
DUPLICATE_ACCESS_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO") -> None:
    """Send csrf_guard logs to stdout at ``level``.

    An existing root handler (uvicorn, pytest) is kept; only levels are
    aligned. uvicorn's own access log is raised to WARNING so each request
    is logged once, with its request id, by the middleware in ``main``.
    """
    level = level.upper()
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("csrf_guard").setLevel(level)

    for name in DUPLICATE_ACCESS_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
