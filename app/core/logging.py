import logging
from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None):
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    # uvicorn --reload imports the app twice
    if any(getattr(h, "_expenzo", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._expenzo = True
    root.addHandler(handler)
