import logging
import os

from pythonjsonlogger import jsonlogger


def setup_logging() -> None:
    """Configure structured JSON logging for Cloud Run.

    ``levelname`` is emitted as ``severity`` so Cloud Logging picks up the level.
    """
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

    handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={"levelname": "severity"},
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers = [handler]

    # httpx logs every Bot API request at INFO, which would include the token.
    logging.getLogger("httpx").setLevel(logging.WARNING)
