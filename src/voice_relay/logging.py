import logging
import os
import sys

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"

# Server loggers share the JSON handler; SDK clients only report problems.
SERVER_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")
CLIENT_LOGGERS = ("httpx", "httpcore", "assemblyai", "google_genai")


def setup_logging():
    """
    Configures structured JSON logging for the relay.

    Records carry the Datadog trace_id and span_id injected by ddtrace. The
    root level comes from `LOG_LEVEL` (default INFO). Uvicorn loggers are
    routed to the same stdout handler, and HTTP and SDK client loggers are
    limited to warnings.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.setLevel(level)
        server_logger.handlers = [handler]
        server_logger.propagate = False

    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
