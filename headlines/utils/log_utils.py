import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def configure_logging(level=logging.INFO) -> logging.Handler:
    """
    Single stderr handler on the root logger, shared with uvicorn.

    uvicorn installs its own handlers on startup; they are dropped here and
    its loggers propagate to root, so app and server lines share one format.
    """
    root_logger = logging.getLogger()
    handler = next((h for h in root_logger.handlers if getattr(h, "_headlines", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler._headlines = True
        root_logger.addHandler(handler)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.setLevel(level)

    for name in UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True
        uv_logger.setLevel(level)
    return handler
