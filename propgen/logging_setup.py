import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO") -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Re-running setup must not stack handlers.
    for handler in root_logger.handlers:
        if getattr(handler, "_propgen_handler", False):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._propgen_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)
