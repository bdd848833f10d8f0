import logging
import sys

_NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "opentelemetry")


def setup_logging(level: int | str = logging.INFO) -> None:
    """Send log records to stdout; repeated calls only adjust the level."""
    root_logger = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root_logger.setLevel(level)
    if any(getattr(handler, "_folio_handler", False) for handler in root_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler._folio_handler = True  # type: ignore[attr-defined]
    handler.setFormatter(
        logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        )
    )
    root_logger.addHandler(handler)

    # Client libraries log every request at INFO
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
