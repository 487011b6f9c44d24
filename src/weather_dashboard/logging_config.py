"""Logging setup shared by the client and the mock backend."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn installs its own handlers; they are replaced so every line shares one format
SERVER_LOGGERS = ["uvicorn", "uvicorn.access", "uvicorn.error", "fastapi"]


def configure_logging(level: int = logging.INFO, server: bool = False) -> None:
    """Route weather_dashboard and httpx records through a single console handler.

    Args:
        level: Level for the weather_dashboard loggers
        server: Also take over the uvicorn/fastapi loggers, for the mock backend
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("weather_dashboard").setLevel(level)
    # httpx logs every request at INFO, which repeats the client's own lines
    logging.getLogger("httpx").setLevel(level if level <= logging.DEBUG else logging.WARNING)

    if not server:
        return

    for logger_name in SERVER_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.propagate = False

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
