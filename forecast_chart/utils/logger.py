import logging
import sys

from pythonjsonlogger import jsonlogger

from forecast_chart.config import get_settings

settings = get_settings()

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def build_formatter() -> jsonlogger.JsonFormatter:
    """
    JSON formatter shared by every forecast_chart logger.

    Each record carries the application name and version so lines from
    several deployments can be told apart once aggregated.
    """
    return jsonlogger.JsonFormatter(
        fmt=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        static_fields={"service": settings.app_name, "version": settings.app_version},
    )


def setup_logger(name: str) -> logging.Logger:
    """
    Return a logger writing structured JSON lines to stdout.

    Calling it twice for the same name reuses the first handler.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = logging.getLevelName(settings.log_level.upper())
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter())

    logger.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
