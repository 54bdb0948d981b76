"""
Centralized logging module for the application.

Provides the shared Loguru logger and the ``setup_logging`` function that
installs its sinks. Other modules import the logger instance directly:

    from lad.core.logging import logger

Sinks are only installed when ``setup_logging`` is called, which happens
once at process start with values taken from the ``logger`` section of
the runtime configuration.
"""
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message} | {extra}"


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging messages and route them to Loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    app_name: str = "Lad",
    show_stack: bool = True,
    level: str = "INFO",
    log_dir: Optional[str] = None,
) -> None:
    """
    Configure Loguru logging.

    Intercepts standard logging and adds custom sinks:
    - Console output (stdout)
    - File-based logging with rotation, when ``log_dir`` is given

    Args:
        app_name: Bound into every record as ``extra["app"]``.
        show_stack: Enable backtraces and variable values in tracebacks.
        level: Minimum level for the console sink.
        log_dir: Optional directory for the rotating application log.
    """
    # Remove default handler
    logger.remove()
    logger.configure(extra={"app": app_name})

    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=level,
        colorize=True,
        backtrace=show_stack,
        diagnose=show_stack,
    )

    if log_dir:
        log_directory = Path(log_dir)
        log_directory.mkdir(parents=True, exist_ok=True)

        log_config: Dict[str, Any] = {
            "rotation": "1 day",
            "retention": "7 days",
            "compression": "zip",
            "backtrace": show_stack,
            "diagnose": show_stack,
        }
        logger.add(
            log_directory / "app.log",
            format=LOG_FORMAT,
            level="DEBUG",
            **log_config,
        )

    # Configure standard library logging interception
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Silence noisy loggers
    for logger_name in logging.root.manager.loggerDict:
        if logger_name.startswith(("uvicorn", "gunicorn", "httpx", "cssutils")):
            logging.getLogger(logger_name).handlers = []
