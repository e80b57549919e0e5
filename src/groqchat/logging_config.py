"""Logging setup for command-line entry points.

Application modules log through logging.getLogger(__name__) under the
"groqchat" namespace. Console commands send records to a RichHandler; the
TUI attaches its own handler (see ui.callbacks.PanelLogHandler) instead, so
nothing is written over the Textual screen.
"""

import logging

from rich.logging import RichHandler

APP_LOGGER_NAME = "groqchat"

# Third-party loggers that are too chatty at the application level
NOISY_DEPENDENCIES = ["httpx", "httpcore", "openai", "aiosqlite", "asyncio"]


def get_app_logger() -> logging.Logger:
    """Return the root logger of the application namespace."""
    return logging.getLogger(APP_LOGGER_NAME)


def configure_logging(log_level: str = "WARNING") -> logging.Logger:
    """Configure console logging with the specified level.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR (case-insensitive).
            Unknown names fall back to WARNING.

    Returns:
        The application logger
    """
    app_log_level = getattr(logging, log_level.upper(), logging.WARNING)
    if not isinstance(app_log_level, int):
        app_log_level = logging.WARNING
    deps_log_level = logging.INFO if app_log_level <= logging.DEBUG else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(min(app_log_level, deps_log_level))

    rich_handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        show_time=True,
        markup=False,
        show_level=True,
    )
    root_logger.addHandler(rich_handler)

    app_logger = get_app_logger()
    app_logger.setLevel(app_log_level)

    for dep_name in NOISY_DEPENDENCIES:
        logging.getLogger(dep_name).setLevel(deps_log_level)

    app_logger.debug(
        "Logging configured. App level: %s, dependency level: %s",
        logging.getLevelName(app_log_level),
        logging.getLevelName(deps_log_level),
    )
    return app_logger
