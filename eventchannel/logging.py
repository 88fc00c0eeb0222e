"""
Logging for eventchannel

The ``eventchannel`` logger carries only a NullHandler, so nothing is printed
unless the application opts in with configure_logging(). Failures that have
no caller to raise to (fire-and-forget group emissions) go through
log_error(), which an application can redirect with set_error_handler().
"""

import logging
from typing import Optional, Callable, Any

ErrorHandler = Callable[[str, BaseException, dict], None]

_root_logger = logging.getLogger('eventchannel')
_root_logger.addHandler(logging.NullHandler())
_root_logger.propagate = False

_error_handler: Optional[ErrorHandler] = None


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass ``__name__`` so it sits under ``eventchannel``"""
    return logging.getLogger(name)


def set_error_handler(handler: Optional[ErrorHandler]) -> None:
    """
    Route unraisable listener failures to ``handler(logger_name, exc, context)``.

    ``context`` holds the keyword arguments given to log_error(), e.g. the
    event that failed. Pass None to go back to the ``eventchannel`` logger.
    """
    global _error_handler
    _error_handler = handler


def configure_logging(
    level: int = logging.INFO,
    handler: Optional[logging.Handler] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Replace the NullHandler with a real handler.

    Args:
        level: Level for the ``eventchannel`` logger
        handler: Handler to attach (default: StreamHandler on stderr)
        format_string: Formatter pattern for that handler
    """
    _root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        format_string or '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))

    _root_logger.addHandler(handler)
    _root_logger.setLevel(level)
    _root_logger.propagate = False


def disable_logging() -> None:
    """Drop any error handler and return to the silent NullHandler setup"""
    global _error_handler
    _error_handler = None
    _root_logger.handlers.clear()
    _root_logger.addHandler(logging.NullHandler())
    _root_logger.propagate = False


def log_error(logger_name: str, exception: BaseException, **context: Any) -> None:
    """
    Report a listener failure that cannot be raised.

    Without a custom handler the failure is logged at ERROR with ``context``
    attached to the record. A custom handler that itself raises is reduced
    to a DEBUG record so reporting never breaks the event loop callback.
    """
    name = exception.__class__.__name__
    if _error_handler is None:
        _root_logger.error(
            "[%s] %s: %s", logger_name, name, exception,
            extra={"context": context},
        )
        return

    try:
        _error_handler(logger_name, exception, context)
    except Exception:
        _root_logger.debug(
            "[%s] error handler raised while reporting %s: %s",
            logger_name, name, exception,
        )


def is_logging_enabled() -> bool:
    """True if an error handler or a non-null handler is installed"""
    return _error_handler is not None or any(
        not isinstance(h, logging.NullHandler) for h in _root_logger.handlers
    )
