import logging
import sys

_VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"
_COMPACT_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class Log:
    """Centralized logging with structured format."""

    _logger: logging.Logger = logging.getLogger("certextract")

    @classmethod
    def configure(cls, log_level: str, app_env: str = "dev") -> None:
        """Configure level and stdout handler; the format depends on app_env.

        Calling it again only updates the level and the handler format.
        """
        cls._logger.setLevel(log_level.upper())
        fmt = _VERBOSE_FORMAT if app_env.lower() == "dev" else _COMPACT_FORMAT
        if not cls._logger.handlers:
            cls._logger.addHandler(logging.StreamHandler(sys.stdout))
        for handler in cls._logger.handlers:
            handler.setFormatter(logging.Formatter(fmt))

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=kwargs)
