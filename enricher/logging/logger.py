import logging
import sys

# Third-party loggers that log every request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")


class Log:
    """Centralized logging for the worker and its threads."""

    _logger: logging.Logger = logging.getLogger("enricher")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level, attach one stdout handler and quiet HTTP client logs.

        Safe to call more than once; the handler is only added the first time.
        """
        level = log_level.upper()
        cls._logger.setLevel(level)
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(threadName)s %(message)s")
            )
            cls._logger.addHandler(handler)
        if level != "DEBUG":
            for name in _NOISY_LOGGERS:
                logging.getLogger(name).setLevel(logging.WARNING)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def exception(cls, message: str, **kwargs: object) -> None:
        """Error level plus the traceback of the exception being handled."""
        cls._logger.exception(message, extra=kwargs)
