import logging
import sys


class Log:
    """Centralized logging for the OCR client.

    Every component logs through this class so one `configure` call
    controls the level and output of the whole client.
    """

    _logger: logging.Logger = logging.getLogger("ocr_client")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log a session, upload or listing milestone."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log a failed request the user is notified about."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a degraded but recoverable condition, e.g. an expired session."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log per-request detail such as method, path and query."""
        cls._logger.debug(message, extra=kwargs)
