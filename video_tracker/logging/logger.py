import logging
import sys


class Log:
    """Centralized logging for the submission workflow."""

    _logger: logging.Logger = logging.getLogger("video_tracker")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Attach a stdout handler once and set the level from settings."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def transition(cls, source: str, target: str, generation: int) -> None:
        """Record a workflow stage change for one file selection."""
        cls._logger.info(f"Workflow gen={generation}: {source} -> {target}")

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=kwargs)
