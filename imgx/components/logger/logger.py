import logging
import sys

from imgx.components.logger.logger_interface import LoggerInterface

DEFAULT_LOG_FORMAT = "[%(levelname)s] %(name)s - %(message)s"

# Third-party loggers that should follow the imgx level.
_LIBRARY_LOGGERS = ("httpx", "httpcore", "google_genai")


class Logger(LoggerInterface):
    """Configures stdlib logging once and hands out named loggers."""

    def __init__(self, log_format: str | None = None, log_level: str | None = None) -> None:
        self.log_format = log_format or DEFAULT_LOG_FORMAT
        self.level = self._parse_level(log_level)

        logging.basicConfig(
            level=self.level,
            format=self.log_format,
            stream=sys.stderr,
        )
        logging.getLogger().setLevel(self.level)
        for name in _LIBRARY_LOGGERS:
            # httpcore is wire-level noise unless debugging
            if name == "httpcore" and self.level > logging.DEBUG:
                logging.getLogger(name).setLevel(logging.WARNING)
                continue
            logging.getLogger(name).setLevel(self.level)

    @staticmethod
    def _parse_level(log_level: str | None) -> int:
        if not log_level:
            return logging.WARNING
        level = logging.getLevelName(log_level.strip().upper())
        return level if isinstance(level, int) else logging.WARNING

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(f"imgx.{name}")
