from dataclasses import dataclass

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_TIMEOUT_SECONDS = 120.0


@dataclass
class ImgxOptions:
    """Flags shared by the ``analyze`` and ``chat`` commands."""

    verbose: bool = False
    code: bool = False
    quiet: bool = False
    json: bool = False
    images: str = "."
    model: str = DEFAULT_MODEL
    system: str | None = None
    timeout: float | None = None
    log_level: str | None = None

    @property
    def timeout_ms(self) -> int:
        """Request timeout in milliseconds, as the transport layer expects it."""
        seconds = self.timeout if self.timeout is not None else DEFAULT_TIMEOUT_SECONDS
        return round(seconds * 1000)
