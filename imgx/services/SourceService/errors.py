from imgx.errors import InputError


class SourceError(InputError):
    """Base error for image sources that cannot be loaded."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        super().__init__(message)


class SourceNotFoundError(SourceError):
    def __init__(self, source: str) -> None:
        super().__init__(f"File not found: {source}", source)


class SourceReadError(SourceError):
    def __init__(self, source: str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot read {source}: {reason}", source)


class EmptySourceError(SourceError):
    """Raised when a source yields zero bytes."""


class FetchFailedError(SourceError):
    def __init__(
        self, url: str, status_code: int | None = None, reason: str | None = None
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        message = f"Failed to fetch image: {url}"
        if status_code is not None:
            message += f" ({status_code})"
        if reason:
            message += f": {reason}"
        super().__init__(message, url)


class ClipboardUnavailableError(SourceError):
    def __init__(self, message: str, detail: str | None = None) -> None:
        self.detail = detail
        if detail:
            message = f"{message}\n{detail}"
        super().__init__(message, "clipboard")
