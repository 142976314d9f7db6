"""
Image source loading.

A source descriptor is resolved once into a ``SourceKind``:

* ``-`` reads standard input to EOF,
* ``clipboard`` asks the clipboard service for the current image,
* ``http://`` / ``https://`` fetches the URL,
* anything else is a local path.

The MIME type always comes from the bytes first; the file extension,
the response ``Content-Type`` or a configured default is used only when
sniffing finds nothing.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import os
import sys
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

import httpx

from imgx.entities.media import MediaPayload
from imgx.media.mime import (
    DEFAULT_FALLBACK_MIME_TYPE,
    mime_from_extension,
    sniff_mime_type,
)
from imgx.services.ClipboardService.clipboard_service_interface import (
    ClipboardServiceInterface,
)
from imgx.services.SourceService.errors import (
    EmptySourceError,
    FetchFailedError,
    SourceError,
    SourceNotFoundError,
    SourceReadError,
)
from imgx.services.SourceService.source_service_interface import (
    SourceServiceInterface,
)

STDIN_DESCRIPTOR = "-"
CLIPBOARD_DESCRIPTOR = "clipboard"


class SourceKind(enum.Enum):
    STDIN = "stdin"
    CLIPBOARD = "clipboard"
    URL = "url"
    FILE = "file"


def resolve_source_kind(descriptor: str) -> SourceKind:
    """Classify a descriptor; ``clipboard`` wins over a file of that name."""
    if descriptor == STDIN_DESCRIPTOR:
        return SourceKind.STDIN
    if descriptor == CLIPBOARD_DESCRIPTOR:
        return SourceKind.CLIPBOARD
    if descriptor.startswith(("http://", "https://")):
        return SourceKind.URL
    return SourceKind.FILE


@dataclass(frozen=True)
class SourceDefaults:
    """MIME types used when neither the bytes nor the name identify the image."""

    stdin_mime_type: str = "image/png"
    fallback_mime_type: str = DEFAULT_FALLBACK_MIME_TYPE


class SourceService(SourceServiceInterface):
    def __init__(
        self,
        logger: logging.Logger,
        clipboard: ClipboardServiceInterface,
        defaults: SourceDefaults | None = None,
        http_client: httpx.AsyncClient | None = None,
        stdin: BinaryIO | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.logger = logger
        self.clipboard = clipboard
        self.defaults = defaults or SourceDefaults()
        self._stdin = stdin

        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout, follow_redirects=True
        )

    async def load(self, descriptor: str) -> MediaPayload:
        kind = resolve_source_kind(descriptor)
        self.logger.debug("Loading %s source: %s", kind.value, descriptor)

        if kind is SourceKind.STDIN:
            return await self._load_from_stdin()
        if kind is SourceKind.CLIPBOARD:
            return await self._load_from_clipboard()
        if kind is SourceKind.URL:
            return await self._load_from_url(descriptor)
        return await self._load_from_file(descriptor)

    async def load_many(self, descriptors: Sequence[str]) -> list[MediaPayload]:
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self.load(d)) for d in descriptors]
        except ExceptionGroup as group:
            # Siblings are already cancelled; surface the first failure alone.
            failures = [e for e in group.exceptions if isinstance(e, SourceError)]
            if not failures:
                raise
            raise failures[0] from None
        return [task.result() for task in tasks]

    async def _load_from_file(self, file_path: str) -> MediaPayload:
        resolved = Path(file_path).resolve()
        if not resolved.exists():
            raise SourceNotFoundError(file_path)

        try:
            data = await asyncio.to_thread(resolved.read_bytes)
        except OSError as exc:
            raise SourceReadError(file_path, exc.strerror or str(exc)) from exc

        if not data:
            raise EmptySourceError(f"File is empty: {file_path}", file_path)

        mime_type = sniff_mime_type(data)
        if mime_type is None:
            mime_type = mime_from_extension(file_path, self.defaults.fallback_mime_type)
            self.logger.debug("No signature in %s, using %s", file_path, mime_type)

        self.logger.info("Loaded %s (%s, %d bytes)", resolved, mime_type, len(data))
        return MediaPayload.from_bytes(data, mime_type)

    async def _load_from_url(self, url: str) -> MediaPayload:
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise FetchFailedError(url, reason=str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise FetchFailedError(url, status_code=response.status_code)

        data = response.content
        if not data:
            raise EmptySourceError(f"Fetched image is empty: {url}", url)

        mime_type = sniff_mime_type(data)
        if mime_type is None:
            content_type = (
                response.headers.get("content-type", "").split(";")[0].strip().lower()
            )
            if content_type.startswith("image/"):
                mime_type = content_type
            else:
                mime_type = self.defaults.fallback_mime_type
            self.logger.debug("No signature in %s, using %s", url, mime_type)

        self.logger.info("Fetched %s (%s, %d bytes)", url, mime_type, len(data))
        return MediaPayload.from_bytes(data, mime_type)

    async def _load_from_stdin(self) -> MediaPayload:
        stream = self._stdin if self._stdin is not None else sys.stdin.buffer
        data = await asyncio.to_thread(stream.read)
        if not data:
            raise EmptySourceError("No data received from stdin", STDIN_DESCRIPTOR)

        mime_type = sniff_mime_type(data) or self.defaults.stdin_mime_type
        self.logger.info("Read %d bytes from stdin (%s)", len(data), mime_type)
        return MediaPayload.from_bytes(data, mime_type)

    async def _load_from_clipboard(self) -> MediaPayload:
        fd, name = tempfile.mkstemp(prefix="imgx-clipboard-", suffix=".png")
        os.close(fd)
        tmp_path = Path(name)
        try:
            await self.clipboard.save_image(tmp_path)
            return await self._load_from_file(str(tmp_path))
        finally:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError as exc:
                self.logger.warning("Failed to remove %s: %s", tmp_path, exc)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
