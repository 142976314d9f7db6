from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import sys
import time
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TextIO

from imgx.entities.fragment import Image, ResponseFragment
from imgx.errors import ServiceError
from imgx.media.mime import extension_for_mime
from imgx.services.ImageService.image_service_interface import ImageServiceInterface

FILENAME_PREFIX = "imgx"


class ImageSaveError(ServiceError):
    """Raised when a generated image cannot be written to disk."""


def image_filename(timestamp_ms: int, index: int, mime_type: str | None) -> str:
    return f"{FILENAME_PREFIX}-{timestamp_ms}-{index}.{extension_for_mime(mime_type)}"


class ImageService(ImageServiceInterface):
    """
    Persists generated images.

    All files written by one call share the same millisecond timestamp and
    are told apart by their index. Two calls in the same millisecond
    targeting the same directory can collide.
    """

    def __init__(
        self,
        logger: logging.Logger,
        diagnostics: TextIO | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.logger = logger
        self._diagnostics = diagnostics
        self._clock = clock

    async def save_images(
        self, fragments: Sequence[ResponseFragment], output_dir: str | Path
    ) -> list[Path]:
        images = [f for f in fragments if isinstance(f, Image)]
        if not images:
            return []

        directory = Path(output_dir)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ImageSaveError(
                f"Cannot create image directory {directory}: {exc.strerror or exc}"
            ) from exc

        timestamp_ms = int(self._clock() * 1000)
        paths: list[Path] = []
        for index, image in enumerate(images):
            path = directory / image_filename(timestamp_ms, index, image.mime_type)
            try:
                data = base64.b64decode(image.data)
            except binascii.Error as exc:
                raise ImageSaveError(f"Image {index} is not valid base64: {exc}") from exc
            try:
                await asyncio.to_thread(path.write_bytes, data)
            except OSError as exc:
                raise ImageSaveError(
                    f"Cannot write {path}: {exc.strerror or exc}"
                ) from exc
            paths.append(path)
            self._report(path)
        return paths

    def _report(self, path: Path) -> None:
        stream = self._diagnostics if self._diagnostics is not None else sys.stderr
        stream.write(f"Saved: {path}\n")
        self.logger.info("Saved image %s", path)
