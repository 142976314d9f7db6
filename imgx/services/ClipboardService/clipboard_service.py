"""
Clipboard image extraction.

macOS goes through ``osascript`` so the clipboard's PNG flavour is
written straight to disk. Every other platform uses Pillow's
``ImageGrab.grabclipboard`` (native on Windows, ``wl-paste``/``xclip``
on Linux).
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from PIL import Image, ImageGrab, UnidentifiedImageError

from imgx.services.ClipboardService.clipboard_service_interface import (
    ClipboardServiceInterface,
)
from imgx.services.SourceService.errors import ClipboardUnavailableError

_OSASCRIPT_TEMPLATE = """
set theFile to open for access POSIX file "{path}" with write permission
try
  set theData to the clipboard as «class PNGf»
  write theData to theFile
  close access theFile
on error
  close access theFile
  error "No image data in clipboard"
end try
"""


class ClipboardService(ClipboardServiceInterface):
    def __init__(
        self,
        logger: logging.Logger,
        platform: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.logger = logger
        self.platform = platform or sys.platform
        self.timeout = timeout

    async def save_image(self, destination: Path) -> None:
        if self.platform == "darwin":
            await self._save_with_osascript(destination)
        else:
            await asyncio.to_thread(self._save_with_pillow, destination)
        self.logger.info("Clipboard image written to %s", destination)

    async def _save_with_osascript(self, destination: Path) -> None:
        script = _OSASCRIPT_TEMPLATE.format(path=str(destination).replace('"', '\\"'))
        try:
            proc = await asyncio.create_subprocess_exec(
                "osascript",
                "-e",
                script,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ClipboardUnavailableError(f"Cannot run osascript: {exc}") from exc

        try:
            _, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except TimeoutError as exc:
            proc.kill()
            raise ClipboardUnavailableError("Timed out reading the clipboard") from exc

        if proc.returncode != 0:
            detail = stderr.decode(errors="replace").strip()
            self.logger.debug("osascript exited with %s: %s", proc.returncode, detail)
            raise ClipboardUnavailableError("No image data in clipboard", detail=detail)

    def _save_with_pillow(self, destination: Path) -> None:
        try:
            content = ImageGrab.grabclipboard()
        except NotImplementedError as exc:
            raise ClipboardUnavailableError(
                f"Clipboard images are not supported here: {exc}"
            ) from exc
        except OSError as exc:
            raise ClipboardUnavailableError(f"Cannot read the clipboard: {exc}") from exc

        # Copied files show up as a list of paths
        if isinstance(content, list):
            if not content:
                raise ClipboardUnavailableError("No image data in clipboard")
            try:
                with Image.open(content[0]) as copied:
                    copied.save(destination, format="PNG")
            except UnidentifiedImageError as exc:
                raise ClipboardUnavailableError(
                    f"Clipboard file is not an image: {content[0]}"
                ) from exc
            except OSError as exc:
                raise ClipboardUnavailableError(
                    f"Cannot read clipboard file {content[0]}: {exc}"
                ) from exc
            return

        if not isinstance(content, Image.Image):
            raise ClipboardUnavailableError("No image data in clipboard")

        content.save(destination, format="PNG")
