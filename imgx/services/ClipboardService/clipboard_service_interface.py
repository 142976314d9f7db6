from abc import ABC, abstractmethod
from pathlib import Path


class ClipboardServiceInterface(ABC):
    @abstractmethod
    async def save_image(self, destination: Path) -> None:
        """Write the clipboard image to ``destination`` as PNG.

        Raises ClipboardUnavailableError when there is no image or the
        platform has no way to read one.
        """
