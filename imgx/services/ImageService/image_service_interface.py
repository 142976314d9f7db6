from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from imgx.entities.fragment import ResponseFragment


class ImageServiceInterface(ABC):
    @abstractmethod
    async def save_images(
        self, fragments: Sequence[ResponseFragment], output_dir: str | Path
    ) -> list[Path]:
        """Write every image fragment to ``output_dir`` and return the paths."""
