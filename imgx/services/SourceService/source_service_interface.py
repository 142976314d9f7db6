from abc import ABC, abstractmethod
from collections.abc import Sequence

from imgx.entities.media import MediaPayload


class SourceServiceInterface(ABC):
    @abstractmethod
    async def load(self, descriptor: str) -> MediaPayload:
        """Load one image source (path, URL, ``-`` or ``clipboard``)."""

    @abstractmethod
    async def load_many(self, descriptors: Sequence[str]) -> list[MediaPayload]:
        """Load several sources concurrently; the first failure aborts all."""

    async def aclose(self) -> None:
        """Release any resources held by the service."""
