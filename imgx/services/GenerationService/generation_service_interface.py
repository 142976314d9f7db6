from abc import ABC, abstractmethod
from collections.abc import Sequence

from google.genai import types

from imgx.entities.media import MediaPayload


class ChatSessionInterface(ABC):
    @abstractmethod
    async def send(
        self, message: str | Sequence[types.Part]
    ) -> types.GenerateContentResponse:
        """Send one turn and return the raw response."""


class GenerationServiceInterface(ABC):
    model_name: str

    @abstractmethod
    async def generate(
        self, images: Sequence[MediaPayload], prompt: str
    ) -> types.GenerateContentResponse:
        """Run a single request with the given images followed by the prompt."""

    @abstractmethod
    def start_chat(self) -> ChatSessionInterface:
        """Open a multi-turn session; history is kept service-side."""
