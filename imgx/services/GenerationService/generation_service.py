"""
Gemini access through the google-genai SDK.

Every request enables the code execution tool and asks for thought
summaries so that reasoning, code and execution output come back as
separate parts. SDK and transport failures are re-raised as
``GenerationError``; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from google import genai
from google.genai import types

from imgx.entities.media import MediaPayload
from imgx.errors import ServiceError
from imgx.services.GenerationService.generation_service_interface import (
    ChatSessionInterface,
    GenerationServiceInterface,
)


class GenerationError(ServiceError):
    """Raised when the generation service call fails."""


def build_contents(images: Sequence[MediaPayload], prompt: str) -> list[types.Part]:
    """Images first, in source order, then the prompt text."""
    parts = [image.to_part() for image in images]
    parts.append(types.Part.from_text(text=prompt))
    return parts


def _describe(exc: Exception) -> str:
    message = getattr(exc, "message", None) or str(exc)
    return message or type(exc).__name__


class ChatSession(ChatSessionInterface):
    def __init__(self, chat: Any, logger: logging.Logger) -> None:
        self._chat = chat
        self.logger = logger
        self.turns = 0

    async def send(
        self, message: str | Sequence[types.Part]
    ) -> types.GenerateContentResponse:
        payload = message if isinstance(message, str) else list(message)
        try:
            response = await self._chat.send_message(payload)
        except Exception as exc:
            self.logger.debug("Chat turn %d failed", self.turns + 1, exc_info=True)
            raise GenerationError(_describe(exc)) from exc

        self.turns += 1
        self.logger.info("Chat turn %d completed", self.turns)
        return response


class GenerationService(GenerationServiceInterface):
    def __init__(
        self,
        api_key: str,
        model_name: str,
        logger: logging.Logger,
        system_instruction: str | None = None,
        timeout_ms: int = 120_000,
        client: genai.Client | None = None,
    ) -> None:
        self.model_name = model_name
        self.system_instruction = system_instruction
        self.timeout_ms = timeout_ms
        self.logger = logger

        self.client = client or genai.Client(api_key=api_key)

        self.logger.info(
            "GenerationService initialized. Model: %s, timeout: %dms",
            self.model_name,
            self.timeout_ms,
        )

    def build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            tools=[types.Tool(code_execution=types.ToolCodeExecution())],
            thinking_config=types.ThinkingConfig(include_thoughts=True),
            system_instruction=self.system_instruction or None,
            http_options=types.HttpOptions(timeout=self.timeout_ms),
        )

    async def generate(
        self, images: Sequence[MediaPayload], prompt: str
    ) -> types.GenerateContentResponse:
        contents = build_contents(images, prompt)
        self.logger.info(
            "Sending %d image(s) and a %d character prompt to %s",
            len(images),
            len(prompt),
            self.model_name,
        )
        try:
            return await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=self.build_config(),
            )
        except Exception as exc:
            self.logger.debug("generate_content failed", exc_info=True)
            raise GenerationError(_describe(exc)) from exc

    def start_chat(self) -> ChatSession:
        chat = self.client.aio.chats.create(
            model=self.model_name,
            config=self.build_config(),
        )
        return ChatSession(chat, self.logger)
