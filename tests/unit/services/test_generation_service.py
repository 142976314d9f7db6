"""
Unit tests for GenerationService.

The google-genai client is replaced by mocks; request payloads are
checked with the real SDK types.
"""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.genai import types

from imgx.entities.media import MediaPayload
from imgx.services.GenerationService.generation_service import (
    ChatSession,
    GenerationError,
    GenerationService,
    build_contents,
)


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    return client


@pytest.fixture
def service(logger: logging.Logger, mock_client: MagicMock) -> GenerationService:
    return GenerationService(
        api_key="test-key",
        model_name="gemini-test",
        logger=logger,
        timeout_ms=2500,
        client=mock_client,
    )


@pytest.mark.unit
class TestInitialization:
    def test_creates_sdk_client_with_api_key(self, logger: logging.Logger) -> None:
        with patch(
            "imgx.services.GenerationService.generation_service.genai.Client"
        ) as MockClient:
            service = GenerationService(
                api_key="secret", model_name="gemini-test", logger=logger
            )

        MockClient.assert_called_once_with(api_key="secret")
        assert service.client is MockClient.return_value
        assert service.timeout_ms == 120_000


@pytest.mark.unit
class TestBuildConfig:
    def test_enables_code_execution_and_thoughts(self, service: GenerationService) -> None:
        config = service.build_config()

        assert config.tools is not None
        assert len(config.tools) == 1
        assert config.tools[0].code_execution is not None
        assert config.thinking_config is not None
        assert config.thinking_config.include_thoughts is True
        assert config.http_options is not None
        assert config.http_options.timeout == 2500
        assert config.system_instruction is None

    def test_system_instruction_when_given(
        self, logger: logging.Logger, mock_client: MagicMock
    ) -> None:
        service = GenerationService(
            api_key="k",
            model_name="m",
            logger=logger,
            system_instruction="Answer in French.",
            client=mock_client,
        )

        assert service.build_config().system_instruction == "Answer in French."


@pytest.mark.unit
class TestBuildContents:
    def test_images_precede_prompt(self, png_bytes: bytes) -> None:
        first = MediaPayload.from_bytes(png_bytes, "image/png")
        second = MediaPayload.from_bytes(b"\xff\xd8\xff\xe0", "image/jpeg")

        parts = build_contents([first, second], "Compare them")

        assert len(parts) == 3
        assert parts[0].inline_data is not None
        assert parts[0].inline_data.data == png_bytes
        assert parts[0].inline_data.mime_type == "image/png"
        assert parts[1].inline_data is not None
        assert parts[1].inline_data.mime_type == "image/jpeg"
        assert parts[2].text == "Compare them"


@pytest.mark.unit
class TestGenerate:
    @pytest.mark.asyncio
    async def test_sends_model_contents_and_config(
        self, service: GenerationService, mock_client: MagicMock, png_bytes: bytes
    ) -> None:
        expected = types.GenerateContentResponse()
        mock_client.aio.models.generate_content.return_value = expected
        payload = MediaPayload.from_bytes(png_bytes, "image/png")

        response = await service.generate([payload], "What is this?")

        assert response is expected
        kwargs = mock_client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"][-1].text == "What is this?"
        assert kwargs["contents"][0].inline_data.data == png_bytes
        assert isinstance(kwargs["config"], types.GenerateContentConfig)

    @pytest.mark.asyncio
    async def test_failure_is_wrapped(
        self, service: GenerationService, mock_client: MagicMock
    ) -> None:
        mock_client.aio.models.generate_content.side_effect = RuntimeError("quota exceeded")

        with pytest.raises(GenerationError) as exc_info:
            await service.generate([], "prompt")

        assert "quota exceeded" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.unit
class TestChat:
    def test_start_chat_uses_model_and_config(
        self, service: GenerationService, mock_client: MagicMock
    ) -> None:
        session = service.start_chat()

        assert isinstance(session, ChatSession)
        kwargs = mock_client.aio.chats.create.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["config"].thinking_config.include_thoughts is True

    @pytest.mark.asyncio
    async def test_send_counts_turns(self, logger: logging.Logger) -> None:
        chat = MagicMock()
        chat.send_message = AsyncMock(return_value=types.GenerateContentResponse())
        session = ChatSession(chat, logger)

        await session.send("hello")
        await session.send([types.Part.from_text(text="again")])

        assert session.turns == 2
        assert chat.send_message.await_args_list[0].args[0] == "hello"
        assert isinstance(chat.send_message.await_args_list[1].args[0], list)

    @pytest.mark.asyncio
    async def test_send_failure_is_wrapped(self, logger: logging.Logger) -> None:
        chat = MagicMock()
        chat.send_message = AsyncMock(side_effect=ConnectionError("reset by peer"))
        session = ChatSession(chat, logger)

        with pytest.raises(GenerationError) as exc_info:
            await session.send("hello")

        assert "reset by peer" in str(exc_info.value)
        assert session.turns == 0
