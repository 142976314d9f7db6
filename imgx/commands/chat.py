"""
Interactive multi-turn chat about one image.

The image and the initial prompt go out in the first turn; follow-up
lines are plain text. The session ends on EOF, an empty line, ``exit``
or ``quit``. A failed follow-up turn is reported and the loop goes on;
a failed first turn ends the command.
"""

from __future__ import annotations

import asyncio
import sys
from typing import TextIO

from imgx.commands.common import handle_response
from imgx.entities.options import ImgxOptions
from imgx.errors import ImgxError
from imgx.services.GenerationService.generation_service import build_contents
from imgx.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)
from imgx.services.ImageService.image_service_interface import ImageServiceInterface
from imgx.services.SourceService.source_service_interface import (
    SourceServiceInterface,
)

DEFAULT_CHAT_PROMPT = "I've loaded this image. What would you like to know?"
REPL_PROMPT = "\nimgx> "
EXIT_COMMANDS = {"exit", "quit"}


async def _read_line(input_stream: TextIO, prompt_stream: TextIO) -> str | None:
    prompt_stream.write(REPL_PROMPT)
    prompt_stream.flush()
    line = await asyncio.to_thread(input_stream.readline)
    return line if line else None


async def chat_command(
    image_source: str,
    prompt: str | None,
    options: ImgxOptions,
    generation: GenerationServiceInterface,
    sources: SourceServiceInterface,
    images: ImageServiceInterface,
    stream: TextIO | None = None,
    input_stream: TextIO | None = None,
    prompt_stream: TextIO | None = None,
) -> None:
    input_stream = input_stream or sys.stdin
    prompt_stream = prompt_stream or sys.stderr

    image = await sources.load(image_source)
    session = generation.start_chat()

    first_response = await session.send(
        build_contents([image], prompt or DEFAULT_CHAT_PROMPT)
    )
    await handle_response(first_response, options, images, stream)

    while True:
        line = await _read_line(input_stream, prompt_stream)
        if line is None:
            break
        message = line.strip()
        if not message or message in EXIT_COMMANDS:
            break

        try:
            response = await session.send(message)
            await handle_response(response, options, images, stream)
        except (ImgxError, OSError) as exc:
            prompt_stream.write(f"Error: {exc}\n")
