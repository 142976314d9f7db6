from collections.abc import Sequence
from typing import TextIO

from imgx.commands.common import handle_response
from imgx.entities.options import ImgxOptions
from imgx.errors import UsageError
from imgx.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)
from imgx.services.ImageService.image_service_interface import ImageServiceInterface
from imgx.services.SourceService.source_service_interface import (
    SourceServiceInterface,
)

ANALYZE_USAGE = 'Usage: imgx analyze <image...> "<prompt>"'


def split_analyze_args(args: Sequence[str]) -> tuple[list[str], str]:
    """Split positionals into image sources and the trailing prompt."""
    if len(args) < 2:
        raise UsageError(f"Need at least one image and a prompt.\n{ANALYZE_USAGE}")
    return list(args[:-1]), args[-1]


async def analyze_command(
    args: Sequence[str],
    options: ImgxOptions,
    generation: GenerationServiceInterface,
    sources: SourceServiceInterface,
    images: ImageServiceInterface,
    stream: TextIO | None = None,
) -> None:
    image_sources, prompt = split_analyze_args(args)

    payloads = await sources.load_many(image_sources)
    response = await generation.generate(payloads, prompt)
    await handle_response(response, options, images, stream)
