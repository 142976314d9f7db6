from typing import Any, TextIO

from imgx.entities.fragment import ResponseFragment
from imgx.entities.options import ImgxOptions
from imgx.output.classifier import classify_response
from imgx.output.renderer import render, select_output_mode
from imgx.services.ImageService.image_service_interface import ImageServiceInterface


async def handle_response(
    response: Any,
    options: ImgxOptions,
    image_service: ImageServiceInterface,
    stream: TextIO | None = None,
) -> list[ResponseFragment]:
    """Classify a response, save its images, then render it."""
    fragments = classify_response(response)
    await image_service.save_images(fragments, options.images)
    render(fragments, select_output_mode(options), stream)
    return fragments
