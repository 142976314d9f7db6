from imgx.bootstrap.components import Components
from imgx.components.configuration.configuration_interface import ConfigurationInterface
from imgx.components.logger.logger_interface import LoggerInterface
from imgx.entities.options import DEFAULT_MODEL, DEFAULT_TIMEOUT_SECONDS, ImgxOptions
from imgx.errors import MissingCredentialError
from imgx.media.mime import DEFAULT_FALLBACK_MIME_TYPE
from imgx.services.ClipboardService.clipboard_service import ClipboardService
from imgx.services.ClipboardService.clipboard_service_interface import (
    ClipboardServiceInterface,
)
from imgx.services.GenerationService.generation_service import GenerationService
from imgx.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)
from imgx.services.ImageService.image_service import ImageService
from imgx.services.ImageService.image_service_interface import ImageServiceInterface
from imgx.services.SourceService.source_service import SourceDefaults, SourceService
from imgx.services.SourceService.source_service_interface import (
    SourceServiceInterface,
)

API_KEY_VARIABLE = "GEMINI_API_KEY"


def get_default_model(components: Components) -> str:
    configuration = components.get_component(ConfigurationInterface)
    return configuration.get_configuration("IMGX_MODEL", str, default=DEFAULT_MODEL)


def get_default_timeout(components: Components) -> float:
    configuration = components.get_component(ConfigurationInterface)
    return configuration.get_configuration(
        "IMGX_TIMEOUT", float, default=DEFAULT_TIMEOUT_SECONDS
    )


def get_clipboard_service(components: Components) -> ClipboardServiceInterface:
    return ClipboardService(
        logger=components.get_component(LoggerInterface).get_logger("ClipboardService"),
    )


def get_source_service(components: Components) -> SourceServiceInterface:
    """
    Create the image source loader.

    Environment variables:
        IMGX_STDIN_MIME_TYPE: MIME type for unrecognised stdin bytes (default: image/png)
        IMGX_FALLBACK_MIME_TYPE: MIME type when neither bytes nor name help (default: image/jpeg)
    """
    configuration = components.get_component(ConfigurationInterface)

    defaults = SourceDefaults(
        stdin_mime_type=configuration.get_configuration(
            "IMGX_STDIN_MIME_TYPE", str, default="image/png"
        ),
        fallback_mime_type=configuration.get_configuration(
            "IMGX_FALLBACK_MIME_TYPE", str, default=DEFAULT_FALLBACK_MIME_TYPE
        ),
    )

    return SourceService(
        logger=components.get_component(LoggerInterface).get_logger("SourceService"),
        clipboard=get_clipboard_service(components),
        defaults=defaults,
    )


def get_generation_service(
    components: Components, options: ImgxOptions
) -> GenerationServiceInterface:
    configuration = components.get_component(ConfigurationInterface)

    api_key = configuration.get_configuration(API_KEY_VARIABLE, str, default="")
    if not api_key:
        raise MissingCredentialError(API_KEY_VARIABLE)

    return GenerationService(
        api_key=api_key,
        model_name=options.model,
        system_instruction=options.system,
        timeout_ms=options.timeout_ms,
        logger=components.get_component(LoggerInterface).get_logger("GenerationService"),
    )


def get_image_service(components: Components) -> ImageServiceInterface:
    return ImageService(
        logger=components.get_component(LoggerInterface).get_logger("ImageService"),
    )
