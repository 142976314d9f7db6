from collections.abc import Mapping
from typing import Any, TypeVar, cast

from dotenv import load_dotenv

from imgx.components.configuration.configuration import Configuration
from imgx.components.configuration.configuration_interface import ConfigurationInterface
from imgx.components.logger.logger import DEFAULT_LOG_FORMAT, Logger
from imgx.components.logger.logger_interface import LoggerInterface


load_dotenv()

T = TypeVar("T")

ENVIRONMENTS = {"development", "production", "test"}


class Components:
    """
    Container for the shared building blocks (configuration and logging).

    Args:
        env: One of ``ENVIRONMENTS``.
        log_level: Overrides ``IMGX_LOG_LEVEL`` when given.
        environ: Mapping to read configuration from instead of ``os.environ``.
    """

    def __init__(
        self,
        env: str,
        log_level: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.__env: str = env
        self.__log_level = log_level
        self.__environ = environ
        self.__components: dict[type[Any], Any] = self.__bootstrap_components()

    def __bootstrap_components(self) -> dict[type[Any], Any]:
        if self.__env in ENVIRONMENTS:
            return self.__get_components()

        raise ValueError(f"Invalid environment: {self.__env}")

    def __get_components(self) -> dict[type[Any], Any]:
        configuration: ConfigurationInterface = Configuration(
            self.__env, environ=self.__environ
        )

        logger: LoggerInterface = Logger(
            log_format=configuration.get_configuration(
                "IMGX_LOG_FORMAT", str, default=DEFAULT_LOG_FORMAT
            ),
            log_level=self.__log_level
            or configuration.get_configuration("IMGX_LOG_LEVEL", str, default="WARNING"),
        )
        logger.get_logger("Components").debug(
            "Components bootstrapped for %s", self.__env
        )

        return {
            ConfigurationInterface: configuration,
            LoggerInterface: logger,
        }

    def get_component(self, component_name: type[T]) -> T:
        if component_name not in self.__components:
            raise ValueError(f"Component {component_name} not found")

        return cast(T, self.__components[component_name])

    @property
    def env(self) -> str:
        return self.__env
