import os
from collections.abc import Mapping
from typing import Any, TypeVar, cast

from imgx.components.configuration.configuration_interface import (
    ConfigurationInterface,
)

T = TypeVar("T")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigurationError(KeyError):
    """Raised when a required key is missing or cannot be converted."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class Configuration(ConfigurationInterface):
    """
    Environment-backed configuration.

    Values are read from ``environ`` (``os.environ`` by default, after
    ``load_dotenv`` has merged any ``.env`` file) and converted to the
    requested type. Empty strings count as unset.
    """

    def __init__(self, env: str, environ: Mapping[str, str] | None = None) -> None:
        self.env = env
        self._environ: Mapping[str, str] = environ if environ is not None else os.environ

    def get_configuration(self, key: str, type_: type[T], default: Any = ...) -> T:
        raw = self._environ.get(key, "").strip()
        if not raw:
            if default is ...:
                raise ConfigurationError(f"Missing configuration value: {key}")
            return cast(T, default)

        try:
            return self._convert(raw, type_)
        except ValueError as exc:
            raise ConfigurationError(
                f"Invalid value for {key}: {raw!r} ({exc})"
            ) from exc

    @staticmethod
    def _convert(raw: str, type_: type[T]) -> T:
        if type_ is bool:
            lowered = raw.lower()
            if lowered in _TRUE_VALUES:
                return cast(T, True)
            if lowered in _FALSE_VALUES:
                return cast(T, False)
            raise ValueError("expected a boolean")
        return cast(T, cast(Any, type_)(raw))
