"""Library configuration for the native locale bridge."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
import os
from typing import Any

import voluptuous as vol

from .const import (
    CONF_LIBC_PATH,
    CONF_UTF8_LOCALES,
    DEFAULT_UTF8_LOCALES,
    ENV_LIBC_PATH,
    ENV_UTF8_LOCALES,
)

_LOGGER = logging.getLogger(__name__)


def _locale_list(value: Any) -> list[str]:
    """Accept a comma separated string or a sequence of locale names."""
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        raise vol.Invalid("expected a list of locale names")
    return [str(name).strip() for name in value]


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_UTF8_LOCALES, default=list(DEFAULT_UTF8_LOCALES)): vol.All(
            _locale_list,
            [vol.All(str, vol.Length(min=1))],
            vol.Length(min=1),
            vol.Coerce(tuple),
        ),
        vol.Optional(CONF_LIBC_PATH, default=None): vol.Any(
            None, vol.All(str, vol.Length(min=1))
        ),
    }
)


@dataclass(frozen=True)
class BridgeConfig:
    """Configuration shared by all bridge operations.

    ``utf8_locales`` is the ordered fallback chain tried when acquiring the
    UTF-8 locale. ``libc_path`` overrides the C library to bind; ``None``
    lets ``ctypes.util.find_library`` pick it.
    """

    utf8_locales: tuple[str, ...] = DEFAULT_UTF8_LOCALES
    libc_path: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BridgeConfig:
        """Validate a raw mapping and build a config from it."""
        validated = CONFIG_SCHEMA(dict(data))
        return cls(
            utf8_locales=validated[CONF_UTF8_LOCALES],
            libc_path=validated[CONF_LIBC_PATH],
        )


def config_from_env(environ: Mapping[str, str] | None = None) -> BridgeConfig:
    """Build a config from ``NATIVE_LOCALE_*`` environment variables.

    Args:
        environ: Environment to read, defaults to ``os.environ``.

    Returns:
        Validated configuration.

    Raises:
        voluptuous.Invalid: If a variable holds an unusable value.
    """
    env = os.environ if environ is None else environ
    raw: dict[str, Any] = {}
    if env.get(ENV_UTF8_LOCALES):
        raw[CONF_UTF8_LOCALES] = env[ENV_UTF8_LOCALES]
    if env.get(ENV_LIBC_PATH):
        raw[CONF_LIBC_PATH] = env[ENV_LIBC_PATH]
    return BridgeConfig.from_mapping(raw)


_CONFIG: BridgeConfig | None = None


def get_config() -> BridgeConfig:
    """Return the active configuration, loading it from the environment once."""
    global _CONFIG  # noqa: PLW0603
    if _CONFIG is None:
        _CONFIG = config_from_env()
        _LOGGER.debug("Loaded bridge config: %s", _CONFIG)
    return _CONFIG


def set_config(config: BridgeConfig | None) -> None:
    """Replace the active configuration; ``None`` reloads from the environment on next use."""
    global _CONFIG  # noqa: PLW0603
    _CONFIG = config
