"""Constants for the native locale bridge."""

from __future__ import annotations

from enum import Enum, IntEnum

DOMAIN = "native_locale"

# Configuration keys
CONF_UTF8_LOCALES = "utf8_locales"
CONF_LIBC_PATH = "libc_path"

# Environment variables read for library configuration
ENV_UTF8_LOCALES = "NATIVE_LOCALE_UTF8_LOCALES"
ENV_LIBC_PATH = "NATIVE_LOCALE_LIBC"

# Environment variables consulted by the C library for the ambient locale.
# Listed in order of precedence; only reported by diagnostics, never parsed here.
LOCALE_ENV_VARS: tuple[str, ...] = ("LC_ALL", "LC_CTYPE", "LANG")

# Default values
DEFAULT_UTF8_LOCALES: tuple[str, ...] = ("C.UTF-8", "en_US.UTF-8")
AMBIENT_LOCALE_NAME = ""

# Platform limits
MB_LEN_MAX = 16
# sizeof(mbstate_t) is 8 on glibc/musl and 128 on Darwin; allocate the larger
MBSTATE_SIZE = 128
# Largest code point UTF-8 can represent (RFC 3629)
UNICODE_MAX = 0x10FFFF


class LocaleSelector(Enum):
    """Which locale a bridge operation runs under."""

    UTF8_PREFERRED = "utf8_preferred"
    AMBIENT = "ambient"


class BridgeStatus(IntEnum):
    """Sentinel status returned by codec bridge operations."""

    OK = 0
    LOCALE_UNAVAILABLE = 1
    CONVERSION_INCOMPLETE = 2
    ENCODING_FAILURE = 3


class SpaceClass(IntEnum):
    """Tri-state outcome of a native space classification."""

    UNAVAILABLE = -1
    NOT_SPACE = 0
    SPACE = 1
