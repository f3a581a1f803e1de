"""Locale-aware character handling backed by the C library.

This package classifies and case-converts characters using the locale
named by the process environment, and converts single characters between
UTF-8 bytes and wide characters under a fixed UTF-8 locale.

Locale Scoping:
---------------
Every operation installs its locale on the calling thread only, for the
duration of the call, and reinstalls the previous context on every exit
path. Concurrent calls from different threads do not interfere. Calling
into the bridge from a signal handler that interrupted another bridge
call on the same thread is undefined.

Requires a C library with ``newlocale``/``uselocale``/``freelocale``
(glibc, musl, macOS).
"""

from __future__ import annotations

from .bridge import (
    DecodeResult,
    EncodeResult,
    decode_one,
    encode_one,
    is_blank_native,
    is_space_native,
    scoped_locale,
    to_lower_native,
    to_upper_native,
)
from .config import BridgeConfig, config_from_env, get_config, set_config
from .const import BridgeStatus, LocaleSelector, SpaceClass
from .ctype import is_blank, is_space, to_lower, to_upper
from .diagnostics import get_diagnostics
from .exceptions import (
    ConversionIncompleteError,
    EncodingFailureError,
    LocaleUnavailableError,
    NativeLocaleError,
)

__all__ = [
    "BridgeConfig",
    "BridgeStatus",
    "ConversionIncompleteError",
    "DecodeResult",
    "EncodeResult",
    "EncodingFailureError",
    "LocaleSelector",
    "LocaleUnavailableError",
    "NativeLocaleError",
    "SpaceClass",
    "config_from_env",
    "decode_one",
    "encode_one",
    "get_config",
    "get_diagnostics",
    "is_blank",
    "is_blank_native",
    "is_space",
    "is_space_native",
    "scoped_locale",
    "set_config",
    "to_lower",
    "to_lower_native",
    "to_upper",
    "to_upper_native",
]
