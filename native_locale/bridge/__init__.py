"""Locale-scoped character bridge over the C library.

This package provides the primitives the character API is built on:

- ``context``: acquire, install, restore and release a per-thread locale.
- ``codec``: one character between UTF-8 bytes and a wide character.
- ``classify``: space/blank tests and case mapping under the ambient locale.
"""

from __future__ import annotations

from .classify import is_blank_native, is_space_native, to_lower_native, to_upper_native
from .codec import decode_one, encode_one
from .context import (
    LocaleHandle,
    LocaleToken,
    acquire,
    current_token,
    install,
    release,
    restore,
    scoped_locale,
)
from .libc import LibC, clear_libc_cache, get_libc
from .types import DecodeResult, EncodeResult

__all__ = [
    "DecodeResult",
    "EncodeResult",
    "LibC",
    "LocaleHandle",
    "LocaleToken",
    "acquire",
    "clear_libc_cache",
    "current_token",
    "decode_one",
    "encode_one",
    "get_libc",
    "install",
    "is_blank_native",
    "is_space_native",
    "release",
    "restore",
    "scoped_locale",
    "to_lower_native",
    "to_upper_native",
]
