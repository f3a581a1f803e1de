"""Locale-aware character classification and case conversion.

These functions answer the same questions as ``str.isspace``,
``str.upper`` and ``str.lower``, but using the C library's tables for the
locale named by the environment (``LC_ALL``, ``LC_CTYPE``, ``LANG``)
rather than Unicode properties.

Character Flow:
---------------
1. The character is encoded as UTF-8.
2. Single-byte characters are classified with ``isspace``/``isblank``
   directly.
3. Other characters are decoded to a wide character under a UTF-8 locale,
   classified or case-mapped under the ambient locale, and (for case
   mapping) encoded back to UTF-8 under a UTF-8 locale.

Only 1:1 mappings are possible: ``to_upper("ß")`` cannot produce "SS".

Bridge failures raise a ``NativeLocaleError`` subclass.
"""

from __future__ import annotations

from .bridge.classify import is_blank_native, is_space_native, to_lower_native, to_upper_native
from .bridge.codec import decode_one, encode_one
from .bridge.libc import get_libc
from .const import SpaceClass
from .exceptions import (
    ConversionIncompleteError,
    EncodingFailureError,
    LocaleUnavailableError,
    raise_for_status,
)


def _utf8_bytes(ch: str) -> bytes:
    """Encode a single character, rejecting anything else."""
    if not isinstance(ch, str) or len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    try:
        return ch.encode("utf-8")
    except UnicodeEncodeError as err:
        raise ValueError(f"lone surrogate {ch!r} is not a character") from err


def _to_wide(encoded: bytes) -> int:
    result = decode_one(encoded)
    raise_for_status(result.status, operation="utf8towc", errno=result.errno)
    if result.char is None:
        raise ConversionIncompleteError("utf8towc returned no character")
    return result.char


def _to_char(wc: int) -> str:
    result = encode_one(wc)
    raise_for_status(result.status, operation="wctoutf8", errno=result.errno)
    if result.data is None:
        raise EncodingFailureError("wctoutf8 returned no bytes")
    return result.data.decode("utf-8")[0]


def is_space(ch: str) -> bool:
    """Return whether ``ch`` is whitespace.

    Whitespace is space, form feed, line feed, carriage return, horizontal
    and vertical tab, plus whatever the current locale adds.

    Args:
        ch: A single character.

    Returns:
        True if the locale classifies ``ch`` as whitespace.

    Raises:
        ValueError: If ``ch`` is not exactly one character.
        NativeLocaleError: If the character cannot be converted or the
            ambient locale cannot be loaded.
    """
    encoded = _utf8_bytes(ch)
    if len(encoded) == 1:
        return bool(get_libc().isspace(encoded[0]))

    space = is_space_native(_to_wide(encoded))
    if space is SpaceClass.UNAVAILABLE:
        raise LocaleUnavailableError("iswspace_native failed: ambient locale unavailable")
    return space is SpaceClass.SPACE


def is_blank(ch: str) -> bool:
    """Return whether ``ch`` separates words within a line (space, tab, ...).

    Args:
        ch: A single character.

    Returns:
        True if the locale classifies ``ch`` as blank.
    """
    encoded = _utf8_bytes(ch)
    if len(encoded) == 1:
        return bool(get_libc().isblank(encoded[0]))
    return is_blank_native(_to_wide(encoded))


def to_upper(ch: str) -> str:
    """Convert ``ch`` to the upper case listed by the current locale.

    Returns ``ch`` unchanged when the locale lists no upper case form.
    """
    upper = to_upper_native(_to_wide(_utf8_bytes(ch)))
    return _to_char(upper)


def to_lower(ch: str) -> str:
    """Convert ``ch`` to the lower case listed by the current locale.

    Returns ``ch`` unchanged when the locale lists no lower case form.
    """
    lower = to_lower_native(_to_wide(_utf8_bytes(ch)))
    return _to_char(lower)
