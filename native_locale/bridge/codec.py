"""Single character conversion between UTF-8 bytes and wide characters.

Both directions run under a UTF-8 locale installed for the duration of the
call, independent of the process environment:

- ``decode_one`` succeeds only when ``mbrtowc`` consumes exactly the
  requested number of bytes and the result is a Unicode code point.
- ``encode_one`` succeeds only for code points up to U+10FFFF for which
  ``wcrtomb`` reports a positive length.

Failures are reported through ``BridgeStatus``; these functions do not raise
for conversion or locale problems.
"""

from __future__ import annotations

import ctypes
import logging
import operator

from ..const import MB_LEN_MAX, UNICODE_MAX, BridgeStatus, LocaleSelector
from ..exceptions import LocaleUnavailableError
from .context import scoped_locale
from .libc import WCHAR_T, LibC, get_errno, get_libc, new_mbstate, reset_errno
from .types import DecodeResult, EncodeResult

_LOGGER = logging.getLogger(__name__)


def decode_one(data: bytes | bytearray | memoryview, length: int | None = None) -> DecodeResult:
    """Decode exactly ``length`` bytes of ``data`` into one wide character.

    Args:
        data: Buffer holding the encoded character. It is never modified.
        length: Number of bytes that must make up the character; defaults to
            ``len(data)``.

    Returns:
        ``DecodeResult`` with the code point on success, or
        ``LOCALE_UNAVAILABLE`` / ``CONVERSION_INCOMPLETE`` without one.

    Raises:
        ValueError: If ``length`` is negative or larger than the buffer.
    """
    encoded = bytes(data)
    if length is None:
        length = len(encoded)
    if length < 0 or length > len(encoded):
        raise ValueError(f"length {length} outside buffer of {len(encoded)} bytes")

    try:
        with scoped_locale(LocaleSelector.UTF8_PREFERRED):
            return _decode(get_libc(), encoded[:length], length)
    except LocaleUnavailableError as err:
        _LOGGER.debug("decode_one: %s", err)
        return DecodeResult(BridgeStatus.LOCALE_UNAVAILABLE, errno=err.errno)


def _decode(libc: LibC, encoded: bytes, length: int) -> DecodeResult:
    wc = WCHAR_T(0)
    state = new_mbstate()
    reset_errno()
    consumed = libc.mbrtowc(ctypes.byref(wc), encoded, length, state)
    # mbrtowc reports 0 for the NUL character although it consumed one byte
    if consumed == 0 and encoded == b"\x00":
        consumed = 1
    if consumed != length:
        errno = get_errno()
        _LOGGER.debug(
            "mbrtowc consumed %s of %s bytes for %r, errno=%s",
            ctypes.c_ssize_t(consumed).value,
            length,
            encoded,
            errno,
        )
        return DecodeResult(BridgeStatus.CONVERSION_INCOMPLETE, errno=errno)
    if not 0 <= wc.value <= UNICODE_MAX:
        _LOGGER.debug("mbrtowc produced out-of-range U+%04X for %r", wc.value, encoded)
        return DecodeResult(BridgeStatus.CONVERSION_INCOMPLETE)
    return DecodeResult(BridgeStatus.OK, char=wc.value)


def encode_one(char: int) -> EncodeResult:
    """Encode one wide character as UTF-8 bytes.

    Args:
        char: Code point to encode.

    Returns:
        ``EncodeResult`` with the encoded bytes on success, or
        ``LOCALE_UNAVAILABLE`` / ``ENCODING_FAILURE`` without them.

    Raises:
        ValueError: If ``char`` is negative.
    """
    char = operator.index(char)
    if char < 0:
        raise ValueError(f"code point must be non-negative, got {char}")

    try:
        with scoped_locale(LocaleSelector.UTF8_PREFERRED):
            return _encode(get_libc(), char)
    except LocaleUnavailableError as err:
        _LOGGER.debug("encode_one: %s", err)
        return EncodeResult(BridgeStatus.LOCALE_UNAVAILABLE, errno=err.errno)


def _encode(libc: LibC, char: int) -> EncodeResult:
    if char > UNICODE_MAX:
        _LOGGER.debug("U+%04X is beyond the Unicode range", char)
        return EncodeResult(BridgeStatus.ENCODING_FAILURE)
    buf = ctypes.create_string_buffer(MB_LEN_MAX)
    state = new_mbstate()
    reset_errno()
    written = libc.wcrtomb(buf, char, state)
    if written <= 0:
        errno = get_errno()
        _LOGGER.debug("wcrtomb(U+%04X) returned %s, errno=%s", char, written, errno)
        return EncodeResult(BridgeStatus.ENCODING_FAILURE, errno=errno)
    return EncodeResult(BridgeStatus.OK, data=buf.raw[:written])
