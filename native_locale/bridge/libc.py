"""ctypes binding to the C library locale and wide character API."""

from __future__ import annotations

import ctypes
import ctypes.util
from functools import lru_cache
import logging
import sys
from typing import Any

from ..config import get_config
from ..const import MBSTATE_SIZE

_LOGGER = logging.getLogger(__name__)

# wchar_t is a 32-bit signed int on glibc, musl and Darwin
WCHAR_T: type[Any] = ctypes.c_int32 if ctypes.sizeof(ctypes.c_wchar) == 4 else ctypes.c_uint16
WINT_T: type[Any] = ctypes.c_uint32

# (locale_t)-1 as an unsigned pointer value
LC_GLOBAL_LOCALE = (1 << (8 * ctypes.sizeof(ctypes.c_void_p))) - 1


def _lc_ctype_mask(platform: str) -> int:
    """Return LC_CTYPE_MASK for the running C library."""
    if platform == "darwin" or platform.startswith(("freebsd", "openbsd", "netbsd", "dragonfly")):
        return 1 << 1
    # glibc and musl: LC_CTYPE == 0
    return 1 << 0


LC_CTYPE_MASK = _lc_ctype_mask(sys.platform)

_LOCALE_API = ("newlocale", "uselocale", "freelocale")


class LibC:
    """Typed view of the C library functions used by the bridge."""

    def __init__(self, cdll: ctypes.CDLL, path: str | None) -> None:
        self.path = path
        self.lc_ctype_mask = LC_CTYPE_MASK
        self.has_locale_api = all(hasattr(cdll, name) for name in _LOCALE_API)

        if self.has_locale_api:
            self.newlocale = cdll.newlocale
            self.newlocale.argtypes = [ctypes.c_int, ctypes.c_char_p, ctypes.c_void_p]
            self.newlocale.restype = ctypes.c_void_p

            self.uselocale = cdll.uselocale
            self.uselocale.argtypes = [ctypes.c_void_p]
            self.uselocale.restype = ctypes.c_void_p

            self.freelocale = cdll.freelocale
            self.freelocale.argtypes = [ctypes.c_void_p]
            self.freelocale.restype = None
        else:
            _LOGGER.warning(
                "C library %s lacks newlocale/uselocale/freelocale; locale scoping unavailable",
                path,
            )

        self.mbrtowc = cdll.mbrtowc
        self.mbrtowc.argtypes = [
            ctypes.POINTER(WCHAR_T),
            ctypes.c_char_p,
            ctypes.c_size_t,
            ctypes.c_char_p,
        ]
        self.mbrtowc.restype = ctypes.c_size_t

        self.wcrtomb = cdll.wcrtomb
        self.wcrtomb.argtypes = [ctypes.c_char_p, WCHAR_T, ctypes.c_char_p]
        self.wcrtomb.restype = ctypes.c_ssize_t

        for name in ("iswspace", "iswblank"):
            func = getattr(cdll, name)
            func.argtypes = [WINT_T]
            func.restype = ctypes.c_int
            setattr(self, name, func)

        for name in ("towupper", "towlower"):
            func = getattr(cdll, name)
            func.argtypes = [WINT_T]
            func.restype = WINT_T
            setattr(self, name, func)

        for name in ("isspace", "isblank"):
            func = getattr(cdll, name)
            func.argtypes = [ctypes.c_int]
            func.restype = ctypes.c_int
            setattr(self, name, func)

    def __repr__(self) -> str:
        return f"LibC(path={self.path!r}, has_locale_api={self.has_locale_api})"


def new_mbstate() -> ctypes.Array[ctypes.c_char]:
    """Allocate a zero-initialised mbstate_t."""
    return ctypes.create_string_buffer(MBSTATE_SIZE)


@lru_cache(maxsize=4)
def _load_libc(path: str | None) -> LibC:
    resolved = path or ctypes.util.find_library("c")
    _LOGGER.debug("Loading C library from %s", resolved)
    return LibC(ctypes.CDLL(resolved, use_errno=True), resolved)


def get_libc() -> LibC:
    """Return the C library binding for the configured path (cached).

    Raises:
        OSError: If the C library cannot be loaded.
    """
    return _load_libc(get_config().libc_path)


def clear_libc_cache() -> None:
    """Drop cached bindings so the next call reloads the C library."""
    _load_libc.cache_clear()


def get_errno() -> int:
    """Return the C errno saved by the last call through this binding."""
    return ctypes.get_errno()


def reset_errno() -> None:
    ctypes.set_errno(0)
