from collections.abc import Callable, Generator
import sys
from typing import Any

import pytest

from native_locale.bridge.libc import clear_libc_cache, get_libc
from native_locale.config import set_config

if sys.platform == "win32":
    collect_ignore_glob = ["test_*.py"]


@pytest.fixture(autouse=True)
def reset_bridge_state() -> Generator[None, None, None]:
    """Start every test from a fresh config and C library binding."""
    set_config(None)
    clear_libc_cache()
    yield
    set_config(None)
    clear_libc_cache()


def locale_available(name: str) -> bool:
    """Return whether the host can load ``name`` for LC_CTYPE."""
    libc = get_libc()
    if not libc.has_locale_api:
        return False
    raw = libc.newlocale(libc.lc_ctype_mask, name.encode("ascii"), None)
    if not raw:
        return False
    libc.freelocale(raw)
    return True


@pytest.fixture
def require_locale() -> Callable[[str], None]:
    """Skip the test unless the given locale is installed."""

    def _require(name: str) -> None:
        if not locale_available(name):
            pytest.skip(f"locale {name!r} not installed on this host")

    return _require


@pytest.fixture
def ambient_locale(monkeypatch: Any, require_locale: Callable[[str], None]) -> Callable[[str], None]:
    """Point LC_ALL at a locale for the rest of the test."""

    def _set(name: str) -> None:
        if name not in ("C", "POSIX"):
            require_locale(name)
        monkeypatch.setenv("LC_ALL", name)

    return _set


@pytest.fixture
def unresolvable_locales(monkeypatch: Any) -> list[str]:
    """Make newlocale fail for every name; returns the names that were tried."""
    libc = get_libc()
    if not libc.has_locale_api:
        pytest.skip("C library has no locale_t support")
    tried: list[str] = []

    def _newlocale(mask: int, name: bytes, base: Any) -> None:
        tried.append(name.decode("ascii"))
        return None

    monkeypatch.setattr(libc, "newlocale", _newlocale)
    return tried


@pytest.fixture
def rejected_install(monkeypatch: Any) -> list[Any]:
    """Make uselocale refuse every handle; returns the handles acquired."""
    from native_locale.bridge import context

    libc = get_libc()
    if not libc.has_locale_api:
        pytest.skip("C library has no locale_t support")
    real_uselocale = libc.uselocale
    real_acquire = context.acquire
    handles: list[Any] = []

    def _acquire(*args: Any, **kwargs: Any) -> Any:
        handle = real_acquire(*args, **kwargs)
        handles.append(handle)
        return handle

    def _uselocale(loc: Any) -> Any:
        if loc is None:
            return real_uselocale(loc)
        return None

    monkeypatch.setattr(context, "acquire", _acquire)
    monkeypatch.setattr(libc, "uselocale", _uselocale)
    return handles
