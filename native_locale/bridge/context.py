"""Scoped installation of per-thread locale contexts.

A bridge operation never changes the locale seen by code outside of it:
``scoped_locale`` acquires a ``locale_t`` with ``newlocale(3)``, installs it
on the calling thread with ``uselocale(3)`` and, on every exit path,
reinstalls the context that was active before and frees the handle.

Only the calling thread is affected. Entering ``scoped_locale`` again on
the same thread from a signal handler while another bridge call is in
progress is undefined.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging

from ..config import get_config
from ..const import AMBIENT_LOCALE_NAME, LocaleSelector
from ..exceptions import LocaleUnavailableError
from .libc import LibC, get_errno, get_libc, reset_errno

_LOGGER = logging.getLogger(__name__)

# Opaque value returned by uselocale(); LC_GLOBAL_LOCALE when no
# thread-local locale was installed.
LocaleToken = int


class LocaleHandle:
    """Owned ``locale_t`` for one category mask.

    Belongs to the call that acquired it and is freed exactly once;
    calling ``release`` again is a no-op.
    """

    __slots__ = ("_libc", "_raw", "name", "category_mask")

    def __init__(self, libc: LibC, raw: int, name: str, category_mask: int) -> None:
        self._libc = libc
        self._raw: int | None = raw
        self.name = name
        self.category_mask = category_mask

    @property
    def raw(self) -> int:
        """Return the underlying ``locale_t`` pointer value."""
        if self._raw is None:
            raise RuntimeError(f"Locale handle {self.name!r} already released")
        return self._raw

    @property
    def released(self) -> bool:
        return self._raw is None

    def release(self) -> None:
        """Free the handle."""
        if self._raw is None:
            return
        raw, self._raw = self._raw, None
        self._libc.freelocale(raw)

    def __repr__(self) -> str:
        state = "released" if self.released else "held"
        return f"LocaleHandle(name={self.name!r}, mask={self.category_mask:#x}, {state})"


def selector_names(selector: LocaleSelector) -> tuple[str, ...]:
    """Return the locale names tried, in order, for a selector."""
    if selector is LocaleSelector.UTF8_PREFERRED:
        return get_config().utf8_locales
    return (AMBIENT_LOCALE_NAME,)


def acquire(selector: LocaleSelector, category_mask: int | None = None) -> LocaleHandle:
    """Load a locale handle for the selector.

    For ``UTF8_PREFERRED`` each configured name is tried in order until one
    resolves. ``AMBIENT`` uses the empty name, so the C library resolves it
    from the process environment at this moment.

    Args:
        selector: Which locale to load.
        category_mask: ``LC_*_MASK`` bits; defaults to ``LC_CTYPE_MASK``.

    Returns:
        A handle the caller must release.

    Raises:
        LocaleUnavailableError: If no candidate name resolves on this host.
    """
    libc = get_libc()
    if not libc.has_locale_api:
        raise LocaleUnavailableError(f"C library {libc.path} has no locale_t support")

    mask = libc.lc_ctype_mask if category_mask is None else category_mask
    names = selector_names(selector)
    errno = 0
    for index, name in enumerate(names):
        reset_errno()
        raw = libc.newlocale(mask, name.encode("ascii"), None)
        if raw:
            if index:
                _LOGGER.debug("Locale %r unavailable, using fallback %r", names[0], name)
            return LocaleHandle(libc, raw, name, mask)
        errno = get_errno()
        _LOGGER.debug("newlocale(%#x, %r) failed, errno=%s", mask, name, errno)

    raise LocaleUnavailableError(
        f"No locale available for {selector.value} (tried {', '.join(map(repr, names))})",
        errno=errno,
    )


def install(handle: LocaleHandle) -> LocaleToken:
    """Make ``handle`` the calling thread's locale and return the previous one.

    Raises:
        LocaleUnavailableError: If ``uselocale`` rejects the handle.
    """
    libc = handle._libc
    reset_errno()
    previous = libc.uselocale(handle.raw)
    if not previous:
        raise LocaleUnavailableError(f"uselocale rejected {handle!r}", errno=get_errno())
    return previous


def restore(token: LocaleToken) -> None:
    """Reinstall the context captured by ``install``."""
    get_libc().uselocale(token)


def release(handle: LocaleHandle) -> None:
    """Free a handle returned by ``acquire``."""
    handle.release()


def current_token() -> LocaleToken:
    """Return the calling thread's active context without changing it."""
    libc = get_libc()
    if not libc.has_locale_api:
        raise LocaleUnavailableError(f"C library {libc.path} has no locale_t support")
    return libc.uselocale(None)


@contextmanager
def scoped_locale(
    selector: LocaleSelector,
    *,
    category_mask: int | None = None,
    required: bool = True,
) -> Iterator[LocaleHandle | None]:
    """Run the body with the selected locale installed on this thread.

    Restore and release happen in ``finally`` blocks, so they run whether the
    body returns, raises or the generator is closed early.

    Args:
        selector: Which locale to install.
        category_mask: ``LC_*_MASK`` bits; defaults to ``LC_CTYPE_MASK``.
        required: When False, a failure to acquire or install the locale
            yields ``None`` and the body runs under the thread's current
            context instead of raising.

    Raises:
        LocaleUnavailableError: If acquisition or installation fails and
            ``required`` is True.
    """
    try:
        handle = acquire(selector, category_mask)
    except LocaleUnavailableError as err:
        if required:
            raise
        _LOGGER.debug("Running under current locale: %s", err)
        yield None
        return

    try:
        try:
            token = install(handle)
        except LocaleUnavailableError as err:
            if required:
                raise
            handle.release()
            _LOGGER.debug("Running under current locale: %s", err)
            yield None
            return
        try:
            yield handle
        finally:
            restore(token)
    finally:
        release(handle)
