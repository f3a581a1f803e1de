"""Wide character classification and case mapping under the ambient locale.

Every call loads the locale named by the environment at that moment
(``LC_ALL``, ``LC_CTYPE``, ``LANG``), so environment changes between calls
are picked up. Results follow the locale's tables, not Unicode
properties: U+1361 is a space under ``am_ET`` only, and ``i`` upper-cases
to U+0130 under ``tr_TR``.

``is_space_native`` reports a missing locale as ``SpaceClass.UNAVAILABLE``.
The blank and case functions do not: they fall back to the C library's
answer under the thread's current locale.
"""

from __future__ import annotations

import logging
import operator

from ..const import LocaleSelector, SpaceClass
from ..exceptions import LocaleUnavailableError
from .context import scoped_locale
from .libc import get_libc

_LOGGER = logging.getLogger(__name__)


def is_space_native(char: int) -> SpaceClass:
    """Classify ``char`` as whitespace under the ambient locale."""
    char = operator.index(char)
    libc = get_libc()
    try:
        with scoped_locale(LocaleSelector.AMBIENT):
            result = libc.iswspace(char)
    except LocaleUnavailableError as err:
        _LOGGER.debug("is_space_native(U+%04X): %s", char, err)
        return SpaceClass.UNAVAILABLE
    return SpaceClass.SPACE if result else SpaceClass.NOT_SPACE


def is_blank_native(char: int) -> bool:
    """Return whether ``char`` is a word-separating blank under the ambient locale."""
    char = operator.index(char)
    libc = get_libc()
    with scoped_locale(LocaleSelector.AMBIENT, required=False):
        return bool(libc.iswblank(char))


def to_upper_native(char: int) -> int:
    """Map ``char`` to upper case; unmapped characters are returned unchanged."""
    char = operator.index(char)
    libc = get_libc()
    with scoped_locale(LocaleSelector.AMBIENT, required=False):
        return int(libc.towupper(char))


def to_lower_native(char: int) -> int:
    """Map ``char`` to lower case; unmapped characters are returned unchanged."""
    char = operator.index(char)
    libc = get_libc()
    with scoped_locale(LocaleSelector.AMBIENT, required=False):
        return int(libc.towlower(char))
