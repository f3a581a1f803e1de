"""Diagnostics describing how the bridge resolves locales on this host."""

from __future__ import annotations

import os
import sys
from typing import Any

from .bridge.context import acquire, current_token
from .bridge.libc import LC_GLOBAL_LOCALE, get_libc
from .config import get_config
from .const import (
    CONF_LIBC_PATH,
    CONF_UTF8_LOCALES,
    LOCALE_ENV_VARS,
    LocaleSelector,
)
from .exceptions import LocaleUnavailableError


def _resolved_name(selector: LocaleSelector) -> str | None:
    """Return the locale name a selector resolves to, or None."""
    try:
        handle = acquire(selector)
    except LocaleUnavailableError:
        return None
    try:
        return handle.name
    finally:
        handle.release()


def get_diagnostics() -> dict[str, Any]:
    """Return diagnostic information about the bridge on this host."""
    config = get_config()
    libc = get_libc()

    runtime: dict[str, Any] = {
        "libc_path": libc.path,
        "has_locale_api": libc.has_locale_api,
        "lc_ctype_mask": libc.lc_ctype_mask,
        "utf8_locale": None,
        "ambient_available": False,
        "thread_locale_installed": None,
    }
    if libc.has_locale_api:
        runtime["utf8_locale"] = _resolved_name(LocaleSelector.UTF8_PREFERRED)
        runtime["ambient_available"] = _resolved_name(LocaleSelector.AMBIENT) is not None
        runtime["thread_locale_installed"] = current_token() != LC_GLOBAL_LOCALE

    return {
        "platform": sys.platform,
        "config": {
            CONF_UTF8_LOCALES: list(config.utf8_locales),
            CONF_LIBC_PATH: config.libc_path,
        },
        "environment": {name: os.environ.get(name) for name in LOCALE_ENV_VARS},
        "runtime": runtime,
    }
