"""Tests for per-thread locale acquisition and scoping."""

from typing import Any

import pytest

from native_locale.bridge import context
from native_locale.bridge.libc import LC_GLOBAL_LOCALE, get_libc
from native_locale.config import BridgeConfig, set_config
from native_locale.const import LocaleSelector
from native_locale.exceptions import LocaleUnavailableError


@pytest.fixture(autouse=True)
def _needs_locale_api() -> None:
    if not get_libc().has_locale_api:
        pytest.skip("C library has no locale_t support")


class TestAcquire:
    """Tests for acquire/release."""

    def test_utf8_selector_resolves(self) -> None:
        handle = context.acquire(LocaleSelector.UTF8_PREFERRED)
        try:
            assert handle.name in ("C.UTF-8", "en_US.UTF-8")
            assert handle.raw
            assert not handle.released
        finally:
            handle.release()

    def test_ambient_selector_uses_empty_name(self) -> None:
        handle = context.acquire(LocaleSelector.AMBIENT)
        try:
            assert handle.name == ""
        finally:
            handle.release()

    def test_release_is_idempotent(self) -> None:
        handle = context.acquire(LocaleSelector.AMBIENT)
        context.release(handle)
        context.release(handle)
        assert handle.released
        with pytest.raises(RuntimeError):
            _ = handle.raw

    def test_fallback_tried_in_order(self, monkeypatch: Any) -> None:
        libc = get_libc()
        real_newlocale = libc.newlocale
        tried: list[bytes] = []

        def _newlocale(mask: int, name: bytes, base: Any) -> Any:
            tried.append(name)
            if name == b"C.UTF-8":
                return None
            return real_newlocale(mask, name, base)

        monkeypatch.setattr(libc, "newlocale", _newlocale)
        set_config(BridgeConfig(utf8_locales=("C.UTF-8", "C")))

        handle = context.acquire(LocaleSelector.UTF8_PREFERRED)
        try:
            assert handle.name == "C"
        finally:
            handle.release()
        assert tried == [b"C.UTF-8", b"C"]

    def test_unavailable_when_no_candidate_resolves(self, unresolvable_locales: list[str]) -> None:
        with pytest.raises(LocaleUnavailableError):
            context.acquire(LocaleSelector.UTF8_PREFERRED)
        assert unresolvable_locales == ["C.UTF-8", "en_US.UTF-8"]

    def test_unknown_locale_name_is_unavailable(self) -> None:
        set_config(BridgeConfig(utf8_locales=("xx_NOWHERE.UTF-8",)))
        with pytest.raises(LocaleUnavailableError):
            context.acquire(LocaleSelector.UTF8_PREFERRED)

    def test_selector_names(self) -> None:
        assert context.selector_names(LocaleSelector.AMBIENT) == ("",)
        assert context.selector_names(LocaleSelector.UTF8_PREFERRED) == ("C.UTF-8", "en_US.UTF-8")


class TestScopedLocale:
    """Tests for the scoped_locale guard."""

    def test_installs_and_restores(self) -> None:
        before = context.current_token()
        with context.scoped_locale(LocaleSelector.UTF8_PREFERRED) as handle:
            assert handle is not None
            assert context.current_token() == handle.raw
        assert context.current_token() == before
        assert handle.released

    def test_restores_when_body_raises(self) -> None:
        before = context.current_token()
        with pytest.raises(ZeroDivisionError):
            with context.scoped_locale(LocaleSelector.AMBIENT) as handle:
                _ = 1 / 0
        assert context.current_token() == before
        assert handle is not None
        assert handle.released

    def test_required_acquisition_failure_raises(self, unresolvable_locales: list[str]) -> None:
        before = context.current_token()
        with pytest.raises(LocaleUnavailableError):
            with context.scoped_locale(LocaleSelector.AMBIENT):
                pytest.fail("body must not run")
        assert context.current_token() == before

    def test_optional_acquisition_failure_yields_none(self, unresolvable_locales: list[str]) -> None:
        before = context.current_token()
        with context.scoped_locale(LocaleSelector.AMBIENT, required=False) as handle:
            assert handle is None
            assert context.current_token() == before
        assert context.current_token() == before

    def test_restores_previous_thread_locale(self) -> None:
        """A caller's own thread-local locale survives a bridge call."""
        outer = context.acquire(LocaleSelector.UTF8_PREFERRED)
        token = context.install(outer)
        try:
            with context.scoped_locale(LocaleSelector.AMBIENT):
                assert context.current_token() != outer.raw
            assert context.current_token() == outer.raw
        finally:
            context.restore(token)
            outer.release()
        assert context.current_token() == token

    def test_install_failure_releases_handle(self, rejected_install: list[context.LocaleHandle]) -> None:
        with pytest.raises(LocaleUnavailableError):
            with context.scoped_locale(LocaleSelector.AMBIENT):
                pytest.fail("body must not run")
        assert rejected_install and rejected_install[0].released

    def test_optional_install_failure_yields_none(self, rejected_install: list[context.LocaleHandle]) -> None:
        before = context.current_token()
        with context.scoped_locale(LocaleSelector.AMBIENT, required=False) as handle:
            assert handle is None
            assert rejected_install[0].released
        assert context.current_token() == before
        assert len(rejected_install) == 1

    def test_main_thread_starts_on_global_locale(self) -> None:
        assert context.current_token() == LC_GLOBAL_LOCALE
