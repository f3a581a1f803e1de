"""Exceptions raised by the native locale package."""

from __future__ import annotations

import os

from .const import BridgeStatus


class NativeLocaleError(Exception):
    """Base error for locale bridge failures.

    Carries the bridge status and the C ``errno`` observed when the failure
    was detected (0 when the C library did not set one).
    """

    status: BridgeStatus = BridgeStatus.OK

    def __init__(self, message: str, *, errno: int = 0) -> None:
        self.errno = errno
        if errno:
            message = f"{message} (errno={errno}: {os.strerror(errno)})"
        super().__init__(message)


class LocaleUnavailableError(NativeLocaleError):
    """The requested or ambient locale could not be loaded on this host."""

    status = BridgeStatus.LOCALE_UNAVAILABLE


class ConversionIncompleteError(NativeLocaleError):
    """A byte sequence did not decode to exactly one wide character."""

    status = BridgeStatus.CONVERSION_INCOMPLETE


class EncodingFailureError(NativeLocaleError):
    """A wide character could not be encoded."""

    status = BridgeStatus.ENCODING_FAILURE


_STATUS_TO_ERROR: dict[BridgeStatus, type[NativeLocaleError]] = {
    BridgeStatus.LOCALE_UNAVAILABLE: LocaleUnavailableError,
    BridgeStatus.CONVERSION_INCOMPLETE: ConversionIncompleteError,
    BridgeStatus.ENCODING_FAILURE: EncodingFailureError,
}


def raise_for_status(status: BridgeStatus, *, operation: str, errno: int = 0) -> None:
    """Raise the exception matching a non-OK bridge status.

    Args:
        status: Status returned by a bridge operation.
        operation: Short name of the failed operation, used in the message.
        errno: C errno captured by the bridge, if any.

    Raises:
        NativeLocaleError: The subclass mapped to ``status``.
    """
    status = BridgeStatus(status)
    if status is BridgeStatus.OK:
        return
    error_cls = _STATUS_TO_ERROR[status]
    raise error_cls(f"{operation} failed. status={int(status)}", errno=errno)
