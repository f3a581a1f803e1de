"""Result types returned by the codec bridge."""

from __future__ import annotations

from dataclasses import dataclass

from ..const import BridgeStatus


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of ``decode_one``; ``char`` is set only when ``status`` is OK."""

    status: BridgeStatus
    char: int | None = None
    errno: int = 0

    @property
    def ok(self) -> bool:
        return self.status is BridgeStatus.OK


@dataclass(frozen=True)
class EncodeResult:
    """Outcome of ``encode_one``; ``data`` is set only when ``status`` is OK."""

    status: BridgeStatus
    data: bytes | None = None
    errno: int = 0

    @property
    def ok(self) -> bool:
        return self.status is BridgeStatus.OK

    @property
    def length(self) -> int:
        """Number of encoded bytes, 0 on failure."""
        return len(self.data) if self.data is not None else 0
