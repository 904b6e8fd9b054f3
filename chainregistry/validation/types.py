"""Fixed-size byte values (addresses and hashes) with 0x-prefixed hex text forms."""

from __future__ import annotations

import binascii
from dataclasses import dataclass

ADDRESS_LENGTH = 20
HASH_LENGTH = 32


def _as_bytes(text: str | bytes | bytearray) -> bytes:
    if isinstance(text, str):
        return text.encode("utf-8")
    return bytes(text)


def _unhex(digits: bytes) -> bytes:
    try:
        return binascii.unhexlify(digits)
    except binascii.Error as exc:
        raise ValueError(str(exc)) from exc


class _HexBytes:
    """Shared text behaviour of the fixed-size byte values."""

    raw: bytes

    def __str__(self) -> str:
        return "0x" + self.raw.hex()

    def __bytes__(self) -> bytes:
        return self.raw


def _check_length(value: _HexBytes, size: int) -> None:
    raw = bytes(value.raw)
    if len(raw) != size:
        raise ValueError(f"{type(value).__name__} must be {size} bytes, got {len(raw)}")
    object.__setattr__(value, "raw", raw)


@dataclass(frozen=True)
class Address(_HexBytes):
    """A 20-byte account address."""

    raw: bytes = bytes(ADDRESS_LENGTH)

    def __post_init__(self) -> None:
        _check_length(self, ADDRESS_LENGTH)

    @classmethod
    def parse(cls, text: str | bytes | bytearray) -> Address:
        """Parse a 42-character 0x-prefixed hex address."""
        data = _as_bytes(text)
        if len(data) != 2 + 2 * ADDRESS_LENGTH:
            raise ValueError(f"invalid address length: {len(data)}")
        if data[:2] != b"0x":
            raise ValueError(
                f"invalid address prefix: {data.decode('utf-8', errors='replace')}"
            )
        return cls(_unhex(data[2:]))

    def marshal_text(self) -> bytes:
        """Return the 0x-prefixed lower-case hex form as bytes."""
        return str(self).encode("ascii")


@dataclass(frozen=True)
class Hash(_HexBytes):
    """A 32-byte hash."""

    raw: bytes = bytes(HASH_LENGTH)

    def __post_init__(self) -> None:
        _check_length(self, HASH_LENGTH)

    @classmethod
    def parse(cls, text: str | bytes | bytearray) -> Hash:
        """Parse a 0x-prefixed hex hash; empty text gives the zero hash."""
        data = _as_bytes(text)
        if not data:
            return cls()
        if len(data) < 2 or not data.startswith(b"0x"):
            raise ValueError("hex string must have 0x prefix")
        try:
            decoded = _unhex(data[2:])
        except ValueError as exc:
            raise ValueError(f"invalid hex string: {exc}") from exc
        if len(decoded) != HASH_LENGTH:
            raise ValueError(
                f"invalid hash length: got {len(decoded)}, want {HASH_LENGTH}"
            )
        return cls(decoded)

    def marshal_text(self) -> bytes:
        """Return the 0x-prefixed lower-case hex form as bytes."""
        return str(self).encode("ascii")