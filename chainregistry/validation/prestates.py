"""Standard fault-proof absolute prestates."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from chainregistry.validation.types import Hash


@dataclass(frozen=True)
class Prestate:
    """One prestate build: its VM type and its hash."""

    type: str = ""
    hash: Hash = field(default_factory=Hash)

    @classmethod
    def _from_dict(cls, data: Any) -> Prestate:
        if not isinstance(data, Mapping):
            raise ValueError(f"prestate: expected a table, got {data!r}")
        kind = data.get("type", "")
        digest = data.get("hash", "")
        if not isinstance(kind, str) or not isinstance(digest, str):
            raise ValueError(f"prestate: type and hash must be strings, got {dict(data)!r}")
        return cls(type=kind, hash=Hash.parse(digest))


@dataclass(frozen=True)
class Prestates:
    """Prestates grouped by release, with the latest candidate and stable release names."""

    latest_rc: str = ""
    latest_stable: str = ""
    prestates: dict[str, list[Prestate]] = field(default_factory=dict)

    def stable_prestate(self) -> Prestate:
        """Return the first prestate of the latest stable release."""
        return self.prestates[self.latest_stable][0]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Prestates:
        latest_rc = data.get("latest_rc", "")
        latest_stable = data.get("latest_stable", "")
        if not isinstance(latest_rc, str) or not isinstance(latest_stable, str):
            raise ValueError("latest_rc and latest_stable must be strings")
        table = data.get("prestates", {})
        if not isinstance(table, Mapping):
            raise ValueError("prestates: expected a table")
        grouped: dict[str, list[Prestate]] = {}
        for release, entries in table.items():
            if not isinstance(entries, list):
                raise ValueError(f"prestates.{release}: expected an array of tables")
            grouped[release] = [Prestate._from_dict(entry) for entry in entries]
        return cls(latest_rc=latest_rc, latest_stable=latest_stable, prestates=grouped)


def load_prestates(text: str | bytes) -> Prestates:
    """Parse standard prestates from TOML text and check the latest releases exist."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8")
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"failed to unmarshal standard prestates: {exc}") from exc
    result = Prestates.from_dict(data)
    if result.latest_rc not in result.prestates:
        raise ValueError("latest RC prestate not found in standard prestates")
    if result.latest_stable not in result.prestates:
        raise ValueError("latest stable prestate not found in standard prestates")
    return result