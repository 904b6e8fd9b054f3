"""Known contract release tags and the standard contract versions for each."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any

from chainregistry.validation.types import Address


class Semver(StrEnum):
    """Contract release tags recognised by the registry."""

    V1_3_0 = "op-contracts/v1.3.0"
    V1_4_0 = "op-contracts/v1.4.0"
    V1_6_0 = "op-contracts/v1.6.0"
    V1_7_0 = "op-contracts/v1.7.0-beta.1+l2-contracts"
    V1_8_0 = "op-contracts/v1.8.0-rc.4"
    V2_0_0 = "op-contracts/v2.0.0"
    V3_0_0 = "op-contracts/v3.0.0"
    V4_0_0 = "op-contracts/v4.0.0-rc.8"


_VALID_SEMVERS = frozenset(member.value for member in Semver)


def is_valid_contract_semver(s: str) -> bool:
    """Tell whether s is one of the known release tags."""
    return s in _VALID_SEMVERS


def _optional_address(data: Mapping[str, Any], key: str) -> Address | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected an address string, got {value!r}")
    return Address.parse(value)


@dataclass(frozen=True)
class ContractData:
    """The version and addresses recorded for one contract."""

    version: str = ""
    address: Address | None = None
    implementation_address: Address | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContractData:
        version = data.get("version", "")
        if not isinstance(version, str):
            raise ValueError(f"version: expected a string, got {version!r}")
        return cls(
            version=version,
            address=_optional_address(data, "address"),
            implementation_address=_optional_address(data, "implementation_address"),
        )


@dataclass(frozen=True)
class VersionConfig:
    """All contracts belonging to one release."""

    optimism_portal: ContractData | None = None
    system_config: ContractData | None = None
    anchor_state_registry: ContractData | None = None
    delayed_weth: ContractData | None = None
    dispute_game_factory: ContractData | None = None
    fault_dispute_game: ContractData | None = None
    permissioned_dispute_game: ContractData | None = None
    mips: ContractData | None = None
    preimage_oracle: ContractData | None = None
    l1_cross_domain_messenger: ContractData | None = None
    l1_erc721_bridge: ContractData | None = None
    l1_standard_bridge: ContractData | None = None
    l2_output_oracle: ContractData | None = None
    optimism_mintable_erc20_factory: ContractData | None = None
    op_contracts_manager: ContractData | None = None
    superchain_config: ContractData | None = None
    protocol_versions: ContractData | None = None
    eth_lockbox: ContractData | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VersionConfig:
        values: dict[str, ContractData | None] = {}
        for f in fields(cls):
            entry = data.get(f.name)
            if entry is None:
                values[f.name] = None
            elif isinstance(entry, Mapping):
                values[f.name] = ContractData.from_dict(entry)
            else:
                raise ValueError(f"{f.name}: expected a table, got {entry!r}")
        return cls(**values)


def load_versions(text: str | bytes) -> dict[str, VersionConfig]:
    """Parse a release-tag-to-contracts TOML document."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8")
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"failed to unmarshal standard versions: {exc}") from exc
    versions: dict[str, VersionConfig] = {}
    for tag, entry in data.items():
        if not isinstance(entry, Mapping):
            raise ValueError(f"{tag}: expected a table, got {entry!r}")
        versions[tag] = VersionConfig.from_dict(entry)
    return versions