"""Standard configuration parameter bounds and standard role holders."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from chainregistry.validation.types import Address


def _table(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise ValueError(f"{key}: expected a table, got {type(value).__name__}")
    return value


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key}: expected an integer, got {value!r}")
    return value


def _uint(data: Mapping[str, Any], key: str, bits: int) -> int:
    value = _int(data, key)
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{key}: {value} does not fit in uint{bits}")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected a string, got {value!r}")
    return value


def _address(data: Mapping[str, Any], key: str) -> Address:
    value = data.get(key)
    if value is None:
        return Address()
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected an address string, got {value!r}")
    return Address.parse(value)


def _loads(text: str | bytes, what: str) -> dict[str, Any]:
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8")
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"failed to unmarshal {what}: {exc}") from exc


@dataclass(frozen=True)
class Range:
    """An inclusive integer interval."""

    low: int = 0
    high: int = 0

    def within_range(self, v: int) -> bool:
        return self.low <= v <= self.high

    @classmethod
    def _from_field(cls, data: Mapping[str, Any], key: str) -> Range:
        value = data.get(key)
        if value is None:
            return cls()
        if not isinstance(value, list) or len(value) != 2:
            raise ValueError(f"{key}: expected an array of two integers, got {value!r}")
        low, high = value
        for bound in (low, high):
            if isinstance(bound, bool) or not isinstance(bound, int):
                raise ValueError(f"{key}: expected integers, got {value!r}")
        return cls(low, high)


@dataclass(frozen=True)
class RollupConfigParams:
    seq_window_size: Range = field(default_factory=Range)
    block_time: Range = field(default_factory=Range)

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> RollupConfigParams:
        return cls(
            seq_window_size=Range._from_field(data, "seq_window_size"),
            block_time=Range._from_field(data, "block_time"),
        )


@dataclass(frozen=True)
class OptimismPortal2Params:
    proof_maturity_delay_seconds: Range = field(default_factory=Range)
    dispute_game_finality_delay_seconds: Range = field(default_factory=Range)
    respected_game_type: int = 0

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> OptimismPortal2Params:
        return cls(
            proof_maturity_delay_seconds=Range._from_field(
                data, "proof_maturity_delay_seconds"
            ),
            dispute_game_finality_delay_seconds=Range._from_field(
                data, "dispute_game_finality_delay_seconds"
            ),
            respected_game_type=_int(data, "respected_game_type"),
        )


@dataclass(frozen=True)
class ResourceConfigParams:
    max_resource_limit: int = 0
    elasticity_multiplier: int = 0
    base_fee_max_change_denominator: int = 0
    minimum_base_fee: int = 0
    system_tx_max_gas: int = 0
    maximum_base_fee: str = ""

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> ResourceConfigParams:
        return cls(
            max_resource_limit=_int(data, "max_resource_limit"),
            elasticity_multiplier=_int(data, "elasticity_multiplier"),
            base_fee_max_change_denominator=_int(data, "base_fee_max_change_denominator"),
            minimum_base_fee=_int(data, "minimum_base_fee"),
            system_tx_max_gas=_int(data, "system_tx_max_gas"),
            maximum_base_fee=_str(data, "maximum_base_fee"),
        )


@dataclass(frozen=True)
class PreEcotoneGasPriceOracleParams:
    decimals: Range = field(default_factory=Range)
    overhead: Range = field(default_factory=Range)
    scalar: Range = field(default_factory=Range)

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> PreEcotoneGasPriceOracleParams:
        return cls(
            decimals=Range._from_field(data, "decimals"),
            overhead=Range._from_field(data, "overhead"),
            scalar=Range._from_field(data, "scalar"),
        )


@dataclass(frozen=True)
class EcotoneGasPriceOracleParams:
    decimals: Range = field(default_factory=Range)
    blob_base_fee_scalar: Range = field(default_factory=Range)
    base_fee_scalar: Range = field(default_factory=Range)

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> EcotoneGasPriceOracleParams:
        return cls(
            decimals=Range._from_field(data, "decimals"),
            blob_base_fee_scalar=Range._from_field(data, "blob_base_fee_scalar"),
            base_fee_scalar=Range._from_field(data, "base_fee_scalar"),
        )


@dataclass(frozen=True)
class GasPriceOracleParams:
    pre_ecotone: PreEcotoneGasPriceOracleParams = field(
        default_factory=PreEcotoneGasPriceOracleParams
    )
    ecotone: EcotoneGasPriceOracleParams = field(
        default_factory=EcotoneGasPriceOracleParams
    )

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> GasPriceOracleParams:
        return cls(
            pre_ecotone=PreEcotoneGasPriceOracleParams._from_dict(
                _table(data, "pre-ecotone")
            ),
            ecotone=EcotoneGasPriceOracleParams._from_dict(_table(data, "ecotone")),
        )


@dataclass(frozen=True)
class SystemConfigParams:
    gas_limit: Range = field(default_factory=Range)
    operator_fee_scalar: Range = field(default_factory=Range)
    operator_fee_constant: Range = field(default_factory=Range)

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> SystemConfigParams:
        return cls(
            gas_limit=Range._from_field(data, "gas_limit"),
            operator_fee_scalar=Range._from_field(data, "operator_fee_scalar"),
            operator_fee_constant=Range._from_field(data, "operator_fee_constant"),
        )


@dataclass(frozen=True)
class FDGParams:
    """Fault dispute game parameters."""

    game_type: int = 0
    max_game_depth: int = 0
    split_depth: int = 0
    max_clock_duration: int = 0
    clock_extension: int = 0

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> FDGParams:
        return cls(
            game_type=_uint(data, "game_type", 32),
            max_game_depth=_uint(data, "max_game_depth", 64),
            split_depth=_uint(data, "split_depth", 64),
            max_clock_duration=_uint(data, "max_clock_duration", 64),
            clock_extension=_uint(data, "clock_extension", 64),
        )


@dataclass(frozen=True)
class ProofsParams:
    permissioned: FDGParams = field(default_factory=FDGParams)
    permissionless: FDGParams = field(default_factory=FDGParams)

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> ProofsParams:
        return cls(
            permissioned=FDGParams._from_dict(_table(data, "permissioned")),
            permissionless=FDGParams._from_dict(_table(data, "permissionless")),
        )


@dataclass(frozen=True)
class ConfigParams:
    """The full set of standard configuration parameters."""

    rollup_config: RollupConfigParams = field(default_factory=RollupConfigParams)
    optimism_portal_2: OptimismPortal2Params = field(default_factory=OptimismPortal2Params)
    resource_config: ResourceConfigParams = field(default_factory=ResourceConfigParams)
    gas_price_oracle: GasPriceOracleParams = field(default_factory=GasPriceOracleParams)
    system_config: SystemConfigParams = field(default_factory=SystemConfigParams)
    proofs: ProofsParams = field(default_factory=ProofsParams)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConfigParams:
        return cls(
            rollup_config=RollupConfigParams._from_dict(_table(data, "rollup_config")),
            optimism_portal_2=OptimismPortal2Params._from_dict(
                _table(data, "optimism_portal_2")
            ),
            resource_config=ResourceConfigParams._from_dict(_table(data, "resource_config")),
            gas_price_oracle=GasPriceOracleParams._from_dict(
                _table(data, "gas_price_oracle")
            ),
            system_config=SystemConfigParams._from_dict(_table(data, "system_config")),
            proofs=ProofsParams._from_dict(_table(data, "proofs")),
        )


@dataclass(frozen=True)
class RolesConfig:
    """Standard holders of privileged roles."""

    guardian: Address = field(default_factory=Address)
    challenger: Address = field(default_factory=Address)
    l1_proxy_admin_owner: Address = field(default_factory=Address)
    l2_proxy_admin_owner: Address = field(default_factory=Address)
    protocol_versions_owner: Address = field(default_factory=Address)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RolesConfig:
        return cls(
            guardian=_address(data, "guardian"),
            challenger=_address(data, "challenger"),
            l1_proxy_admin_owner=_address(data, "l1ProxyAdminOwner"),
            l2_proxy_admin_owner=_address(data, "l2ProxyAdminOwner"),
            protocol_versions_owner=_address(data, "protocolVersionsOwner"),
        )


def load_config_params(text: str | bytes) -> ConfigParams:
    """Parse standard config params from TOML text."""
    return ConfigParams.from_dict(_loads(text, "standard config params"))


def load_roles_config(text: str | bytes) -> RolesConfig:
    """Parse standard config roles from TOML text."""
    return RolesConfig.from_dict(_loads(text, "standard config roles"))