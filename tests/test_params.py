import pytest

from chainregistry.validation.params import (
    ConfigParams,
    Range,
    RolesConfig,
    load_config_params,
    load_roles_config,
)
from chainregistry.validation.types import Address

PARAMS_TOML = """
[rollup_config]
seq_window_size = [3600, 3600]
block_time = [1, 2]

[optimism_portal_2]
proof_maturity_delay_seconds = [604800, 604800]
dispute_game_finality_delay_seconds = [302400, 302400]
respected_game_type = 0

[resource_config]
max_resource_limit = 20000000
elasticity_multiplier = 10
base_fee_max_change_denominator = 8
minimum_base_fee = 1000000000
system_tx_max_gas = 1000000
maximum_base_fee = "0xffffffffffffffffffffffffffffffff"

[gas_price_oracle.pre-ecotone]
decimals = [6, 6]
overhead = [188, 188]
scalar = [684000, 684000]

[gas_price_oracle.ecotone]
decimals = [6, 6]
blob_base_fee_scalar = [0, 810949]
base_fee_scalar = [0, 1368]

[system_config]
gas_limit = [60000000, 200000000]
operator_fee_scalar = [0, 0]
operator_fee_constant = [0, 0]

[proofs.permissioned]
game_type = 1
max_game_depth = 73
split_depth = 30
max_clock_duration = 302400
clock_extension = 10800

[proofs.permissionless]
game_type = 0
max_game_depth = 73
split_depth = 30
max_clock_duration = 302400
clock_extension = 10800
"""

GUARDIAN = "0x" + "11" * 20
CHALLENGER = "0x" + "22" * 20

ROLES_TOML = f"""
guardian = "{GUARDIAN}"
challenger = "{CHALLENGER}"
l1ProxyAdminOwner = "{GUARDIAN}"
"""


@pytest.mark.parametrize("v,expected", [(5, True), (10, True), (7, True), (4, False), (11, False)])
def test_range_within_range(v, expected):
    assert Range(5, 10).within_range(v) is expected


def test_load_config_params_fields():
    params = load_config_params(PARAMS_TOML)
    assert params.rollup_config.seq_window_size == Range(3600, 3600)
    assert params.rollup_config.block_time == Range(1, 2)
    assert params.optimism_portal_2.proof_maturity_delay_seconds == Range(604800, 604800)
    assert params.resource_config.max_resource_limit == 20000000
    assert params.resource_config.maximum_base_fee == "0xffffffffffffffffffffffffffffffff"
    assert params.gas_price_oracle.pre_ecotone.scalar == Range(684000, 684000)
    assert params.gas_price_oracle.ecotone.blob_base_fee_scalar == Range(0, 810949)
    assert params.system_config.gas_limit == Range(60000000, 200000000)
    assert params.proofs.permissioned.game_type == 1
    assert params.proofs.permissionless.clock_extension == 10800


def test_load_config_params_accepts_bytes():
    assert load_config_params(PARAMS_TOML.encode()) == load_config_params(PARAMS_TOML)


def test_missing_sections_default_to_empty():
    params = ConfigParams.from_dict({})
    assert params == ConfigParams()
    assert params.rollup_config.block_time == Range()


def test_range_with_wrong_length_is_rejected():
    with pytest.raises(ValueError, match="block_time"):
        load_config_params("[rollup_config]\nblock_time = [1, 2, 3]\n")


def test_integer_field_with_string_is_rejected():
    with pytest.raises(ValueError, match="max_resource_limit"):
        load_config_params('[resource_config]\nmax_resource_limit = "lots"\n')


def test_negative_unsigned_field_is_rejected():
    with pytest.raises(ValueError, match="game_type"):
        load_config_params("[proofs.permissioned]\ngame_type = -1\n")


def test_invalid_toml_is_rejected():
    with pytest.raises(ValueError, match="failed to unmarshal"):
        load_config_params("rollup_config = [")


def test_load_roles_config():
    roles = load_roles_config(ROLES_TOML)
    assert roles.guardian == Address.parse(GUARDIAN)
    assert roles.challenger == Address.parse(CHALLENGER)
    assert roles.l1_proxy_admin_owner == Address.parse(GUARDIAN)
    assert roles.l2_proxy_admin_owner == Address()


def test_roles_from_dict_matches_loader():
    assert RolesConfig.from_dict({"guardian": GUARDIAN}).guardian == Address.parse(GUARDIAN)


def test_roles_invalid_address_is_rejected():
    with pytest.raises(ValueError, match="invalid address length"):
        load_roles_config('guardian = "0x1234"\n')