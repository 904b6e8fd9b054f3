import pytest

from chainregistry.validation.types import Address
from chainregistry.validation.versions import (
    ContractData,
    Semver,
    VersionConfig,
    is_valid_contract_semver,
    load_versions,
)

PORTAL_IMPL = "0x" + "11" * 20
SYSCFG_PROXY = "0x" + "22" * 20

VERSIONS_TOML = f"""
["op-contracts/v1.6.0"]
optimism_portal = {{ version = "3.10.0", implementation_address = "{PORTAL_IMPL}" }}
system_config = {{ version = "2.2.0", address = "{SYSCFG_PROXY}" }}

["op-contracts/v1.3.0"]
mips = {{ version = "1.0.1" }}
"""


@pytest.mark.parametrize(
    ("tag", "member"),
    [
        ("op-contracts/v1.3.0", "V1_3_0"),
        ("op-contracts/v1.7.0-beta.1+l2-contracts", "V1_7_0"),
        ("op-contracts/v4.0.0-rc.8", "V4_0_0"),
    ],
)
def test_semver_values(tag, member):
    assert Semver(tag) is Semver[member]
    assert is_valid_contract_semver(tag) is True


@pytest.mark.parametrize("member", list(Semver))
def test_every_member_is_valid(member):
    assert is_valid_contract_semver(member.value) is True


@pytest.mark.parametrize("tag", ["op-contracts/v1.5.0", "v1.3.0", ""])
def test_unknown_semver_is_invalid(tag):
    assert is_valid_contract_semver(tag) is False


def test_load_versions():
    versions = load_versions(VERSIONS_TOML)
    assert set(versions) == {"op-contracts/v1.6.0", "op-contracts/v1.3.0"}
    cfg = versions[Semver.V1_6_0]
    assert cfg.optimism_portal == ContractData(
        version="3.10.0", implementation_address=Address.parse(PORTAL_IMPL)
    )
    assert cfg.optimism_portal.address is None
    assert cfg.system_config.address == Address.parse(SYSCFG_PROXY)
    assert cfg.mips is None
    assert versions[Semver.V1_3_0].mips.version == "1.0.1"


def test_empty_version_config():
    assert VersionConfig.from_dict({}) == VersionConfig()


def test_contract_entry_must_be_table():
    with pytest.raises(ValueError, match="optimism_portal"):
        VersionConfig.from_dict({"optimism_portal": "3.10.0"})


def test_release_entry_must_be_table():
    with pytest.raises(ValueError, match="release"):
        load_versions('release = "x"\n')


def test_bad_address_is_rejected():
    with pytest.raises(ValueError, match="invalid address"):
        ContractData.from_dict({"version": "1.0.0", "address": "0x12"})


def test_invalid_toml_is_rejected():
    with pytest.raises(ValueError, match="failed to unmarshal"):
        load_versions("[unterminated")