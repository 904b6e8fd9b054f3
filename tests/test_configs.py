import os

import pytest

from chainregistry import paths
from chainregistry.manage.configs import (
    read_chain_config,
    write_chain_config,
    write_superchain_definition,
)
from chainregistry.tomlio import read_toml_file


def sample_chain():
    return {
        "name": "Test Chain",
        "chain_id": 1952805748,
        "hardforks": {"canyon_time": 0, "delta_time": 0},
        "addresses": {"SystemConfigProxy": "0x4200000000000000000000000000000000000011"},
    }


def test_chain_config_round_trip(tmp_path):
    root = str(tmp_path)
    write_chain_config(root, "sepolia", "testchain", sample_chain())
    assert os.path.isfile(paths.chain_config(root, "sepolia", "testchain"))
    assert read_chain_config(root, "sepolia", "testchain") == sample_chain()


def test_write_chain_config_refuses_overwrite(tmp_path):
    root = str(tmp_path)
    write_chain_config(root, "sepolia", "testchain", sample_chain())
    with pytest.raises(FileExistsError, match="file already exists"):
        write_chain_config(root, "sepolia", "testchain", {"name": "Other"})
    assert read_chain_config(root, "sepolia", "testchain")["name"] == "Test Chain"


def test_read_chain_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError, match="file does not exist"):
        read_chain_config(str(tmp_path), "sepolia", "absent")


def test_read_chain_config_invalid(tmp_path):
    root = str(tmp_path)
    fname = paths.chain_config(root, "sepolia", "broken")
    os.makedirs(os.path.dirname(fname))
    with open(fname, "w", encoding="utf-8") as fh:
        fh.write("name = = 1\n")
    with pytest.raises(ValueError, match="failed to unmarshal toml"):
        read_chain_config(root, "sepolia", "broken")


def test_write_superchain_definition_creates_directory(tmp_path):
    fname = str(tmp_path / "nested" / "dir" / "superchain.toml")
    definition = {"name": "Sepolia", "l1": {"chain_id": 11155111}}
    write_superchain_definition(fname, definition)
    assert read_toml_file(fname) == definition


def test_write_superchain_definition_refuses_overwrite(tmp_path):
    fname = str(tmp_path / "superchain.toml")
    write_superchain_definition(fname, {"name": "Sepolia"})
    with pytest.raises(FileExistsError):
        write_superchain_definition(fname, {"name": "Mainnet"})
    assert read_toml_file(fname) == {"name": "Sepolia"}


def test_unserialisable_chain_config(tmp_path):
    root = str(tmp_path)
    with pytest.raises(ValueError, match="failed to marshal toml"):
        write_chain_config(root, "sepolia", "bad", {"value": object()})
    assert not os.path.exists(paths.chain_config(root, "sepolia", "bad"))