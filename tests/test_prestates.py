import pytest

from chainregistry.validation.prestates import Prestate, Prestates, load_prestates
from chainregistry.validation.types import Hash

HASH_A = "0x038512e02c4c3f7bdaec27d00edf55b7155e0905301e1a88083e4e0a6764d54c"
HASH_B = "0x" + "ab" * 32
HASH_C = "0x" + "cd" * 32

PRESTATES_TOML = f"""
latest_rc = "1.5.0-rc.1"
latest_stable = "1.4.0"

[[prestates."1.5.0-rc.1"]]
type = "cannon64"
hash = "{HASH_C}"

[[prestates."1.4.0"]]
type = "cannon32"
hash = "{HASH_A}"

[[prestates."1.4.0"]]
type = "cannon64"
hash = "{HASH_B}"
"""


def test_load_prestates_and_stable_prestate():
    prestates = load_prestates(PRESTATES_TOML)
    assert prestates.latest_rc == "1.5.0-rc.1"
    assert prestates.latest_stable == "1.4.0"
    stable = prestates.stable_prestate()
    assert stable == Prestate(type="cannon32", hash=Hash.parse(HASH_A))


def test_prestates_keep_order_within_release():
    prestates = load_prestates(PRESTATES_TOML.encode())
    assert [p.type for p in prestates.prestates["1.4.0"]] == ["cannon32", "cannon64"]
    assert str(prestates.prestates["1.4.0"][1].hash) == HASH_B


def test_missing_latest_rc_is_rejected():
    text = PRESTATES_TOML.replace('latest_rc = "1.5.0-rc.1"', 'latest_rc = "9.9.9"')
    with pytest.raises(ValueError, match="latest RC prestate not found"):
        load_prestates(text)


def test_missing_latest_stable_is_rejected():
    text = PRESTATES_TOML.replace('latest_stable = "1.4.0"', 'latest_stable = "9.9.9"')
    with pytest.raises(ValueError, match="latest stable prestate not found"):
        load_prestates(text)


def test_invalid_hash_is_rejected():
    text = PRESTATES_TOML.replace(HASH_A, "0x1234")
    with pytest.raises(ValueError, match="invalid hash length"):
        load_prestates(text)


def test_empty_hash_gives_zero_hash():
    data = {
        "latest_rc": "a",
        "latest_stable": "a",
        "prestates": {"a": [{"type": "cannon32", "hash": ""}]},
    }
    assert Prestates.from_dict(data).stable_prestate().hash == Hash()


def test_stable_prestate_of_unknown_release_raises():
    with pytest.raises(KeyError):
        Prestates(latest_stable="missing").stable_prestate()