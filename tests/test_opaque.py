import pytest

from chainregistry.manage.opaque import contains_all


def full_document():
    return {
        "config": {
            "chainId": 11155420,
            "canyonTime": 0,
            "optimism": {"eip1559Elasticity": 6, "eip1559Denominator": 50},
        },
        "timestamp": "0x66aa0ae0",
        "alloc": {"0x4200000000000000000000000000000000000011": {"balance": "0x0"}},
        "extraData": "0x",
        "list": [1, 2, {"x": True}],
    }


def test_document_contains_itself():
    doc = full_document()
    assert contains_all(doc, doc) is True


def test_extra_keys_in_first_are_allowed():
    subset = {"config": {"chainId": 11155420}, "timestamp": "0x66aa0ae0"}
    assert contains_all(full_document(), subset) is True
    assert contains_all(subset, full_document()) is False


def test_empty_second_is_contained():
    assert contains_all({}, {}) is True
    assert contains_all(full_document(), {}) is True


def test_missing_nested_key():
    sub = full_document()
    sub["config"]["zippedyDooDaTime"] = 123.0
    assert contains_all(full_document(), sub) is False


@pytest.mark.parametrize(
    "key, value",
    [
        ("timestamp", "0x0"),
        ("extraData", None),
        ("list", [1, 2]),
        ("list", [1, 2, {"x": 1}]),
    ],
)
def test_differing_values(key, value):
    sub = full_document()
    sub[key] = value
    assert contains_all(full_document(), sub) is False


def test_mapping_against_non_mapping():
    assert contains_all({"config": "flat"}, {"config": {"chainId": 1}}) is False


def test_key_with_null_value_must_exist():
    doc = full_document()
    sub = {"config": {"terminalTotalDifficultyPassed": None}}
    assert contains_all(doc, sub) is False
    doc["config"]["terminalTotalDifficultyPassed"] = None
    assert contains_all(doc, sub) is True


def test_integer_and_float_compare_equal():
    assert contains_all({"n": 123}, {"n": 123.0}) is True


def test_bool_and_integer_differ():
    assert contains_all({"flag": 1}, {"flag": True}) is False