from __future__ import annotations

import pytest

from store.documents import (
    UUID_ALPHABET,
    AttributeMerge,
    Transform,
    as_object_update,
    changed_keys,
    require_key,
    uuid,
    validate_id,
    validate_type,
)
from store.errors import InvalidArgumentsError, InvalidKeyError


def test_uuid_default_length_and_alphabet():
    for _ in range(50):
        value = uuid()
        assert len(value) == 7
        assert set(value) <= set(UUID_ALPHABET)


def test_uuid_custom_length():
    value = uuid(10)
    assert len(value) == 10
    assert set(value) <= set(UUID_ALPHABET)


@pytest.mark.parametrize("value", ["car", "$config", "a1", "todo2list"])
def test_valid_types(value):
    assert validate_type(value) == value


@pytest.mark.parametrize("value", ["c", "Car", "1car", "my-car", "car_s", "", None, 42])
def test_invalid_types(value):
    with pytest.raises(InvalidKeyError) as exc_info:
        validate_type(value)
    assert exc_info.value.field == "type"
    assert exc_info.value.value == value
    assert exc_info.value.to_dict()["kind"] == "INVALID_KEY"


@pytest.mark.parametrize("value", ["abc1234", "a", "my-id", "0-0"])
def test_valid_ids(value):
    assert validate_id(value) == value


@pytest.mark.parametrize("value", ["ABC", "a_b", "a b", "a/b", ""])
def test_invalid_ids(value):
    with pytest.raises(InvalidKeyError) as exc_info:
        validate_id(value)
    assert exc_info.value.field == "id"


def test_require_key_missing_or_not_string():
    with pytest.raises(InvalidArgumentsError):
        require_key(None, "abc")
    with pytest.raises(InvalidArgumentsError):
        require_key("car", None)
    with pytest.raises(InvalidArgumentsError):
        require_key("car", 123)
    with pytest.raises(InvalidKeyError):
        require_key("car", "NOPE")


def test_as_object_update_wraps_mapping_and_function():
    merge = as_object_update({"a": 1})
    assert isinstance(merge, AttributeMerge)
    assert merge.compute({"a": 0}) == {"a": 1}

    transform = as_object_update(lambda doc: {"n": doc["n"] + 1})
    assert isinstance(transform, Transform)
    assert transform.compute({"n": 1}) == {"n": 2}

    assert as_object_update(merge) is merge

    with pytest.raises(InvalidArgumentsError):
        as_object_update(42)


def test_transform_receives_a_copy():
    current = {"tags": "x"}

    def _mutate(doc):
        doc["tags"] = "changed"
        return None

    Transform(_mutate).compute(current)
    assert current == {"tags": "x"}


def test_changed_keys():
    current = {"type": "car", "id": "a1", "color": "red", "seats": 4}
    assert changed_keys(current, {"color": "red"}) == []
    assert changed_keys(current, {"color": "blue", "seats": 4}) == ["color"]
    assert changed_keys(current, {"sold": None}) == ["sold"]


def test_changed_keys_is_strict_about_types():
    current = {"sold": 0, "n": 1, "price": 1, "flag": True}
    assert changed_keys(current, {"sold": False, "n": True, "price": 1.0, "flag": 1}) == [
        "sold",
        "n",
        "price",
        "flag",
    ]
    assert changed_keys(current, {"sold": 0, "n": 1, "flag": True}) == []
