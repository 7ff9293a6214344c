import pytest

from candlepin_client.exceptions import (
    CandlepinError,
    MissingRequiredParameterError,
    UnknownParameterError,
)
from candlepin_client.options import merge_options, validate_required


def test_merge_overrides_defaults():
    merged = merge_options({"name": "box"}, {"name": None, "type": "system"})

    assert merged == {"name": "box", "type": "system"}


def test_merge_does_not_mutate_defaults():
    defaults = {"name": None}

    merge_options({"name": "box"}, defaults)

    assert defaults == {"name": None}


def test_merge_accepts_no_options():
    assert merge_options(None, {"key": "admin"}) == {"key": "admin"}


def test_merge_rejects_unknown_keys():
    with pytest.raises(UnknownParameterError) as excinfo:
        merge_options({"bogus": 1, "name": "x", "other": 2}, {"name": None})

    assert excinfo.value.keys == ("bogus", "other")
    assert str(excinfo.value) == "Unknown keys: bogus, other"
    assert isinstance(excinfo.value, ValueError)
    assert isinstance(excinfo.value, CandlepinError)


def test_validate_required_checks_all_keys_by_default():
    with pytest.raises(MissingRequiredParameterError) as excinfo:
        validate_required({"key": None, "name": "x", "id": None})

    assert excinfo.value.keys == ("key", "id")


def test_validate_required_only_named_keys():
    validate_required({"key": "admin", "display_name": None}, "key")


def test_validate_required_accepts_false_values():
    validate_required({"revoke": False, "count": 0}, "revoke", "count")


def test_validate_required_with_predicate():
    with pytest.raises(MissingRequiredParameterError) as excinfo:
        validate_required({"product_ids": []}, "product_ids", predicate=bool)

    assert "product_ids" in str(excinfo.value)


def test_validate_required_predicate_passes():
    validate_required({"status": False}, "status", predicate=lambda v: isinstance(v, bool))


def test_validate_required_lists_only_null_keys():
    with pytest.raises(MissingRequiredParameterError) as excinfo:
        validate_required({"a": None, "b": 5}, "a", "b")

    assert excinfo.value.keys == ("a",)
