import pytest

from swole.errors import ExperimentNotFoundError, InvalidExperimentError


def test_invalid_experiment_message():
    err = InvalidExperimentError("my_key", "the key cannot be empty")
    assert str(err) == "cannot register experiment with key: `my_key`: the key cannot be empty"


def test_invalid_experiment_keeps_fields():
    err = InvalidExperimentError("k", "alternatives must be unique")
    assert (err.key, err.message) == ("k", "alternatives must be unique")


def test_invalid_experiment_is_value_error():
    err = InvalidExperimentError("", "the key cannot be empty")
    with pytest.raises(ValueError, match="cannot register experiment with key: ``: the key cannot be empty"):
        raise err
    assert isinstance(err, ValueError)
    assert str(err) == "cannot register experiment with key: ``: the key cannot be empty"


def test_not_found_message():
    err = ExperimentNotFoundError(
        "non_existent", "you should register it first via `RegisterExperiment`"
    )
    assert str(err) == (
        "cannot retrieve experiment with key: `non_existent`: "
        "you should register it first via `RegisterExperiment`"
    )


def test_not_found_is_lookup_error():
    err = ExperimentNotFoundError("abc", "missing")
    with pytest.raises(LookupError, match="cannot retrieve experiment with key: `abc`: missing"):
        raise err
    assert isinstance(err, LookupError)
    assert (err.key, err.message) == ("abc", "missing")