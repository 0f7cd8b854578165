import pytest

from weightlog.services.entry_validator import EntryValidator, ValidationErrorKind
from conftest import make_entry


@pytest.mark.parametrize('weight', [0, 10, 19.9])
def test_below_minimum_rejected(weight):
    error = EntryValidator.validate(weight, [])
    assert error.kind == ValidationErrorKind.BELOW_MINIMUM
    assert error.message == 'Weight cannot be less than 20kg'


@pytest.mark.parametrize('weight', [300.1, 350, 1000])
def test_above_maximum_rejected(weight):
    error = EntryValidator.validate(weight, [])
    assert error.kind == ValidationErrorKind.ABOVE_MAXIMUM
    assert error.message == 'Weight cannot exceed 300kg'


@pytest.mark.parametrize('weight', [20, 20.1, 75.5, 299.9, 300])
def test_weights_in_bounds_accepted_without_history(weight):
    assert EntryValidator.validate(weight, []) is None


def test_implausible_change_for_new_entry():
    history = [make_entry('2', 80, '2024-01-02'), make_entry('1', 50, '2024-01-01')]

    error = EntryValidator.validate(101, history, is_new_entry=True)

    assert error.kind == ValidationErrorKind.IMPLAUSIBLE_CHANGE
    assert error.delta == pytest.approx(21)
    assert error.message == 'Weight change of 21.0kg seems unrealistic. Please verify.'
    assert error.to_dict()['delta'] == 21.0


def test_compares_against_most_recent_entry_only():
    # Oldest entry is far away but only entries[0] counts
    history = [make_entry('2', 80, '2024-01-02'), make_entry('1', 50, '2024-01-01')]
    assert EntryValidator.validate(85, history) is None


def test_change_of_exactly_twenty_is_allowed():
    history = [make_entry('1', 80, '2024-01-01')]
    assert EntryValidator.validate(100, history) is None
    assert EntryValidator.validate(60, history) is None


def test_edit_skips_change_check():
    history = [make_entry('1', 80, '2024-01-01')]
    assert EntryValidator.validate(110, history, is_new_entry=False) is None


def test_edit_still_checks_bounds():
    history = [make_entry('1', 80, '2024-01-01')]
    error = EntryValidator.validate(301, history, is_new_entry=False)
    assert error.kind == ValidationErrorKind.ABOVE_MAXIMUM


def test_bounds_checked_before_change():
    history = [make_entry('1', 80, '2024-01-01')]
    error = EntryValidator.validate(10, history)
    assert error.kind == ValidationErrorKind.BELOW_MINIMUM
