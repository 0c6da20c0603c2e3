import pytest

from elevator.outcome import UNKNOWN_DESCRIPTION, ElevationOutcome, describe


def test_describe_is_total_over_outcomes():
    descriptions = {outcome: describe(outcome) for outcome in ElevationOutcome}
    assert len(descriptions) == 11
    assert all(text for text in descriptions.values())


@pytest.mark.parametrize(
    "outcome, text",
    [
        (ElevationOutcome.SUCCESS, "Success"),
        (ElevationOutcome.CANCELLED, "The user cancelled the elevation request"),
        (ElevationOutcome.FILE_NOT_FOUND, "The specified file was not found"),
        (ElevationOutcome.PATH_NOT_FOUND, "The specified path was not found"),
        (
            ElevationOutcome.DATA_EXCHANGE_FAILURE,
            "The Dynamic Data Exchange (DDE) transaction failed",
        ),
        (
            ElevationOutcome.NO_ASSOCIATION,
            "There is no application associated with the specified file name extension",
        ),
        (ElevationOutcome.ACCESS_DENIED, "Access to the specified file is denied"),
        (
            ElevationOutcome.DEPENDENCY_NOT_FOUND,
            "One of the library files necessary to run the application can't be found",
        ),
        (
            ElevationOutcome.NOT_ENOUGH_MEMORY,
            "There is not enough memory to perform the specified action",
        ),
        (ElevationOutcome.SHARING_VIOLATION, "A sharing violation occurred"),
        (ElevationOutcome.UNKNOWN_ERROR, "Unknown error"),
    ],
)
def test_describe_fixed_sentences(outcome, text):
    assert describe(outcome) == text
    assert outcome.description == text


@pytest.mark.parametrize("sentinel", [None, 42, "not-an-outcome", object(), ["list"]])
def test_describe_falls_back_for_unknown_values(sentinel):
    assert describe(sentinel) == UNKNOWN_DESCRIPTION == "Unknown error"


def test_describe_accepts_raw_values():
    assert describe("cancelled") == "The user cancelled the elevation request"


def test_only_success_and_cancel_are_not_errors():
    non_errors = {outcome for outcome in ElevationOutcome if not outcome.is_error}
    assert non_errors == {ElevationOutcome.SUCCESS, ElevationOutcome.CANCELLED}
