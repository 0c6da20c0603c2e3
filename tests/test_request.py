import pytest

from elevator.errors import InvalidRequestError
from elevator.request import ElevationRequest, join_arguments


@pytest.mark.parametrize(
    "arguments",
    [
        ["one"],
        ["--flag", "value"],
        ["C:\\Tools\\flash.exe", "--drive", "\\\\.\\PhysicalDrive1", "--yes"],
    ],
)
def test_join_preserves_order_with_single_spaces(arguments):
    joined = join_arguments(arguments)
    assert "  " not in joined
    assert joined.split(" ") == arguments


def test_join_empty_is_empty_string():
    assert join_arguments([]) == ""


def test_join_does_not_quote():
    assert join_arguments(["a b", "c"]) == "a b c"


def test_from_argv_splits_command_and_arguments():
    request = ElevationRequest.from_argv(["etcher.exe", "--write", "image.img"])
    assert request.command == "etcher.exe"
    assert request.arguments == ("--write", "image.img")
    assert request.parameters == "--write image.img"
    assert str(request) == "etcher.exe --write image.img"


def test_from_argv_single_element_has_no_arguments():
    request = ElevationRequest.from_argv(["cmd.exe"])
    assert request.arguments == ()
    assert request.parameters == ""
    assert str(request) == "cmd.exe"


@pytest.mark.parametrize("argv", [[], (), "cmd.exe", None, 5])
def test_from_argv_rejects_malformed(argv):
    with pytest.raises(InvalidRequestError):
        ElevationRequest.from_argv(argv)


def test_request_rejects_empty_command():
    with pytest.raises(InvalidRequestError):
        ElevationRequest("")


def test_request_rejects_string_arguments():
    with pytest.raises(InvalidRequestError):
        ElevationRequest("cmd.exe", "/c dir")  # type: ignore[arg-type]


def test_request_rejects_non_string_argument():
    with pytest.raises(InvalidRequestError, match="int"):
        ElevationRequest("cmd.exe", ("/c", 3))  # type: ignore[arg-type]


def test_invalid_request_is_value_error():
    with pytest.raises(ValueError):
        ElevationRequest.from_argv([])


def test_request_accepts_generators():
    request = ElevationRequest("tool", (part for part in ["a", "b"]))  # type: ignore[arg-type]
    assert request.arguments == ("a", "b")
