"""Request model shared by every elevation backend."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .errors import InvalidRequestError


def join_arguments(arguments: Iterable[str]) -> str:
    """Join *arguments* with a single space between each pair.

    Arguments are not quoted or escaped, so one containing a space is split
    again by the program that receives the parameter string.
    """

    return " ".join(arguments)


@dataclass(frozen=True)
class ElevationRequest:
    """A command to run elevated plus its ordered arguments."""

    command: str
    arguments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.command, str) or not self.command:
            raise InvalidRequestError("An elevation request needs a non-empty command")
        if isinstance(self.arguments, str):
            raise InvalidRequestError("Arguments must be a sequence of strings, not a string")
        arguments = tuple(self.arguments)
        for argument in arguments:
            if not isinstance(argument, str):
                raise InvalidRequestError(
                    f"Arguments must be strings, got {type(argument).__name__}"
                )
        object.__setattr__(self, "arguments", arguments)

    @classmethod
    def from_argv(cls, argv: Sequence[str]) -> "ElevationRequest":
        """Split a flat argv into command and remaining arguments."""

        if isinstance(argv, str) or not isinstance(argv, Sequence):
            raise InvalidRequestError("Expected a list of command-line strings")
        if len(argv) < 1:
            raise InvalidRequestError("Expected at least one element: the command")
        return cls(argv[0], tuple(argv[1:]))

    @property
    def parameters(self) -> str:
        return join_arguments(self.arguments)

    def __str__(self) -> str:
        if not self.arguments:
            return self.command
        return f"{self.command} {self.parameters}"


__all__ = ["ElevationRequest", "join_arguments"]
