"""The outcome of one step of a generator, and the result values it may return."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from .errors import custom

__all__ = ["GeneratorState", "Yielded", "Completed", "Ok", "Err"]

T = TypeVar("T")
E = TypeVar("E")

_UNEXPECTED_EOF = "unexpected EOF"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful result holding ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def map(self, func: Callable[[T], Any]) -> "Ok[Any]":
        """Apply ``func`` to the held value."""
        return Ok(func(self.value))

    def map_err(self, func: Callable[[Any], Any]) -> "Ok[T]":
        """A successful result with the same value; ``func`` is not applied."""
        return Ok(self.value)


@dataclass(frozen=True)
class Err(Generic[E]):
    """A failed result holding the error ``value``."""

    value: E

    def is_ok(self) -> bool:
        return False

    def map(self, func: Callable[[Any], Any]) -> "Err[E]":
        """A failed result with the same error; ``func`` is not applied."""
        return Err(self.value)

    def map_err(self, func: Callable[[E], Any]) -> "Err[Any]":
        """Apply ``func`` to the held error."""
        return Err(func(self.value))


Result = Union[Ok[Any], Err[Any]]


def _as_result(value: object) -> Result:
    if not isinstance(value, (Ok, Err)):
        raise TypeError(f"completed value is not a result: {value!r}")
    return value


class GeneratorState:
    """What a generator produced on one step: :class:`Yielded` or :class:`Completed`."""

    __slots__ = ()
    value: Any

    def is_yielded(self) -> bool:
        return isinstance(self, Yielded)

    def is_complete(self) -> bool:
        return isinstance(self, Completed)

    def into_yielded(self) -> Any:
        """Return the yielded value; raise :class:`CustomError` if the step completed."""
        if isinstance(self, Yielded):
            return self.value
        raise custom(_UNEXPECTED_EOF)

    def into_complete(self) -> Any:
        """Return the completed value; raise :class:`CustomError` if the step yielded."""
        if isinstance(self, Completed):
            return self.value
        raise custom(_UNEXPECTED_EOF)

    def map_complete(self, func: Callable[[Any], Any]) -> "GeneratorState":
        """Apply ``func`` to a completed value; yielded values pass through."""
        if isinstance(self, Completed):
            return Completed(func(self.value))
        return self

    def map_yielded(self, func: Callable[[Any], Any]) -> "GeneratorState":
        """Apply ``func`` to a yielded value; completed values pass through."""
        if isinstance(self, Yielded):
            return Yielded(func(self.value))
        return self

    def map_ok(self, func: Callable[[Any], Any]) -> "GeneratorState":
        """Apply ``func`` to the success inside a completed :class:`Ok`."""
        return self.map_complete(lambda ret: _as_result(ret).map(func))

    def map_err(self, func: Callable[[Any], Any]) -> "GeneratorState":
        """Apply ``func`` to the error inside a completed :class:`Err`."""
        return self.map_complete(lambda ret: _as_result(ret).map_err(func))


@dataclass(frozen=True)
class Yielded(GeneratorState):
    """The generator produced ``value`` and has more to give."""

    value: Any


@dataclass(frozen=True)
class Completed(GeneratorState):
    """The generator finished and returned ``value``."""

    value: Any