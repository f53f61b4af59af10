"""The core generator protocol and the basic ways of combining generators."""

from __future__ import annotations

import enum
import random as _random
from abc import ABC, abstractmethod
from typing import Any, Callable

from .errors import custom
from .state import Completed, Err, GeneratorState, Ok, Yielded

__all__ = [
    "Generator",
    "Yield",
    "Complete",
    "Infallible",
    "Once",
    "MapComplete",
    "MapYielded",
    "AndThen",
    "Concatenate",
    "Exhaust",
    "Brace",
    "Inspect",
    "Maybe",
]

_UNSET: Any = object()


class Generator(ABC):
    """A stateful stream that draws randomness from an RNG.

    Each call to :meth:`next` returns either :class:`Yielded` (more to come)
    or :class:`Completed` (the stream finished and returned a value).
    A generator is not required to ever complete.
    """

    @abstractmethod
    def next(self, rng: _random.Random) -> GeneratorState:
        """Step through one item of the stream."""

    def complete(self, rng: _random.Random) -> Any:
        """Drive the stream until it completes and return what it returned."""
        while True:
            state = self.next(rng)
            if isinstance(state, Completed):
                return state.value

    # -- composition -------------------------------------------------------

    def once(self) -> "Once":
        """Complete with each value right after yielding it."""
        return Once(self)

    def infallible(self) -> "Infallible":
        """Wrap every returned value in :class:`Ok`."""
        return Infallible(self)

    def map_complete(self, func: Callable[[Any], Any]) -> "MapComplete":
        """Apply ``func`` to the values returned by this generator."""
        return MapComplete(self, func)

    def map_yielded(self, func: Callable[[Any], Any]) -> "MapYielded":
        """Apply ``func`` to the values yielded by this generator."""
        return MapYielded(self, func)

    def and_then(self, func: Callable[[Any], "Generator"]) -> "AndThen":
        """Run to completion, then run ``func(returned)`` to completion."""
        return AndThen(self, func)

    def concatenate(self, right: "Generator") -> "Concatenate":
        """Exhaust this generator then ``right``, returning both returned values."""
        return Concatenate(self, right)

    def exhaust(self) -> "Exhaust":
        """Discard yielded values and pass the returned value through."""
        return Exhaust(self)

    def prefix(self, prefix: "Generator") -> "Brace":
        """Prefix the stream with another."""
        return self.brace(prefix, Complete.empty())

    def suffix(self, suffix: "Generator") -> "Brace":
        """Suffix the stream with another."""
        return self.brace(Complete.empty(), suffix)

    def brace(self, begin: "Generator", end: "Generator") -> "Brace":
        """Surround the stream with two others."""
        return Brace(begin, self, end)

    def inspect(self, func: Callable[[GeneratorState], Any]) -> "Inspect":
        """Call ``func`` on every step, yielded or completed."""
        return Inspect(self, func)

    def maybe(self) -> "Maybe":
        """Randomly either run this generator or complete with ``None``."""
        return Maybe(self)

    def aggregate(self) -> Any:
        """Collect all yielded values into one yielded list."""
        from .combinators import Aggregate

        return Aggregate(self)

    def repeat(self, length: int) -> Any:
        """Run ``length`` times, returning the list of returned values."""
        from .combinators import Repeat

        return Repeat(self, length)

    def replay(self, length: int) -> Any:
        """Record one run and replay it ``length`` times before starting afresh."""
        from .combinators import Replay

        return Replay(self, length)

    def replay_forever(self) -> Any:
        """Record one run and replay it without end."""
        from .combinators import Replay

        return Replay(self, None)

    def peekable(self) -> Any:
        """Allow looking at upcoming steps without consuming them."""
        from .combinators import Peek

        return Peek(self)

    def into_iterator(self, rng: _random.Random) -> Any:
        """Iterate over the yielded values until the stream completes."""
        from .combinators import Iterable

        return Iterable(self, rng)

    # -- generators returning results --------------------------------------

    def try_next(self, rng: _random.Random) -> GeneratorState:
        """Step a generator whose returned values are :class:`Ok` or :class:`Err`."""
        return self.next(rng)

    def try_next_yielded(self, rng: _random.Random) -> Any:
        """Return the next yielded value, skipping :class:`Ok` completions.

        A completion with :class:`Err` raises its error; an error that is
        not an exception is wrapped in :class:`CustomError`.
        """
        while True:
            state = self.try_next(rng)
            if isinstance(state, Yielded):
                return state.value
            result = state.value
            if isinstance(result, Err):
                error = result.value
                if isinstance(error, BaseException):
                    raise error
                raise custom(error)
            if not isinstance(result, Ok):
                raise TypeError(f"completed value is not a result: {result!r}")

    def try_once(self) -> Any:
        """Like :meth:`once`, with the returned value wrapped in a result."""
        from .trying import TryOnce

        return TryOnce(self)

    def map_ok(self, func: Callable[[Any], Any]) -> Any:
        """Apply ``func`` to successful returned values."""
        from .trying import MapOk

        return MapOk(self, func)

    def or_else_try(self, func: Callable[[Any], "Generator"]) -> Any:
        """On a failed completion, continue with ``func(error)``."""
        from .trying import OrElseTry

        return OrElseTry(self, func)

    def and_then_try(self, func: Callable[[Any], "Generator"]) -> Any:
        """On a successful completion, continue with ``func(value)``."""
        from .trying import AndThenTry

        return AndThenTry(self, func)

    def try_filter_map(self, func: Callable[[Any], Any]) -> Any:
        """Rerun until ``func`` keeps a successful returned value."""
        from .trying import TryFilterMap

        return TryFilterMap(self, func)

    def try_aggregate(self) -> Any:
        """Collect yielded values into one list, unless the run fails."""
        from .trying import TryAggregate

        return TryAggregate(self)

    def unwrap(self) -> Any:
        """Unpack yielded results, completing with the first error."""
        from .trying import Unwrap

        return Unwrap(self)


class Yield(Generator):
    """Yields the same value forever."""

    def __init__(self, value: Any) -> None:
        self.value = value

    def next(self, rng: _random.Random) -> GeneratorState:
        return Yielded(self.value)


class Complete(Generator):
    """Completes on every step, returning the same value."""

    def __init__(self, value: Any = None) -> None:
        self.value = value

    @classmethod
    def empty(cls) -> "Complete":
        """A generator that completes at once with ``None``."""
        return cls(None)

    def next(self, rng: _random.Random) -> GeneratorState:
        return Completed(self.value)


class Infallible(Generator):
    """Wraps every returned value in :class:`Ok`."""

    def __init__(self, inner: Generator) -> None:
        self.inner = inner

    def next(self, rng: _random.Random) -> GeneratorState:
        return self.inner.next(rng).map_complete(Ok)


class Once(Generator):
    """Turns each yielded value into a yield followed by a completion with it."""

    def __init__(self, inner: Generator) -> None:
        self.inner = inner
        self._output: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._output is not _UNSET:
            value, self._output = self._output, _UNSET
            return Completed(value)
        while True:
            state = self.inner.next(rng)
            if isinstance(state, Yielded):
                self._output = state.value
                return state


class MapComplete(Generator):
    """Applies a function to returned values."""

    def __init__(self, inner: Generator, func: Callable[[Any], Any]) -> None:
        self.inner = inner
        self.func = func

    def next(self, rng: _random.Random) -> GeneratorState:
        return self.inner.next(rng).map_complete(self.func)

    def into_inner(self) -> Generator:
        """Return the wrapped generator."""
        return self.inner


class MapYielded(Generator):
    """Applies a function to yielded values."""

    def __init__(self, inner: Generator, func: Callable[[Any], Any]) -> None:
        self.inner = inner
        self.func = func

    def next(self, rng: _random.Random) -> GeneratorState:
        return self.inner.next(rng).map_yielded(self.func)


class AndThen(Generator):
    """Runs the inner generator, then the one built from its returned value."""

    def __init__(self, inner: Generator, func: Callable[[Any], Generator]) -> None:
        self.inner = inner
        self.func = func
        self._output: Generator | None = None

    def next(self, rng: _random.Random) -> GeneratorState:
        while True:
            if self._output is not None:
                state = self._output.next(rng)
                if isinstance(state, Completed):
                    self._output = None
                return state
            state = self.inner.next(rng)
            if isinstance(state, Yielded):
                return state
            self._output = self.func(state.value)


class Concatenate(Generator):
    """Runs two generators one after the other, returning both results as a pair."""

    def __init__(self, left: Generator, right: Generator) -> None:
        self.left = left
        self.right = right
        self._left_output: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        while self._left_output is _UNSET:
            state = self.left.next(rng)
            if isinstance(state, Yielded):
                return state
            self._left_output = state.value
        state = self.right.next(rng)
        if isinstance(state, Yielded):
            return state
        left, self._left_output = self._left_output, _UNSET
        return Completed((left, state.value))


class Exhaust(Generator):
    """Completes in one step with whatever the inner generator returns."""

    def __init__(self, inner: Generator) -> None:
        self.inner = inner

    def next(self, rng: _random.Random) -> GeneratorState:
        return Completed(self.inner.complete(rng))


class _BraceState(enum.Enum):
    BEGIN = enum.auto()
    MIDDLE = enum.auto()
    END = enum.auto()


class Brace(Generator):
    """Runs ``begin``, then ``inner``, then ``end``, returning what ``inner`` returned."""

    def __init__(self, begin: Generator, inner: Generator, end: Generator) -> None:
        self.begin = begin
        self.inner = inner
        self.end = end
        self._state = _BraceState.BEGIN
        self._complete: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        while True:
            if self._state is _BraceState.BEGIN:
                state = self.begin.next(rng)
                if isinstance(state, Yielded):
                    return state
                self._state = _BraceState.MIDDLE
            elif self._state is _BraceState.MIDDLE:
                state = self.inner.next(rng)
                if isinstance(state, Yielded):
                    return state
                self._complete = state.value
                self._state = _BraceState.END
            else:
                state = self.end.next(rng)
                if isinstance(state, Yielded):
                    return state
                self._state = _BraceState.BEGIN
                value, self._complete = self._complete, _UNSET
                return Completed(value)


class Inspect(Generator):
    """Calls a function on every step and passes the step through."""

    def __init__(self, inner: Generator, func: Callable[[GeneratorState], Any]) -> None:
        self.inner = inner
        self.func = func

    def next(self, rng: _random.Random) -> GeneratorState:
        state = self.inner.next(rng)
        self.func(state)
        return state


class Maybe(Generator):
    """Randomly runs the inner generator or completes at once with ``None``."""

    def __init__(self, inner: Generator) -> None:
        self.inner = inner
        self._include = False

    def next(self, rng: _random.Random) -> GeneratorState:
        if not self._include:
            self._include = rng.random() < 0.5
            if not self._include:
                return Completed(None)
        state = self.inner.next(rng)
        if isinstance(state, Completed):
            self._include = False
        return state