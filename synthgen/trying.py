"""Generators that work on results: unpacking, chaining and filtering :class:`Ok` and :class:`Err`."""

from __future__ import annotations

import random as _random
from collections import deque
from typing import Any, Callable

from .errors import custom
from .generator import Generator
from .state import Completed, Err, GeneratorState, Ok, Yielded

__all__ = [
    "Unwrap",
    "TryOnce",
    "AndThenTry",
    "OrElseTry",
    "TryFilterMap",
    "TryAggregate",
    "MapOk",
]

_UNSET: Any = object()


def _result(value: object) -> Ok | Err:
    if not isinstance(value, (Ok, Err)):
        raise TypeError(f"value is not a result: {value!r}")
    return value


class Unwrap(Generator):
    """Unpacks yielded results.

    A yielded :class:`Ok` is yielded as its value; a yielded :class:`Err`
    completes the run with that error. A completion of the inner generator
    is returned wrapped in :class:`Ok`.
    """

    def __init__(self, inner: Generator) -> None:
        self.inner = inner

    def next(self, rng: _random.Random) -> GeneratorState:
        state = self.inner.next(rng)
        if isinstance(state, Completed):
            return Completed(Ok(state.value))
        result = _result(state.value)
        if isinstance(result, Ok):
            return Yielded(result.value)
        return Completed(result)


class TryOnce(Generator):
    """Yields each value and then completes with it wrapped in :class:`Ok`.

    The inner generator may only complete with :class:`Err`, which is
    passed through.
    """

    def __init__(self, inner: Generator) -> None:
        self.inner = inner
        self._output: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._output is not _UNSET:
            value, self._output = self._output, _UNSET
            return Completed(Ok(value))
        state = self.inner.try_next(rng)
        if isinstance(state, Yielded):
            self._output = state.value
            return state
        result = _result(state.value)
        if isinstance(result, Err):
            return Completed(result)
        raise custom("generator completed successfully before yielding a value")


class AndThenTry(Generator):
    """On a successful completion, continues with the generator built from its value.

    A failed completion ends the run with the error.
    """

    def __init__(self, inner: Generator, func: Callable[[Any], Generator]) -> None:
        self.inner = inner
        self.func = func
        self._output: Generator | None = None

    def next(self, rng: _random.Random) -> GeneratorState:
        while True:
            if self._output is not None:
                state = self._output.try_next(rng)
                if isinstance(state, Completed):
                    self._output = None
                return state
            state = self.inner.try_next(rng)
            if isinstance(state, Yielded):
                return state
            result = _result(state.value)
            if isinstance(result, Err):
                return Completed(result)
            self._output = self.func(result.value)


class OrElseTry(Generator):
    """On a failed completion, continues with the generator built from the error.

    A successful completion ends the run with its value.
    """

    def __init__(self, inner: Generator, func: Callable[[Any], Generator]) -> None:
        self.inner = inner
        self.func = func
        self._output: Generator | None = None

    def next(self, rng: _random.Random) -> GeneratorState:
        while True:
            if self._output is not None:
                state = self._output.try_next(rng)
                if isinstance(state, Completed):
                    self._output = None
                return state
            state = self.inner.try_next(rng)
            if isinstance(state, Yielded):
                return state
            result = _result(state.value)
            if isinstance(result, Ok):
                return Completed(result)
            self._output = self.func(result.value)


class TryFilterMap(Generator):
    """Reruns the inner generator until ``func`` keeps its returned value.

    ``func`` receives each successful returned value and gives back the
    value to keep, ``None`` to drop the run (its yielded values are
    discarded too), or an :class:`Err` to fail. A kept run yields its
    values and completes with ``Ok(kept)``. A failed inner run, or a
    failure from ``func``, completes with the error.
    """

    def __init__(self, inner: Generator, func: Callable[[Any], Any]) -> None:
        self.inner = inner
        self.func = func
        self._yielded: deque[Any] = deque()
        self._output: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._yielded:
            return Yielded(self._yielded.popleft())
        if self._output is not _UNSET:
            value, self._output = self._output, _UNSET
            return Completed(Ok(value))
        while True:
            state = self.inner.try_next(rng)
            if isinstance(state, Yielded):
                self._yielded.append(state.value)
                continue
            result = _result(state.value)
            if isinstance(result, Err):
                return Completed(result)
            kept = self.func(result.value)
            if isinstance(kept, Err):
                return Completed(kept)
            if isinstance(kept, Ok):
                kept = kept.value
            if kept is None:
                self._yielded.clear()
                continue
            self._output = kept
            return self.next(rng)


class TryAggregate(Generator):
    """Collects one run's yielded values into a single yielded list.

    The following step completes with the run's :class:`Ok`. A failed run
    completes with its :class:`Err` at once and nothing is yielded.
    """

    def __init__(self, inner: Generator) -> None:
        self.inner = inner
        self._output: Any = _UNSET

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._output is not _UNSET:
            value, self._output = self._output, _UNSET
            return Completed(value)
        collected = []
        while True:
            state = self.inner.try_next(rng)
            if isinstance(state, Yielded):
                collected.append(state.value)
                continue
            result = _result(state.value)
            if isinstance(result, Err):
                return Completed(result)
            self._output = result
            return Yielded(collected)


class MapOk(Generator):
    """Applies a function to the values of successful completions."""

    def __init__(self, inner: Generator, func: Callable[[Any], Any]) -> None:
        self.inner = inner
        self.func = func

    def next(self, rng: _random.Random) -> GeneratorState:
        return self.inner.try_next(rng).map_complete(
            lambda ret: _result(ret).map(self.func)
        )