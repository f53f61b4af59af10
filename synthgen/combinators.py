"""Generators that collect, repeat, replay, look ahead and choose between others."""

from __future__ import annotations

import random as _random
from collections import deque
from typing import Any, Callable, Iterable as _IterableT, Iterator

from .generator import Generator, Once, Yield
from .state import Completed, GeneratorState, Yielded

__all__ = [
    "Aggregate",
    "Repeat",
    "Replay",
    "Peek",
    "Iterable",
    "Chain",
    "OneOf",
    "Random",
    "random",
    "just",
]

_UNSET: Any = object()


class Aggregate(Generator):
    """Collects every value yielded in one run into a single yielded list.

    The step after the list is yielded completes with what the inner
    generator returned.
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
            state = self.inner.next(rng)
            if isinstance(state, Yielded):
                collected.append(state.value)
            else:
                self._output = state.value
                return Yielded(collected)


class Repeat(Generator):
    """Runs the inner generator ``length`` times.

    Yielded values pass through; the run completes with the list of the
    values returned by each inner run.
    """

    def __init__(self, inner: Generator, length: int) -> None:
        self.inner = inner
        self.length = length
        self._remaining = length
        self._returned: list[Any] = []

    def next(self, rng: _random.Random) -> GeneratorState:
        while self._remaining:
            state = self.inner.next(rng)
            if isinstance(state, Yielded):
                return state
            self._remaining -= 1
            self._returned.append(state.value)
        self._remaining = self.length
        returned, self._returned = self._returned, []
        return Completed(returned)


class Replay(Generator):
    """Records one run of the inner generator and plays it back.

    With ``length`` of ``None`` or any positive number the recorded run is
    replayed without end. With ``length`` of ``0`` nothing is replayed:
    every run is drawn afresh from the inner generator.
    """

    def __init__(self, inner: Generator, length: int | None) -> None:
        self.inner = inner
        self.length = length
        self._buffer: list[Any] = []
        self._returned: Any = _UNSET
        self._index = 0

    def _purge(self) -> None:
        self._buffer = []
        self._returned = _UNSET
        self._index = 0

    def next(self, rng: _random.Random) -> GeneratorState:
        while True:
            if self._returned is _UNSET:
                state = self.inner.next(rng)
                if isinstance(state, Yielded):
                    self._buffer.append(state.value)
                else:
                    self._returned = state.value
                return state
            if self.length is not None and self.length <= 0:
                self._purge()
                continue
            if self._index < len(self._buffer):
                value = self._buffer[self._index]
                self._index += 1
                return Yielded(value)
            self._index = 0
            return Completed(self._returned)


class Peek(Generator):
    """Allows looking at upcoming steps of the inner generator without consuming them."""

    def __init__(self, inner: Generator) -> None:
        self.inner = inner
        self._buffer: deque[GeneratorState] = deque()

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._buffer:
            return self._buffer.popleft()
        return self.inner.next(rng)

    def peek(self, rng: _random.Random) -> GeneratorState:
        """Draw one more step ahead and return it; it is kept for later."""
        state = self.inner.next(rng)
        self._buffer.append(state)
        return state

    def peek_next(self, rng: _random.Random) -> GeneratorState:
        """Return the step that :meth:`next` will give, without consuming it."""
        if not self._buffer:
            self._buffer.append(self.inner.next(rng))
        return self._buffer[0]


class Iterable:
    """Iterates over the values a generator yields until it completes.

    The returned value is kept and handed out by :meth:`restart`, after
    which iteration goes on with the generator's next run.
    """

    def __init__(self, inner: Generator, rng: _random.Random) -> None:
        self.inner = inner
        self.rng = rng
        self._output: Any = _UNSET

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if self._output is not _UNSET:
            raise StopIteration
        state = self.inner.next(self.rng)
        if isinstance(state, Yielded):
            return state.value
        self._output = state.value
        raise StopIteration

    def restart(self) -> Any:
        """Finish the current run, return its returned value and allow a new run."""
        if self._output is _UNSET:
            for _ in self:
                pass
        value, self._output = self._output, _UNSET
        return value


class Chain(Generator):
    """Runs a sequence of generators one after the other.

    Completes with the list of values they returned, in order.
    """

    def __init__(self, generators: _IterableT[Generator] = ()) -> None:
        self._inners: list[Generator] = list(generators)
        self._index = 0
        self._completed: list[Any] = []

    def next(self, rng: _random.Random) -> GeneratorState:
        while self._index < len(self._inners):
            state = self._inners[self._index].next(rng)
            if isinstance(state, Yielded):
                return state
            self._index += 1
            self._completed.append(state.value)
        self._index = 0
        completed, self._completed = self._completed, []
        return Completed(completed)

    def extend(self, generators: _IterableT[Generator]) -> None:
        """Append more generators to the end of the chain."""
        self._inners.extend(generators)


class OneOf(Generator):
    """Picks one of several generators at random and runs it to completion.

    Completes with what the picked generator returned, or with ``None``
    when there is nothing to pick from.
    """

    def __init__(self, generators: _IterableT[Generator] = ()) -> None:
        self._inners: list[Generator] = list(generators)
        self._cursor: tuple[int, Generator] | None = None

    def next(self, rng: _random.Random) -> GeneratorState:
        if self._cursor is None:
            if not self._inners:
                return Completed(None)
            index = rng.randrange(len(self._inners))
            self._cursor = (index, self._inners.pop(index))
        index, picked = self._cursor
        state = picked.next(rng)
        if isinstance(state, Completed):
            self._cursor = None
            self._inners.insert(index, picked)
        return state


def _uniform(rng: _random.Random) -> float:
    return rng.random()


class Random(Generator):
    """Yields values drawn by ``sampler`` from the RNG, forever.

    Without a sampler it yields floats in ``[0, 1)``.
    """

    def __init__(self, sampler: Callable[[_random.Random], Any] | None = None) -> None:
        self.sampler = sampler if sampler is not None else _uniform

    def next(self, rng: _random.Random) -> GeneratorState:
        return Yielded(self.sampler(rng))


def random(sampler: Callable[[_random.Random], Any]) -> Random:
    """A generator yielding values drawn by ``sampler``."""
    return Random(sampler)


def just(value: Any) -> Once:
    """A generator that yields ``value`` and then completes with it."""
    return Yield(value).once()