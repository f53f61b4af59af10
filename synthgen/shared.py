"""Generators whose output is shared between several independent readers."""

from __future__ import annotations

import random as _random
from collections import deque
from typing import Any

from .errors import custom
from .generator import Generator
from .state import GeneratorState

__all__ = ["Shared"]


class _Star:
    """One generator fanned out to several queues, one per reader."""

    def __init__(self, generator: Generator) -> None:
        self.inner = generator
        self.routes: dict[int, deque[GeneratorState]] = {}

    def register(self, queue: deque[GeneratorState] | None = None) -> int:
        new_id = max(self.routes) + 1 if self.routes else 0
        self.routes[new_id] = queue if queue is not None else deque()
        return new_id

    def register_from(self, route_id: int) -> int:
        return self.register(deque(self.routes[route_id]))

    def unregister(self, route_id: int) -> deque[GeneratorState]:
        """Remove a reader's queue and return what was still pending in it."""
        return self.routes.pop(route_id)

    def next_for(self, route_id: int, rng: _random.Random) -> GeneratorState:
        queue = self.routes[route_id]
        if not queue:
            state = self.inner.next(rng)
            for route in self.routes.values():
                route.append(state)
        return queue.popleft()


class Shared(Generator):
    """A handle on a generator whose steps are seen by every handle.

    Each step of the underlying generator is delivered to every open
    handle in turn. A clone starts from where the handle it was cloned
    from stands. Closing a handle stops steps being kept for it.
    """

    def __init__(self, generator: Generator, *, _star: _Star | None = None, _id: int | None = None) -> None:
        if _star is None:
            _star = _Star(generator)
            _id = _star.register()
        self._star = _star
        self._id: int | None = _id

    def _route(self) -> int:
        if self._id is None:
            raise custom("shared generator is closed")
        return self._id

    def next(self, rng: _random.Random) -> GeneratorState:
        return self._star.next_for(self._route(), rng)

    def clone(self) -> "Shared":
        """A new handle that continues from where this one stands."""
        new_id = self._star.register_from(self._route())
        return Shared(self._star.inner, _star=self._star, _id=new_id)

    def close(self) -> None:
        """Stop receiving steps; further calls to :meth:`next` raise."""
        if self._id is not None:
            self._star.unregister(self._id)
            self._id = None

    def inner(self) -> Generator:
        """The underlying generator."""
        return self._star.inner

    def __copy__(self) -> "Shared":
        return self.clone()

    def __enter__(self) -> "Shared":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()