import random

import pytest

from synthgen.combinators import just
from synthgen.errors import CustomError
from synthgen.generator import Generator, Yield
from synthgen.state import Completed, Err, Ok, Yielded
from synthgen.trying import (
    AndThenTry,
    MapOk,
    OrElseTry,
    TryAggregate,
    TryFilterMap,
    TryOnce,
    Unwrap,
)


class _Script(Generator):
    """Plays back a fixed list of steps."""

    def __init__(self, states):
        self._states = iter(states)

    def next(self, rng):
        return next(self._states)


@pytest.fixture
def rng():
    return random.Random(7)


def test_unwrap_unpacks_ok_and_stops_on_err(rng):
    gen = _Script([Yielded(Ok(1)), Yielded(Err("boom"))]).unwrap()
    assert isinstance(gen, Unwrap)
    assert gen.next(rng) == Yielded(1)
    assert gen.next(rng) == Completed(Err("boom"))


def test_unwrap_wraps_completion_in_ok(rng):
    gen = _Script([Completed("done")]).unwrap()
    assert gen.next(rng) == Completed(Ok("done"))


def test_try_once_yields_then_completes_ok(rng):
    gen = Yield(7).try_once()
    assert isinstance(gen, TryOnce)
    assert gen.next(rng) == Yielded(7)
    assert gen.next(rng) == Completed(Ok(7))
    assert gen.next(rng) == Yielded(7)


def test_try_once_passes_error_through(rng):
    gen = _Script([Completed(Err("bad"))]).try_once()
    assert gen.next(rng) == Completed(Err("bad"))


def test_try_once_rejects_successful_completion(rng):
    gen = _Script([Completed(Ok("x"))]).try_once()
    with pytest.raises(CustomError):
        gen.next(rng)


def test_and_then_try_continues_on_ok(rng):
    gen = just(3).infallible().and_then_try(lambda v: just(("after", v)).infallible())
    assert isinstance(gen, AndThenTry)
    assert gen.next(rng) == Yielded(3)
    assert gen.next(rng) == Yielded(("after", 3))
    assert gen.next(rng) == Completed(Ok(("after", 3)))


def test_and_then_try_stops_on_err(rng):
    calls = []

    def follow(value):
        calls.append(value)
        return just(value).infallible()

    gen = _Script([Yielded("a"), Completed(Err("bad"))]).and_then_try(follow)
    assert gen.next(rng) == Yielded("a")
    assert gen.next(rng) == Completed(Err("bad"))
    assert calls == []


def test_or_else_try_recovers_from_err(rng):
    gen = _Script([Yielded("a"), Completed(Err("bad"))]).or_else_try(
        lambda err: just(("recovered", err)).infallible()
    )
    assert isinstance(gen, OrElseTry)
    assert gen.next(rng) == Yielded("a")
    assert gen.next(rng) == Yielded(("recovered", "bad"))
    assert gen.next(rng) == Completed(Ok(("recovered", "bad")))


def test_or_else_try_passes_ok_through(rng):
    calls = []
    gen = _Script([Completed(Ok("fine"))]).or_else_try(lambda err: calls.append(err))
    assert gen.next(rng) == Completed(Ok("fine"))
    assert calls == []


def test_try_filter_map_drops_rejected_runs(rng):
    inner = _Script(
        [
            Yielded("x"),
            Completed(Ok("skip")),
            Yielded("y"),
            Completed(Ok("keep")),
        ]
    )
    gen = inner.try_filter_map(lambda v: v if v == "keep" else None)
    assert isinstance(gen, TryFilterMap)
    assert gen.next(rng) == Yielded("y")
    assert gen.next(rng) == Completed(Ok("keep"))


def test_try_filter_map_func_error(rng):
    inner = _Script([Yielded("x"), Completed(Ok("v"))])
    gen = inner.try_filter_map(lambda v: Err(("nope", v)))
    assert gen.next(rng) == Completed(Err(("nope", "v")))


def test_try_filter_map_inner_error(rng):
    gen = _Script([Completed(Err("bad"))]).try_filter_map(lambda v: v)
    assert gen.next(rng) == Completed(Err("bad"))


def test_try_aggregate_collects_then_completes(rng):
    inner = _Script([Yielded(1), Yielded(2), Completed(Ok("done"))])
    gen = inner.try_aggregate()
    assert isinstance(gen, TryAggregate)
    assert gen.next(rng) == Yielded([1, 2])
    assert gen.next(rng) == Completed(Ok("done"))


def test_try_aggregate_error_drops_values(rng):
    inner = _Script([Yielded(1), Completed(Err("bad"))])
    assert inner.try_aggregate().next(rng) == Completed(Err("bad"))


def test_map_ok_transforms_success(rng):
    gen = just(4).infallible().map_ok(lambda v: (v, "mapped"))
    assert isinstance(gen, MapOk)
    assert gen.next(rng) == Yielded(4)
    assert gen.next(rng) == Completed(Ok((4, "mapped")))


def test_map_ok_leaves_error(rng):
    gen = _Script([Completed(Err("bad"))]).map_ok(lambda v: (v, "mapped"))
    assert gen.next(rng) == Completed(Err("bad"))


def test_map_ok_rejects_non_result(rng):
    gen = _Script([Completed("plain")]).map_ok(lambda v: v)
    with pytest.raises(TypeError):
        gen.next(rng)