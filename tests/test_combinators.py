import random as std_random

import pytest

from synthgen.combinators import (
    Aggregate,
    Chain,
    Iterable,
    OneOf,
    Peek,
    Random,
    Repeat,
    Replay,
    just,
    random,
)
from synthgen.generator import Generator, Yield
from synthgen.state import Completed, Yielded


class _Stack(Generator):
    def __init__(self, values):
        self.values = list(values)

    def next(self, rng):
        return Yielded(self.values.pop())


@pytest.fixture
def rng():
    return std_random.Random(1234)


def test_aggregate(rng):
    subject = Yield(42).once().repeat(5).aggregate()
    assert isinstance(subject, Aggregate)
    assert subject.complete(rng) == [42, 42, 42, 42, 42]


def test_aggregate_steps(rng):
    subject = just(7).aggregate()
    assert subject.next(rng) == Yielded([7])
    assert subject.next(rng) == Completed(7)


def test_take(rng):
    subject = Yield(42).once().repeat(2)
    assert isinstance(subject, Repeat)
    assert subject.next(rng) == Yielded(42)
    assert subject.next(rng) == Yielded(42)
    assert subject.next(rng) == Completed([42, 42])


def test_repeat_restarts(rng):
    subject = just(3).repeat(1)
    assert subject.next(rng) == Yielded(3)
    assert subject.next(rng) == Completed([3])
    assert subject.next(rng) == Yielded(3)
    assert subject.next(rng) == Completed([3])


def test_repeat_zero(rng):
    assert just(3).repeat(0).next(rng) == Completed([])


def test_one_of(rng):
    subject = OneOf([Yield(42).once()])
    assert subject.next(rng) == Yielded(42)
    assert subject.next(rng) == Completed(42)


def test_one_of_empty(rng):
    assert OneOf([]).next(rng) == Completed(None)


def test_one_of_picks_from_all(rng):
    subject = OneOf([just(1), just(2), just(3)])
    seen = set()
    for _ in range(60):
        seen.add(subject.complete(rng))
    assert seen == {1, 2, 3}


def test_replay(rng):
    gen = Random(lambda r: r.randint(-(2**31), 2**31 - 1)).once().replay(5)
    assert isinstance(gen, Replay)
    buf = [gen.next(rng)]
    while not buf[-1].is_complete():
        buf.append(gen.next(rng))
    assert len(buf) == 2

    for _ in range(10):
        assert [gen.next(rng) for _ in range(len(buf))] == buf

    assert gen.next(rng) == buf[0]
    fresh = [gen.next(rng) for _ in range(len(buf))]
    assert all(item != state for item, state in zip(buf, fresh))


def test_replay_forever(rng):
    gen = Random().once().replay_forever()
    first = gen.complete(rng)
    for _ in range(5):
        assert gen.complete(rng) == first


def test_replay_zero_draws_afresh(rng):
    gen = Random().once().replay(0)
    first = gen.complete(rng)
    second = gen.complete(rng)
    assert first != second


def test_peek(rng):
    peekable = _Stack([1, 2, 3]).peekable()
    assert isinstance(peekable, Peek)
    assert peekable.peek(rng) == Yielded(3)
    assert peekable.peek(rng) == Yielded(2)
    assert peekable.peek(rng) == Yielded(1)
    assert peekable.peek_next(rng) == Yielded(3)
    assert peekable.next(rng) == Yielded(3)
    assert peekable.peek_next(rng) == Yielded(2)
    assert peekable.peek_next(rng) == Yielded(2)
    assert peekable.next(rng) == Yielded(2)
    assert peekable.peek_next(rng) == Yielded(1)
    assert peekable.next(rng) == Yielded(1)


def test_chain(rng):
    subject = Chain([just(1), just(2)])
    assert subject.next(rng) == Yielded(1)
    assert subject.next(rng) == Yielded(2)
    assert subject.next(rng) == Completed([1, 2])
    assert subject.next(rng) == Yielded(1)


def test_chain_extend(rng):
    subject = Chain([just(1)])
    subject.extend([just(2), just(3)])
    assert subject.complete(rng) == [1, 2, 3]


def test_chain_empty(rng):
    assert Chain().next(rng) == Completed([])


def test_iterable(rng):
    iterable = just(5).repeat(3).into_iterator(rng)
    assert isinstance(iterable, Iterable)
    assert list(iterable) == [5, 5, 5]
    assert list(iterable) == []
    assert iterable.restart() == [5, 5, 5]
    assert list(iterable) == [5, 5, 5]


def test_iterable_restart_consumes_rest(rng):
    iterable = Chain([just("a"), just("b")]).into_iterator(rng)
    assert next(iterable) == "a"
    assert iterable.restart() == ["a", "b"]
    assert next(iterable) == "a"


def test_random_sampler(rng):
    assert Random(lambda r: 7).next(rng) == Yielded(7)


def test_random_reproducible():
    gen = random(lambda r: r.randint(0, 1000))
    left = [gen.next(std_random.Random(9)) for _ in range(3)]
    rng_a = std_random.Random(9)
    rng_b = std_random.Random(9)
    a = [gen.next(rng_a).value for _ in range(5)]
    b = [gen.next(rng_b).value for _ in range(5)]
    assert a == b
    assert left[0] == left[1] == left[2]


def test_random_default_range(rng):
    values = [Random().next(rng).value for _ in range(50)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_just(rng):
    subject = just("x")
    assert subject.next(rng) == Yielded("x")
    assert subject.next(rng) == Completed("x")