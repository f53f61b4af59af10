# synthgen

Composable, stateful generators of random data streams.

A `Generator` (from `synthgen.generator`) is stepped with `next(rng)`, where
`rng` is a `random.Random` instance. Each step returns either
`Yielded(value)`, an intermediate value in the stream, or `Completed(value)`,
the value the stream returns when a run ends. Both live in `synthgen.state`.
Generators may run forever; `complete(rng)` steps one until it completes and
returns the completed value.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Building blocks

- `synthgen.generator.Yield(value)` yields `value` forever.
- `synthgen.generator.Complete(value)` completes at once with `value` on every
  step; `Complete.empty()` completes with `None`.
- `synthgen.combinators.random(sampler)` yields `sampler(rng)` forever;
  `Random()` with no sampler yields floats in `[0, 1)`.
- `synthgen.combinators.just(value)` yields `value` once and then completes
  with it.
- `Chain(generators)` runs several generators one after another and completes
  with the list of their returned values; `extend(generators)` appends more.
- `OneOf(generators)` picks one generator at random and runs it to completion,
  completing with what it returned, or with `None` when it holds none.

## Combinators

Every generator offers methods that build larger ones:

- `once()` yields each value and then completes with it.
- `map_complete(func)` and `map_yielded(func)` transform returned or yielded
  values; `MapComplete.into_inner()` gives back the wrapped generator.
- `and_then(func)` runs to completion, then runs `func(returned)`.
- `concatenate(right)` runs both and completes with the pair of returned values.
- `prefix(gen)`, `suffix(gen)` and `brace(begin, end)` surround the stream,
  keeping the inner generator's returned value.
- `exhaust()` completes in one step with the inner generator's returned value.
- `inspect(func)` calls `func` on every step and passes it through.
- `maybe()` either runs the generator or completes at once with `None`, with
  even odds.
- `infallible()` wraps every returned value in `Ok`.
- `aggregate()` yields one list of everything a run yielded, then completes
  with the run's returned value.
- `repeat(length)` runs `length` times and completes with the list of returned
  values.
- `replay(length)` and `replay_forever()` record one run and play it back on
  every later run. With `replay(0)` nothing is kept and every run is drawn
  afresh.
- `peekable()` returns a `Peek`: `peek(rng)` draws one more step ahead and keeps
  it; `peek_next(rng)` shows the step `next` will give without consuming it.
- `into_iterator(rng)` returns an `Iterable` over the yielded values of a run;
  `restart()` finishes the run, returns its returned value and lets iteration
  continue with the next run.

## Results

`synthgen.state` defines `Ok(value)` and `Err(value)`, with `is_ok()`,
`map(func)` and `map_err(func)`. A `GeneratorState` offers `is_yielded()`,
`is_complete()`, `into_yielded()`, `into_complete()`, `map_complete`,
`map_yielded`, `map_ok` and `map_err`.

Generators that complete with `Ok` or `Err` have the fallible forms (classes
in `synthgen.trying`):

- `try_next(rng)` steps the generator; `try_next_yielded(rng)` returns the next
  yielded value, skipping `Ok` completions and raising the error of an `Err`
  (errors that are not exceptions are raised as `CustomError`).
- `try_once()`, `map_ok(func)`, `and_then_try(func)`, `or_else_try(func)`.
- `try_filter_map(func)` reruns until `func` keeps a returned value; `func`
  returns the value to keep, `None` to drop the run, or an `Err` to fail.
- `try_aggregate()` yields the run's values as one list unless the run fails.
- `unwrap()`, for streams that yield results, yields the `Ok` values and
  completes with the first `Err`.

## Example

```python
import random

from synthgen.generator import Yield
from synthgen.state import Completed, Yielded

rng = random.Random(0)
gen = Yield(42).once().brace(Yield(-42).once(), Yield(84).once())

assert gen.next(rng) == Yielded(-42)
assert gen.next(rng) == Yielded(42)
assert gen.next(rng) == Yielded(84)
assert gen.next(rng) == Completed(42)
```

## Sharing a stream

`synthgen.shared.Shared(generator)` wraps a generator so that several handles
read the same stream: every step of the generator is delivered to each open
handle. `clone()` gives a handle that starts from where its source stands,
`inner()` returns the wrapped generator, and `close()` (also called on leaving
a `with` block) stops steps being kept for the handle; stepping a closed handle
raises `CustomError`.

## Errors

Failures raise subclasses of `GenError` from `synthgen.errors`:
`TypeMismatchError`, `DeserializeError`, `SerializeError` and `CustomError`,
built directly or through `custom(msg)` and `type_mismatch(expected, got)`.

## What it does not do

The package produces streams of Python values only. It does not turn generated
streams into JSON or any other serialized form, nor build values back from
them; `DeserializeError` and `SerializeError` are defined but nothing in the
package raises them.