"""
Result type and chaining helpers.

A Result is either Success(value) or Failure(error). Expected failures travel
as values through a chain of steps; exceptions raised inside a step are only
turned into a Failure by the chain's terminal ``result()`` call.

Two chain flavours are provided:
- chain(fn): synchronous, the input value is supplied to ``result(value)``
- lift_async(fn): asynchronous, steps may be plain or coroutine functions
"""

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Iterable, List, TypeVar, Union

T = TypeVar('T')
E = TypeVar('E')
U = TypeVar('U')


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying a value."""
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> 'Success[U]':
        return Success(fn(self.value))

    def and_then(self, fn: Callable[[T], 'Result']) -> 'Result':
        return fn(self.value)

    flat_map = and_then

    def map_error(self, fn: Callable[[Any], Any]) -> 'Success[T]':
        return self

    def unwrap_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Failed outcome carrying an error."""
    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> 'Failure[E]':
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> 'Failure[E]':
        return self

    flat_map = and_then

    def map_error(self, fn: Callable[[E], U]) -> 'Failure[U]':
        return Failure(fn(self.error))

    def unwrap_or(self, default: Any) -> Any:
        return default


Result = Union[Success, Failure]


def is_success(result: Result) -> bool:
    return isinstance(result, Success)


def is_failure(result: Result) -> bool:
    return isinstance(result, Failure)


def collect(results: Iterable[Result]) -> Result:
    """
    Combine results in order: Success(list of values), or the first Failure.

    Examples:
        >>> collect([Success(1), Success(2)])
        Success(value=[1, 2])
        >>> collect([Success(1), Failure('boom'), Failure('late')])
        Failure(error='boom')
    """
    values = []
    for result in results:
        if is_failure(result):
            return result
        values.append(result.value)
    return Success(values)


class Chain:
    """Synchronous chain of Result-producing steps."""

    def __init__(self, step: Callable[[Any], Result]):
        self._step = step

    def _then(self, fn: Callable[[Any], Result]) -> 'Chain':
        step = self._step

        def next_step(value):
            result = step(value)
            if is_failure(result):
                return result
            return fn(result.value)

        return Chain(next_step)

    def map(self, fn: Callable[[Any], Any]) -> 'Chain':
        return self._then(lambda value: Success(fn(value)))

    def and_then(self, fn: Callable[[Any], Result]) -> 'Chain':
        return self._then(fn)

    flat_map = and_then

    def map_error(self, fn: Callable[[Any], Any]) -> 'Chain':
        step = self._step
        return Chain(lambda value: step(value).map_error(fn))

    def flat_map_all(self, fn: Callable[[Any], List[Result]]) -> 'Chain':
        return self._then(lambda value: collect(fn(value)))

    def flat_map_all_void(self, fn: Callable[[Any], List[Result]]) -> 'Chain':
        return self._then(lambda value: collect(fn(value)).map(lambda _: value))

    def result(self, value: Any = None) -> Result:
        try:
            return self._step(value)
        except Exception as e:
            return Failure(e)


def chain(fn: Callable[[Any], Result]) -> Chain:
    return Chain(fn)


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def gather_results(items: Iterable[Union[Result, Awaitable[Result]]]) -> Result:
    """
    Run every awaitable concurrently and combine their Results.

    All branches are allowed to settle before an outcome is picked, so the
    outcome does not depend on completion order: the lowest-index exception
    is re-raised, otherwise the lowest-index Failure is returned, otherwise
    Success with the values in input order.
    """
    outcomes = await asyncio.gather(*(_resolve(item) for item in items), return_exceptions=True)

    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome
        if is_failure(outcome):
            return outcome

    return Success([outcome.value for outcome in outcomes])


class AsyncChain:
    """Asynchronous chain of Result-producing steps."""

    def __init__(self, step: Callable[[], Awaitable[Result]]):
        self._step = step

    def _then(self, fn: Callable[[Any], Any]) -> 'AsyncChain':
        step = self._step

        async def next_step():
            result = await step()
            if is_failure(result):
                return result
            return await _resolve(fn(result.value))

        return AsyncChain(next_step)

    def map(self, fn: Callable[[Any], Any]) -> 'AsyncChain':
        async def mapped(value):
            return Success(await _resolve(fn(value)))

        return self._then(mapped)

    def and_then(self, fn: Callable[[Any], Any]) -> 'AsyncChain':
        return self._then(fn)

    flat_map = and_then

    def map_error(self, fn: Callable[[Any], Any]) -> 'AsyncChain':
        step = self._step

        async def mapped():
            result = await step()
            if is_failure(result):
                return Failure(await _resolve(fn(result.error)))
            return result

        return AsyncChain(mapped)

    def flat_map_all(self, fn: Callable[[Any], Iterable[Any]]) -> 'AsyncChain':
        return self._then(lambda value: gather_results(fn(value)))

    def flat_map_all_void(self, fn: Callable[[Any], Iterable[Any]]) -> 'AsyncChain':
        async def fan_out(value):
            combined = await gather_results(fn(value))
            return combined.map(lambda _: value)

        return self._then(fan_out)

    async def result(self) -> Result:
        try:
            return await self._step()
        except Exception as e:
            return Failure(e)


def lift_async(fn: Callable[[], Any]) -> AsyncChain:
    """Start an async chain from a zero-argument callable returning a Result."""
    async def start():
        return await _resolve(fn())

    return AsyncChain(start)
