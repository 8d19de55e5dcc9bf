"""Small combinators for building pipelines without intermediate state.

The pipeline stages, the table operations and the pointer setter are all
assembled from these.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

T = TypeVar("T")


def compose(first: Callable[..., Any], *fns: Callable[[Any], Any]) -> Callable[..., Any]:
    """Left-to-right composition: ``compose(f, g, h)(x) == h(g(f(x)))``.

    Only ``first`` may take several arguments; every later function receives
    the previous result.
    """

    def composed(*args: Any, **kwargs: Any) -> Any:
        result = first(*args, **kwargs)
        for fn in fns:
            result = fn(result)
        return result

    return composed


def _arity(fn: Callable[..., Any]) -> int:
    parameters = inspect.signature(fn).parameters.values()
    return sum(
        1
        for p in parameters
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    )


def curry(fn: Callable[..., Any], arity: int | None = None) -> Callable[..., Any]:
    """Curry ``fn`` over its required positional parameters.

    Each call may supply one or more arguments; once ``arity`` arguments have
    been collected ``fn`` is invoked. A call with no arguments counts as one,
    so a one-argument function can be triggered without passing anything.

    Example:
        >>> add = curry(lambda a, b, c: a + b + c)
        >>> add(1)(2)(3) == add(1, 2)(3) == add(1, 2, 3)
        True
    """
    remaining = arity if arity is not None else _arity(fn)

    def curried(*args: Any) -> Any:
        supplied = len(args) or 1
        if supplied >= remaining:
            return fn(*args)

        def partial(*more: Any) -> Any:
            return fn(*args, *more)

        return curry(partial, remaining - len(args))

    return curried


def tap(fn: Callable[[T], Any]) -> Callable[[T], T]:
    """Run ``fn`` for its side effect and pass the argument through unchanged."""

    def tapped(arg: T) -> T:
        fn(arg)
        return arg

    return tapped


def swap(fn: Callable[[Any, Any], T]) -> Callable[[Any, Any], T]:
    """Swap the two arguments of a binary function (reverses a comparator)."""

    def swapped(a: Any, b: Any) -> T:
        return fn(b, a)

    return swapped


def every(fns: Iterable[Callable[..., bool]]) -> Callable[..., bool]:
    """AND a list of predicates; an empty list accepts everything."""
    predicates = list(fns)

    def all_of(*args: Any) -> bool:
        return all(fn(*args) for fn in predicates)

    return all_of


def negate(fn: Callable[..., bool]) -> Callable[..., bool]:
    """Logical NOT of a predicate."""

    def negated(*args: Any) -> bool:
        return not fn(*args)

    return negated
