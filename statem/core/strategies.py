"""Generator combinators used by the sequence generator.

Thin adapters over ``hypothesis.strategies``. Hypothesis owns the random
source, the retry policy of filtered generation and shrinking; this module only
fixes the vocabulary (``fixed_list``, ``frequency``, ``oneof``, ``such_that``,
``sized``, ``exactly``) the model callbacks and the generator are written in.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

import hypothesis.strategies as st
from hypothesis.strategies import SearchStrategy

from .errors import InvalidWeightError


def as_strategy(value: Any) -> SearchStrategy:
    """Constants generate themselves."""
    if isinstance(value, SearchStrategy):
        return value
    return st.just(value)


def exactly(value: Any) -> SearchStrategy:
    return st.just(value)


def fixed_list(items: Iterable[Any]) -> SearchStrategy[tuple]:
    """Fixed-arity argument list; each item is a strategy or a constant."""
    parts = [as_strategy(it) for it in items]
    return st.tuples(*parts)


def args_strategy(value: Any) -> SearchStrategy[tuple]:
    """Normalize an ``args(state)`` return value to a strategy of tuples."""
    if isinstance(value, SearchStrategy):
        return value.map(tuple)
    if isinstance(value, (list, tuple)):
        return fixed_list(value)
    raise TypeError(
        f"argument generator must return a strategy or a list, got {type(value).__name__}"
    )


def oneof(strategies: Sequence[SearchStrategy]) -> SearchStrategy:
    if not strategies:
        raise ValueError("oneof requires at least one strategy")
    return st.one_of(*strategies)


def such_that(strategy: SearchStrategy, predicate: Callable[[Any], bool]) -> SearchStrategy:
    """Rejection sampling; Hypothesis decides when to give up."""
    return strategy.filter(predicate)


def sized(fn: Callable[[int], SearchStrategy], *, min_size: int = 0, max_size: int = 20) -> SearchStrategy:
    """Draw a size in ``[min_size, max_size]`` and hand it to ``fn``."""
    if min_size < 0 or max_size < min_size:
        raise ValueError(f"invalid size bounds: [{min_size}, {max_size}]")
    return st.integers(min_value=min_size, max_value=max_size).flatmap(fn)


# ---------------------------------------------------------------------------
# Weighted choice
# ---------------------------------------------------------------------------


def check_weight(label: Any, weight: Any) -> int:
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise InvalidWeightError(f"weight of {label} must be an int, got {type(weight).__name__}")
    if weight <= 0:
        raise InvalidWeightError(f"weight of {label} must be positive, got {weight} (omit it instead)")
    return int(weight)


def pick_weighted(pairs: Sequence[tuple[int, Any]], n: int) -> Any:
    """Return the item whose cumulative weight interval contains ``n``."""
    for weight, item in pairs:
        if n < weight:
            return item
        n -= weight
    raise IndexError("draw outside total weight")


def frequency(weighted: Iterable[tuple[int, SearchStrategy]]) -> SearchStrategy:
    """Choose among strategies with probability proportional to their weight.

    Shrinks toward the first entry.
    """
    pairs = [(check_weight(i, w), s) for i, (w, s) in enumerate(weighted)]
    if not pairs:
        raise InvalidWeightError("frequency requires at least one weighted strategy")
    total = sum(w for w, _ in pairs)
    return st.integers(min_value=0, max_value=total - 1).flatmap(lambda n: pick_weighted(pairs, n))
