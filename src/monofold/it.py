"""
Module contents:
    - lazy_foldr -- right fold over an iterator that only advances when the combining function forces the rest,
    - backwards -- iterate a container from its last element, materialising only when it is not reversible,
    - fold_bind -- effectful left fold as a left-nested chain of binds,
    - traverse_bind -- effectful traversal discarding the results, same shape as `fold_bind`.

This whole module is based on iterators, no unneeded list allocations are happening. These are the native
primitives the container adaptations forward to.
"""
from collections.abc import Reversible
from typing import Any, Callable, Iterable, Iterator, Type, TypeVar

from monofold.ds import Lazy, TMonad

TA = TypeVar("TA")
TB = TypeVar("TB")


def lazy_foldr(f: Callable[[TA, Lazy[TB]], TB], z: TB, it: Iterator[TA]) -> TB:
    """`f(x1, Lazy(f(x2, Lazy(... z))))`. The iterator is advanced once per forced Lazy, in order, so folding an
    infinite generator terminates as soon as `f` stops forcing."""

    def go() -> TB:
        try:
            x = next(it)
        except StopIteration:
            return z
        return f(x, Lazy(go))

    return go()


def backwards(xs: Iterable[TA]) -> Iterator[TA]:
    if isinstance(xs, Reversible):
        return reversed(xs)
    # NOTE one-shot iterables have no end to start from
    return reversed(tuple(xs))


def fold_bind(f: Callable[[TB, TA], TMonad], z: TB, xs: Iterable[TA], m: Type[TMonad]) -> TMonad:
    """`pure(z) >>= f(_, x1) >>= f(_, x2) ...`. The chain is left-nested, so eagerly evaluated effects (Option,
    Identity) run in a loop rather than in nested calls."""
    effect = m.pure(z)
    for x in xs:
        effect = effect.bind(_flip_step(f, x))
    return effect


def traverse_bind(f: Callable[[TA], Any], xs: Iterable[TA], m: Type[TMonad]) -> TMonad:
    effect = m.pure(None)
    for x in xs:
        effect = effect.bind(_then(f, x))
    return effect.bind(_unit(m))


def _flip_step(f: Callable[[TB, TA], TMonad], x: TA) -> Callable[[TB], TMonad]:
    return lambda acc: f(acc, x)


def _then(f: Callable[[TA], Any], x: TA) -> Callable[[Any], Any]:
    return lambda _: f(x)


def _unit(m: Type[TMonad]) -> Callable[[Any], TMonad]:
    return lambda _: m.pure(None)
