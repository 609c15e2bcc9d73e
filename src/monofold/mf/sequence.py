"""
Any iterable, folded through Python's own primitives: iteration, `functools.reduce` and `reversed`. This is the
instance unregistered iterables fall back to.
"""

from functools import reduce
from typing import Callable, Iterable, Type, TypeVar

from monofold.ds import Lazy, TMonoid, msum
from monofold.it import backwards, lazy_foldr
from monofold.mf.core import MonoFoldable, reduce1

T = TypeVar("T")
TB = TypeVar("TB")


class SequenceFoldable(MonoFoldable[Iterable[T], T]):
    element_type = object

    def fold_map(self, f: Callable[[T], TMonoid], xs: Iterable[T], t: Type[TMonoid]) -> TMonoid:
        return msum(map(f, xs), t)

    def foldr(self, f: Callable[[T, Lazy[TB]], TB], z: TB, xs: Iterable[T]) -> TB:
        return lazy_foldr(f, z, iter(xs))

    def foldr_strict(self, f: Callable[[T, TB], TB], z: TB, xs: Iterable[T]) -> TB:
        return reduce(lambda acc, x: f(x, acc), backwards(xs), z)

    def foldr1(self, f: Callable[[T, T], T], xs: Iterable[T]) -> T:
        return reduce1("foldr1", lambda acc, x: f(x, acc), backwards(xs))

    def foldl(self, f: Callable[[TB, T], TB], z: TB, xs: Iterable[T]) -> TB:
        return reduce(f, xs, z)

    def foldl_strict(self, f: Callable[[TB, T], TB], z: TB, xs: Iterable[T]) -> TB:
        # NOTE Python evaluates eagerly, the strict and lazy left folds are the same reduce
        return reduce(f, xs, z)

    def foldl1(self, f: Callable[[T, T], T], xs: Iterable[T]) -> T:
        return reduce1("foldl1", f, iter(xs))
