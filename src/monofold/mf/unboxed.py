"""
`array.array`: elements are fixed-width primitives stored unboxed, as selected by the typecode. Folds use the
array's own iteration, which boxes one element at a time into the matching Python scalar.
"""

from array import array
from functools import reduce
from typing import Any, Callable, Type, TypeVar

from monofold.ds import Lazy, TMonad, TMonoid, msum
from monofold.it import fold_bind, lazy_foldr, traverse_bind
from monofold.mf.core import MonoFoldable, reduce1

TB = TypeVar("TB")


class UnboxedFoldable(MonoFoldable[array, Any]):
    element_type = object

    def element_type_of(self, xs: array) -> type:
        """The Python type the typecode of `xs` boxes to."""
        if xs.typecode == "u" or xs.typecode == "w":
            return str
        if xs.typecode in "fd":
            return float
        return int

    def fold_map(self, f: Callable[[Any], TMonoid], xs: array, t: Type[TMonoid]) -> TMonoid:
        return msum(map(f, xs), t)

    def foldr(self, f: Callable[[Any, Lazy[TB]], TB], z: TB, xs: array) -> TB:
        return lazy_foldr(f, z, iter(xs))

    def foldr_strict(self, f: Callable[[Any, TB], TB], z: TB, xs: array) -> TB:
        return reduce(lambda acc, x: f(x, acc), reversed(xs), z)

    def foldr1(self, f: Callable[[Any, Any], Any], xs: array) -> Any:
        return reduce1("foldr1", lambda acc, x: f(x, acc), reversed(xs))

    def foldl(self, f: Callable[[TB, Any], TB], z: TB, xs: array) -> TB:
        return reduce(f, xs, z)

    def foldl_strict(self, f: Callable[[TB, Any], TB], z: TB, xs: array) -> TB:
        return reduce(f, xs, z)

    def foldl1(self, f: Callable[[Any, Any], Any], xs: array) -> Any:
        return reduce1("foldl1", f, iter(xs))

    def fold_m(self, f: Callable[[TB, Any], TMonad], z: TB, xs: array, m: Type[TMonad]) -> TMonad:
        return fold_bind(f, z, xs, m)

    def map_m_(self, f: Callable[[Any], Any], xs: array, m: Type[TMonad]) -> TMonad:
        return traverse_bind(f, xs, m)
