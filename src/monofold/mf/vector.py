"""
Vectors backed by contiguous storage: one-dimensional numpy arrays of any dtype (an `object` array holds anything),
and pandas Series, folded over their values in positional order with the index ignored.

Elements are read with `ndarray.item`, which hands out Python scalars; set `Config.python_scalars` to False to get
numpy scalars instead. The unseeded folds go through `numpy.frompyfunc(f, 2, 1).reduce`, which always passes
Python objects.
"""

from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Callable, Iterator, Type, TypeVar

import numpy as np
import pandas as pd

from monofold.ds import Lazy, TMonad, TMonoid, msum
from monofold.it import fold_bind, lazy_foldr, traverse_bind
from monofold.mf.core import EmptyStructure, MonoFoldable

TB = TypeVar("TB")


@dataclass
class Config:
    python_scalars: bool = True


def _vector(xs: np.ndarray) -> np.ndarray:
    if xs.ndim != 1:
        raise ValueError(f"expected a one-dimensional array, got shape {xs.shape}")
    return xs


@dataclass
class ArrayFoldable(MonoFoldable[np.ndarray, Any]):
    config: Config = field(default_factory=Config)
    element_type = object

    def element_type_of(self, xs: np.ndarray) -> type:
        dtype = _vector(xs).dtype
        if dtype == object:
            return object
        if self.config.python_scalars:
            return type(np.zeros((), dtype=dtype).item())
        return dtype.type

    def _forwards(self, xs: np.ndarray) -> Iterator[Any]:
        xs = _vector(xs)
        if self.config.python_scalars:
            return map(xs.item, range(xs.size))
        return iter(xs)

    def _backwards(self, xs: np.ndarray) -> Iterator[Any]:
        # NOTE a negative-stride slice is a view, nothing is copied
        return self._forwards(_vector(xs)[::-1])

    def fold_map(self, f: Callable[[Any], TMonoid], xs: np.ndarray, t: Type[TMonoid]) -> TMonoid:
        return msum(map(f, self._forwards(xs)), t)

    def foldr(self, f: Callable[[Any, Lazy[TB]], TB], z: TB, xs: np.ndarray) -> TB:
        return lazy_foldr(f, z, self._forwards(xs))

    def foldr_strict(self, f: Callable[[Any, TB], TB], z: TB, xs: np.ndarray) -> TB:
        return reduce(lambda acc, x: f(x, acc), self._backwards(xs), z)

    def foldr1(self, f: Callable[[Any, Any], Any], xs: np.ndarray) -> Any:
        if _vector(xs).size == 0:
            raise EmptyStructure("foldr1")
        return np.frompyfunc(lambda acc, x: f(x, acc), 2, 1).reduce(xs[::-1])

    def foldl(self, f: Callable[[TB, Any], TB], z: TB, xs: np.ndarray) -> TB:
        return reduce(f, self._forwards(xs), z)

    def foldl_strict(self, f: Callable[[TB, Any], TB], z: TB, xs: np.ndarray) -> TB:
        return reduce(f, self._forwards(xs), z)

    def foldl1(self, f: Callable[[Any, Any], Any], xs: np.ndarray) -> Any:
        if _vector(xs).size == 0:
            raise EmptyStructure("foldl1")
        return np.frompyfunc(f, 2, 1).reduce(xs)

    def fold_m(self, f: Callable[[TB, Any], TMonad], z: TB, xs: np.ndarray, m: Type[TMonad]) -> TMonad:
        return fold_bind(f, z, self._forwards(xs), m)

    def map_m_(self, f: Callable[[Any], Any], xs: np.ndarray, m: Type[TMonad]) -> TMonad:
        return traverse_bind(f, self._forwards(xs), m)


@dataclass
class SeriesFoldable(MonoFoldable[pd.Series, Any]):
    """Forwards to ArrayFoldable over `Series.to_numpy()`."""

    config: Config = field(default_factory=Config)
    element_type = object

    def __post_init__(self) -> None:
        self._array = ArrayFoldable(self.config)

    def element_type_of(self, xs: pd.Series) -> type:
        return self._array.element_type_of(xs.to_numpy())

    def fold_map(self, f: Callable[[Any], TMonoid], xs: pd.Series, t: Type[TMonoid]) -> TMonoid:
        return self._array.fold_map(f, xs.to_numpy(), t)

    def foldr(self, f: Callable[[Any, Lazy[TB]], TB], z: TB, xs: pd.Series) -> TB:
        return self._array.foldr(f, z, xs.to_numpy())

    def foldr_strict(self, f: Callable[[Any, TB], TB], z: TB, xs: pd.Series) -> TB:
        return self._array.foldr_strict(f, z, xs.to_numpy())

    def foldr1(self, f: Callable[[Any, Any], Any], xs: pd.Series) -> Any:
        return self._array.foldr1(f, xs.to_numpy())

    def foldl(self, f: Callable[[TB, Any], TB], z: TB, xs: pd.Series) -> TB:
        return self._array.foldl(f, z, xs.to_numpy())

    def foldl_strict(self, f: Callable[[TB, Any], TB], z: TB, xs: pd.Series) -> TB:
        return self._array.foldl_strict(f, z, xs.to_numpy())

    def foldl1(self, f: Callable[[Any, Any], Any], xs: pd.Series) -> Any:
        return self._array.foldl1(f, xs.to_numpy())

    def fold_m(self, f: Callable[[TB, Any], TMonad], z: TB, xs: pd.Series, m: Type[TMonad]) -> TMonad:
        return self._array.fold_m(f, z, xs.to_numpy(), m)

    def map_m_(self, f: Callable[[Any], Any], xs: pd.Series, m: Type[TMonad]) -> TMonad:
        return self._array.map_m_(f, xs.to_numpy(), m)
