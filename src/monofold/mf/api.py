"""
Folds as plain functions. Each takes the MonoFoldable instance as the optional trailing argument; when it is not
given, the instance is looked up from the container's type in the default registry.
"""

from array import array
from typing import Any, Callable, Optional, Type, TypeVar

import numpy as np
import pandas as pd

from monofold.ds import Lazy, TMonad, TMonoid
from monofold.mf.bytestring import BytesFoldable
from monofold.mf.core import MonoFoldable, Registry
from monofold.mf.sequence import SequenceFoldable
from monofold.mf.text import TextFoldable
from monofold.mf.unboxed import UnboxedFoldable
from monofold.mf.vector import ArrayFoldable, SeriesFoldable

TA = TypeVar("TA")
TB = TypeVar("TB")


def default_registry() -> Registry:
    registry = Registry(fallback=SequenceFoldable())
    bytestring = BytesFoldable()
    registry.register(bytes, bytestring)
    registry.register(bytearray, bytestring)
    registry.register(memoryview, bytestring)
    registry.register(str, TextFoldable())
    registry.register(np.ndarray, ArrayFoldable())
    registry.register(pd.Series, SeriesFoldable())
    registry.register(array, UnboxedFoldable())
    return registry


_registry = default_registry()


def register(klass: type, instance: MonoFoldable) -> None:
    """Make `instance` the default for values of `klass` and its subclasses."""
    _registry.register(klass, instance)


def instance_for(xs: Any) -> MonoFoldable:
    return _registry.get(xs)


def _resolve(xs: Any, c: Optional[MonoFoldable]) -> MonoFoldable:
    return c if c is not None else _registry.get(xs)


def fold_map(f: Callable[[Any], TMonoid], xs: Any, t: Type[TMonoid], c: Optional[MonoFoldable] = None) -> TMonoid:
    return _resolve(xs, c).fold_map(f, xs, t)


def foldr(f: Callable[[Any, Lazy[TB]], TB], z: TB, xs: Any, c: Optional[MonoFoldable] = None) -> TB:
    return _resolve(xs, c).foldr(f, z, xs)


def foldr_strict(f: Callable[[Any, TB], TB], z: TB, xs: Any, c: Optional[MonoFoldable] = None) -> TB:
    return _resolve(xs, c).foldr_strict(f, z, xs)


def foldr1(f: Callable[[TA, TA], TA], xs: Any, c: Optional[MonoFoldable] = None) -> TA:
    return _resolve(xs, c).foldr1(f, xs)


def foldl(f: Callable[[TB, Any], TB], z: TB, xs: Any, c: Optional[MonoFoldable] = None) -> TB:
    return _resolve(xs, c).foldl(f, z, xs)


def foldl_strict(f: Callable[[TB, Any], TB], z: TB, xs: Any, c: Optional[MonoFoldable] = None) -> TB:
    return _resolve(xs, c).foldl_strict(f, z, xs)


def foldl1(f: Callable[[TA, TA], TA], xs: Any, c: Optional[MonoFoldable] = None) -> TA:
    return _resolve(xs, c).foldl1(f, xs)


def fold_m(
    f: Callable[[TB, Any], TMonad], z: TB, xs: Any, m: Type[TMonad], c: Optional[MonoFoldable] = None
) -> TMonad:
    return _resolve(xs, c).fold_m(f, z, xs, m)


def map_m_(f: Callable[[Any], Any], xs: Any, m: Type[TMonad], c: Optional[MonoFoldable] = None) -> TMonad:
    return _resolve(xs, c).map_m_(f, xs, m)


def element_type_of(xs: Any, c: Optional[MonoFoldable] = None) -> type:
    return _resolve(xs, c).element_type_of(xs)
