"""
This module provides folds over monomorphic containers: containers whose element type is fixed by the container
type itself. A `bytes` always yields `int`s, a `str` always yields one-character `str`s, so one fold algorithm can be
written once and run over any of them, each container type contributing its own fast iteration.

Supported out of the box:
 - any iterable (list, tuple, range, generators, ...) -- SequenceFoldable, also the fallback for unregistered types,
 - `bytes`, `bytearray`, `memoryview` -- BytesFoldable, elements are octets,
 - `str` -- TextFoldable, elements are characters,
 - one-dimensional `numpy.ndarray` and `pandas.Series` -- ArrayFoldable, SeriesFoldable,
 - `array.array` -- UnboxedFoldable.

To use, call the module-level functions (`foldr`, `foldl_strict`, `fold_m`, ...) which pick the instance by the
container's type, or call the methods on an instance directly. Folds needing an identity element or an effect type
take it explicitly, e.g. `fold_map(Sum, xs, Sum)` or `fold_m(step, 0, xs, Option)`.

To support a new container type, subclass MonoFoldable overriding `fold_map` or `foldr` (plus whatever else the
container does faster than the defaults) and `register` it.
"""

from monofold.mf.api import (  # noqa: F401
    default_registry,
    element_type_of,
    fold_m,
    fold_map,
    foldl,
    foldl1,
    foldl_strict,
    foldr,
    foldr1,
    foldr_strict,
    instance_for,
    map_m_,
    register,
)
from monofold.mf.bytestring import BytesFoldable  # noqa: F401
from monofold.mf.core import EmptyStructure, MonoFoldable, Registry  # noqa: F401
from monofold.mf.sequence import SequenceFoldable  # noqa: F401
from monofold.mf.text import TextFoldable  # noqa: F401
from monofold.mf.unboxed import UnboxedFoldable  # noqa: F401
from monofold.mf.vector import ArrayFoldable, SeriesFoldable  # noqa: F401
from monofold.mf.vector import Config as VectorConfig  # noqa: F401
