"""
Byte buffers: `bytes`, `bytearray` and `memoryview`, always folded as a flat run of unsigned octets (`int` in
0..255), whatever the format of a memoryview passed in.

`map_m_` is hand-written rather than derived: the derived traversal builds a continuation per byte through the
lazy right fold, while this walks a read-only view by index and binds one effect per byte. A bytearray stays
locked against resizing while the view is held.
"""

import logging
from functools import reduce
from typing import Any, Callable, Iterator, Type, TypeVar, Union

from monofold.ds import Lazy, TMonad, TMonoid, msum
from monofold.it import lazy_foldr
from monofold.mf.core import MonoFoldable, reduce1

logger = logging.getLogger(__name__)

TB = TypeVar("TB")

ByteString = Union[bytes, bytearray, memoryview]


def octets(xs: ByteString) -> memoryview:
    """Read-only, one-dimensional, unsigned-byte view of the buffer. Strided views can't be cast, so those are
    copied into a contiguous buffer first."""
    view = memoryview(xs)
    if not view.c_contiguous:
        view = memoryview(view.tobytes())
    return view.cast("B").toreadonly()


def _forwards(xs: ByteString) -> Iterator[int]:
    if isinstance(xs, memoryview):
        return iter(octets(xs))
    return iter(xs)


def _backwards(xs: ByteString) -> Iterator[int]:
    if isinstance(xs, memoryview):
        return reversed(octets(xs))
    return reversed(xs)


class BytesFoldable(MonoFoldable[ByteString, int]):
    element_type = int

    def fold_map(self, f: Callable[[int], TMonoid], xs: ByteString, t: Type[TMonoid]) -> TMonoid:
        return msum(map(f, _forwards(xs)), t)

    def foldr(self, f: Callable[[int, Lazy[TB]], TB], z: TB, xs: ByteString) -> TB:
        return lazy_foldr(f, z, _forwards(xs))

    def foldr_strict(self, f: Callable[[int, TB], TB], z: TB, xs: ByteString) -> TB:
        return reduce(lambda acc, x: f(x, acc), _backwards(xs), z)

    def foldr1(self, f: Callable[[int, int], int], xs: ByteString) -> int:
        return reduce1("foldr1", lambda acc, x: f(x, acc), _backwards(xs))

    def foldl(self, f: Callable[[TB, int], TB], z: TB, xs: ByteString) -> TB:
        return reduce(f, _forwards(xs), z)

    def foldl_strict(self, f: Callable[[TB, int], TB], z: TB, xs: ByteString) -> TB:
        return reduce(f, _forwards(xs), z)

    def foldl1(self, f: Callable[[int, int], int], xs: ByteString) -> int:
        return reduce1("foldl1", f, _forwards(xs))

    def map_m_(self, f: Callable[[int], Any], xs: ByteString, m: Type[TMonad]) -> TMonad:
        effect = m.pure(None)
        with octets(xs) as view:
            length = len(view)
            logger.debug(f"traversing {length} bytes")
            i = 0
            while i < length:
                effect = effect.bind(_apply(f, view[i]))
                i += 1
        return effect.bind(lambda _: m.pure(None))


def _apply(f: Callable[[int], Any], b: int) -> Callable[[Any], Any]:
    return lambda _: f(b)
