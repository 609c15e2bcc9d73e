"""Text, folded one character (a length-one `str`) at a time."""

from functools import reduce
from typing import Callable, TypeVar

from monofold.ds import Lazy
from monofold.it import lazy_foldr
from monofold.mf.core import MonoFoldable, reduce1

TB = TypeVar("TB")


class TextFoldable(MonoFoldable[str, str]):
    element_type = str

    def foldr(self, f: Callable[[str, Lazy[TB]], TB], z: TB, xs: str) -> TB:
        return lazy_foldr(f, z, iter(xs))

    def foldr1(self, f: Callable[[str, str], str], xs: str) -> str:
        return reduce1("foldr1", lambda acc, c: f(c, acc), reversed(xs))

    def foldl(self, f: Callable[[TB, str], TB], z: TB, xs: str) -> TB:
        return reduce(f, xs, z)

    def foldl_strict(self, f: Callable[[TB, str], TB], z: TB, xs: str) -> TB:
        return reduce(f, xs, z)

    def foldl1(self, f: Callable[[str, str], str], xs: str) -> str:
        return reduce1("foldl1", f, iter(xs))
