"""
The MonoFoldable interface, one instance per container type, plus the registry that resolves a container value to
its instance.

Minimal complete definition is `fold_map` or `foldr`, each of the two defaults is written in terms of the other.
Every remaining operation has a default derived from those two:
 - `foldl` from `fold_map`, by mapping each element to `Dual(Endo(acc -> f(acc, x)))` and applying the composition
   to the seed,
 - `foldr` from `fold_map` the same way but with plain `Endo` over Lazy values, so it stays lazy,
 - the strict left fold, `fold_m` and `map_m_` from `foldr`, by having it build a lazy cons list whose cells are
   forced one at a time, left to right,
 - the strict right fold from `foldl`, by collecting the pending steps and running them back to front,
 - the unseeded folds by folding with an Option accumulator and unwrapping at the end.
The defaults run in loops, Endo applies its composition iteratively too, so none of them nests a Python call per
element. Only a lazy `foldr` whose combining function forces the rest inside its own call does.
"""

import logging
from collections.abc import Iterable
from functools import reduce
from typing import Any, Callable, ClassVar, Generic, Iterator, Optional, Type, TypeVar

from monofold.ds import Dual, Endo, Lazy, Nothing, Option, Some, TMonad, TMonoid, msum
from monofold.it import fold_bind, traverse_bind

logger = logging.getLogger(__name__)

TC = TypeVar("TC")
TE = TypeVar("TE")
TA = TypeVar("TA")
TB = TypeVar("TB")


class EmptyStructure(ValueError):
    """An unseeded fold (`foldl1`, `foldr1`) was asked to fold zero elements."""

    def __init__(self, op: str) -> None:
        super().__init__(f"{op}: empty structure")
        self.op = op


def reduce1(op: str, f: Callable[[TA, TA], TA], it: Iterator[TA]) -> TA:
    """`functools.reduce` seeded by the first element, EmptyStructure if there is none."""
    try:
        first = next(it)
    except StopIteration:
        raise EmptyStructure(op) from None
    return reduce(f, it, first)


class MonoFoldable(Generic[TC, TE]):
    """Folds over containers of type TC whose elements are always of type TE.

    Instances are stateless (or hold configuration only) and take the container as an argument, so a single
    instance serves every value of its container type. Override `fold_map` or `foldr`; override the rest where the
    container has something faster.
    """

    element_type: ClassVar[type] = object

    def element_type_of(self, xs: TC) -> type:
        """The type of the elements folding `xs` yields. Instances whose element type is chosen per value (a numpy
        dtype, an array typecode) override this; the others report `element_type`."""
        return self.element_type

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.fold_map is MonoFoldable.fold_map and cls.foldr is MonoFoldable.foldr:
            raise TypeError(f"{cls.__name__} must override at least one of fold_map, foldr")

    def fold_map(self, f: Callable[[TE], TMonoid], xs: TC, t: Type[TMonoid]) -> TMonoid:
        return msum(map(f, self._elements(xs)), t)

    def foldr(self, f: Callable[[TE, Lazy[TB]], TB], z: TB, xs: TC) -> TB:
        """Lazy right fold. `f` gets each element and the rest of the fold as a Lazy; the rest of the container is
        only processed when `f` forces it."""

        def step(x: TE) -> Endo[Lazy[TB]]:
            return Endo(lambda rest: Lazy(lambda: f(x, rest)))

        return self.fold_map(step, xs, Endo)(Lazy.pure(z)).force()

    def _elements(self, xs: TC) -> Iterator[TE]:
        """The elements in order, read off `foldr` as a lazy cons list `(x, Lazy(rest))` and walked in a loop, so
        forcing one cell never nests into the next."""
        cell = self.foldr(lambda x, rest: (x, rest), None, xs)
        while cell is not None:
            x, rest = cell
            yield x
            cell = rest.force()

    def foldl(self, f: Callable[[TB, TE], TB], z: TB, xs: TC) -> TB:
        def step(x: TE) -> Dual[Endo[TB]]:
            return Dual(Endo(lambda acc: f(acc, x)))

        composed = self.fold_map(step, xs, Dual)
        if composed.value is None:
            return z
        return composed.value(z)

    def foldl_strict(self, f: Callable[[TB, TE], TB], z: TB, xs: TC) -> TB:
        """Left fold evaluating every intermediate accumulator before forcing the next cell of `foldr`."""
        return reduce(f, self._elements(xs), z)

    def foldr_strict(self, f: Callable[[TE, TB], TB], z: TB, xs: TC) -> TB:
        """Right fold where `f` receives the already evaluated accumulator rather than a Lazy."""
        pending = self.foldl(_push, [], xs)
        acc = z
        while pending:
            acc = f(pending.pop(), acc)
        return acc

    def foldl1(self, f: Callable[[TE, TE], TE], xs: TC) -> TE:
        def step(acc: Option[TE], y: TE) -> Option[TE]:
            if isinstance(acc, Some):
                return Some(f(acc.value, y))
            return Some(y)

        return _unwrap("foldl1", self.foldl(step, Nothing(), xs))

    def foldr1(self, f: Callable[[TE, TE], TE], xs: TC) -> TE:
        def step(x: TE, acc: Option[TE]) -> Option[TE]:
            if isinstance(acc, Some):
                return Some(f(x, acc.value))
            return Some(x)

        return _unwrap("foldr1", self.foldr_strict(step, Nothing(), xs))

    def fold_m(self, f: Callable[[TB, TE], TMonad], z: TB, xs: TC, m: Type[TMonad]) -> TMonad:
        """Effectful left fold: the effect of `f` on element i is sequenced before the one on element i+1."""
        return fold_bind(f, z, self._elements(xs), m)

    def map_m_(self, f: Callable[[TE], Any], xs: TC, m: Type[TMonad]) -> TMonad:
        """Runs the effect of `f` on every element, in order, discarding the results."""
        return traverse_bind(f, self._elements(xs), m)


def _push(pending: list, x: Any) -> list:
    pending.append(x)
    return pending


def _unwrap(op: str, acc: Option[TE]) -> TE:
    if isinstance(acc, Some):
        return acc.value
    raise EmptyStructure(op)


class Registry:
    """Resolves container values to MonoFoldable instances, by the most specific registered class in the value's
    MRO. Unregistered iterables resolve to the fallback instance, if there is one."""

    def __init__(self, fallback: Optional[MonoFoldable] = None) -> None:
        self._instances: dict[type, MonoFoldable] = {}
        self._fallback = fallback

    def register(self, klass: type, instance: MonoFoldable) -> None:
        logger.debug(f"registering {type(instance).__name__} for {klass.__qualname__}")
        self._instances[klass] = instance

    def get(self, xs: Any) -> MonoFoldable:
        for klass in type(xs).__mro__:
            instance = self._instances.get(klass)
            if instance is not None:
                return instance
        if self._fallback is not None and isinstance(xs, Iterable):
            logger.debug(f"no instance for {type(xs).__qualname__}, falling back to {type(self._fallback).__name__}")
            return self._fallback
        raise TypeError(f"no MonoFoldable instance for {type(xs).__qualname__}")

    def __contains__(self, klass: type) -> bool:
        return klass in self._instances
