"""
Module contents:
 - Monoid: a Protocol representing "things you can sum together", accompanied with the `msum` function. Stock
   instances are Sum, Product, Endo (function composition) and Dual (the same monoid with its arguments flipped).
 - Lazy: a memoised thunk. Lazy right folds hand the not-yet-computed rest of the fold to the combining function as
   a Lazy, so that a function which does not `force()` it never touches the rest of the container.
 - Monad: a Protocol representing "effects you can sequence", with stock instances Identity, Option (Some/Nothing)
   and IO. These are what the effectful folds (`fold_m`, `map_m_`) are parametrised by.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Optional, Protocol, Type, TypeVar, runtime_checkable

from typing_extensions import Self

T = TypeVar("T")
TA = TypeVar("TA")


# *** Monoid ***
@runtime_checkable
class Monoid(Protocol):
    """Something with an associative `+` and an identity element. Python's own `sum` is then the monoid
    concatenation, given the identity as the start value -- which is what `msum` does for you."""

    @abstractmethod
    def __add__(self, other: Self) -> Self:
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def empty(cls) -> Self:
        raise NotImplementedError


# NOTE it is rather unfortunate that the following method needs the Type explicitly -- because Python has, afaik,
# no proper template/macro capability to infer that information from the context. Also, we can't just turn it
# into a classmethod, if we want Monoid to stay a protocol and not become an ABC.
TMonoid = TypeVar("TMonoid", bound=Monoid)


def msum(i: Iterable[TMonoid], t: Type[TMonoid]) -> TMonoid:
    return sum(i, start=t.empty())


@dataclass(frozen=True)
class Sum:
    value: Any = 0

    def __add__(self, other: Self) -> Self:
        return Sum(self.value + other.value)

    @classmethod
    def empty(cls) -> Self:
        return cls(0)


@dataclass(frozen=True)
class Product:
    value: Any = 1

    def __add__(self, other: Self) -> Self:
        return Product(self.value * other.value)

    @classmethod
    def empty(cls) -> Self:
        return cls(1)


@dataclass(frozen=True)
class Endo(Generic[TA]):
    """Functions from a type to itself, under composition. `(Endo(f) + Endo(g))(x) == f(g(x))`.

    Composing only links the two operands; calling walks the links with an explicit stack, so a composition of any
    length is applied without nesting Python calls."""

    fn: Optional[Callable[[TA], TA]] = None
    parts: tuple["Endo[TA]", ...] = ()

    def __add__(self, other: "Endo[TA]") -> "Endo[TA]":
        return Endo(parts=(self, other))

    @classmethod
    def empty(cls) -> "Endo[TA]":
        return cls()

    def __call__(self, x: TA) -> TA:
        pending = [self]
        while pending:
            endo = pending.pop()
            if endo.fn is not None:
                x = endo.fn(x)
            # the right operand is applied first, so it goes on top
            pending.extend(endo.parts)
        return x


@dataclass(frozen=True)
class Dual(Generic[TMonoid]):
    """The wrapped monoid with `+` flipped: `Dual(a) + Dual(b) == Dual(b + a)`."""

    value: Optional[TMonoid]  # None is the identity, because of type erasure we couldn't `empty()` the wrapped type

    def __add__(self, other: Self) -> Self:
        if self.value is None:
            return other
        if other.value is None:
            return self
        return Dual(other.value + self.value)

    @classmethod
    def empty(cls) -> Self:
        return cls(None)


# *** Lazy ***
_unforced: Any = object()


class Lazy(Generic[T]):
    """A computation that runs at most once, on the first `force()`. The thunk is dropped afterwards so that
    whatever it closed over can be collected."""

    __slots__ = ("_thunk", "_value")

    def __init__(self, thunk: Callable[[], T]) -> None:
        self._thunk: Optional[Callable[[], T]] = thunk
        self._value: T = _unforced

    @classmethod
    def pure(cls, value: T) -> "Lazy[T]":
        lazy: Lazy[T] = cls(lambda: value)
        lazy.force()
        return lazy

    @property
    def forced(self) -> bool:
        return self._value is not _unforced

    def force(self) -> T:
        if self._value is _unforced:
            thunk = self._thunk
            assert thunk is not None
            self._value = thunk()
            self._thunk = None
        return self._value

    def __repr__(self) -> str:
        return f"Lazy({self._value!r})" if self.forced else "Lazy(<unforced>)"


# *** Monad ***
@runtime_checkable
class Monad(Protocol):
    """An effect that can be sequenced. `m.bind(f)` runs `m`, then the effect `f` builds from its result; `pure`
    wraps a plain value in an effect that does nothing. Same as with Monoid, functions that need `pure` before any
    value of the effect exists take the type explicitly."""

    @abstractmethod
    def bind(self, f: Callable[[Any], Self]) -> Self:
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def pure(cls, value: Any) -> Self:
        raise NotImplementedError


TMonad = TypeVar("TMonad", bound=Monad)


@dataclass(frozen=True)
class Identity(Generic[T]):
    """No effect at all, just a value. Binds run immediately."""

    value: T

    def bind(self, f: Callable[[T], "Identity[Any]"]) -> "Identity[Any]":
        return f(self.value)

    @classmethod
    def pure(cls, value: T) -> "Identity[T]":
        return cls(value)


class Option(ABC, Generic[T]):
    """Either `Some(value)` or `Nothing()`. Binding on Nothing skips the rest of the chain."""

    @classmethod
    def pure(cls, value: T) -> "Option[T]":
        return Some(value)

    @abstractmethod
    def bind(self, f: Callable[[T], "Option[Any]"]) -> "Option[Any]":
        raise NotImplementedError


@dataclass(frozen=True)
class Some(Option[T]):
    value: T

    def bind(self, f: Callable[[T], Option[Any]]) -> Option[Any]:
        return f(self.value)


@dataclass(frozen=True)
class Nothing(Option[Any]):
    def bind(self, f: Callable[[Any], Option[Any]]) -> Option[Any]:
        return self


class IO(Generic[T]):
    """A deferred side effect. Building and binding IO values does nothing; `run()` performs the effects in bind
    order and returns the final value. `run()` keeps pending continuations on an explicit stack, so arbitrarily
    long bind chains (either nesting) do not grow the Python call stack."""

    def __init__(self, effect: Callable[[], T]) -> None:
        self._effect = effect

    @classmethod
    def pure(cls, value: T) -> "IO[T]":
        return cls(lambda: value)

    def bind(self, f: Callable[[T], "IO[Any]"]) -> "IO[Any]":
        return _Bind(self, f)

    def run(self) -> T:
        pending: list[Callable[[Any], IO[Any]]] = []
        io: IO[Any] = self
        while True:
            if isinstance(io, _Bind):
                pending.append(io.f)
                io = io.source
                continue
            value = io._effect()
            if not pending:
                return value
            io = pending.pop()(value)


class _Bind(IO[T]):
    def __init__(self, source: IO[Any], f: Callable[[Any], IO[T]]) -> None:
        self.source = source
        self.f = f
