from dataclasses import dataclass, replace

import pytest
from typing_extensions import Self

from monofold.ds import IO, Dual, Endo, Identity, Lazy, Monad, Monoid, Nothing, Option, Product, Some, Sum, msum


@dataclass
class AMonoid:
    a: int

    def __add__(self, other: Self) -> Self:
        return replace(self, a=self.a + other.a)

    @classmethod
    def empty(cls) -> Self:
        return cls(0)


def test_monoid() -> None:
    l1 = [AMonoid(4), AMonoid(5)]
    l2: list[AMonoid] = []
    assert msum(l1, AMonoid) == AMonoid(a=9)
    assert msum(l2, AMonoid) == AMonoid(a=0)
    assert isinstance(AMonoid(1), Monoid)


def test_sum_product() -> None:
    assert msum([Sum(1), Sum(2), Sum(3)], Sum) == Sum(6)
    assert msum([Product(2), Product(3), Product(4)], Product) == Product(24)
    assert msum([], Product) == Product(1)


def test_endo_composes_right_to_left() -> None:
    inc = Endo(lambda x: x + 1)
    dbl = Endo(lambda x: x * 2)
    assert (inc + dbl)(5) == 11
    assert (dbl + inc)(5) == 12
    assert Endo.empty()(5) == 5


def test_long_endo_compositions_apply_in_a_loop() -> None:
    inc = Endo(lambda x: x + 1)
    assert msum([inc] * 10_000, Endo)(0) == 10_000
    assert msum([Dual(inc)] * 10_000, Dual).value(0) == 10_000
    steps = [Endo(lambda s, c=c: s + c) for c in "abcde" * 2_000]
    assert msum(steps, Endo)("") == ("abcde" * 2_000)[::-1]


def test_dual_flips() -> None:
    inc = Endo(lambda x: x + 1)
    dbl = Endo(lambda x: x * 2)
    flipped = Dual(inc) + Dual(dbl)
    assert flipped.value is not None
    assert flipped.value(5) == 12
    assert Dual.empty() + Dual(inc) == Dual(inc)
    assert Dual(inc) + Dual.empty() == Dual(inc)


def test_lazy_runs_once() -> None:
    calls = []

    def thunk() -> int:
        calls.append(1)
        return 42

    lazy = Lazy(thunk)
    assert not lazy.forced
    assert calls == []
    assert lazy.force() == 42
    assert lazy.force() == 42
    assert calls == [1]
    assert lazy.forced
    assert Lazy.pure(3).forced


def test_option() -> None:
    assert Option.pure(1) == Some(1)
    assert Some(1).bind(lambda x: Some(x + 1)) == Some(2)
    assert Some(1).bind(lambda _: Nothing()) == Nothing()

    def boom(_: int) -> Option[int]:
        raise AssertionError("bind on Nothing must not call f")

    assert Nothing().bind(boom) == Nothing()
    assert isinstance(Some(1), Monad)


def test_option_is_abstract() -> None:
    with pytest.raises(TypeError):
        Option()


def test_identity() -> None:
    assert Identity(2).bind(lambda x: Identity(x * 3)) == Identity(6)
    assert Identity.pure("a") == Identity("a")


def test_io_is_deferred_and_ordered() -> None:
    log: list[str] = []

    def say(word: str) -> IO[None]:
        return IO(lambda: log.append(word))

    program = say("a").bind(lambda _: say("b")).bind(lambda _: IO.pure(7))
    assert log == []
    assert program.run() == 7
    assert log == ["a", "b"]


def test_io_long_chains_are_stack_safe() -> None:
    left = IO.pure(0)
    for _ in range(100_000):
        left = left.bind(lambda n: IO.pure(n + 1))
    assert left.run() == 100_000

    def countdown(n: int) -> IO[int]:
        if n == 0:
            return IO.pure("done")
        return IO.pure(n - 1).bind(countdown)

    assert countdown(100_000).run() == "done"
