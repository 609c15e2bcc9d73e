import logging
from dataclasses import dataclass
from itertools import chain
from typing import Callable, Type, TypeVar

import pytest

from monofold.ds import IO, Lazy, Nothing, Option, Some, Sum, TMonoid, msum
from monofold.it import lazy_foldr
from monofold.mf import EmptyStructure, MonoFoldable, Registry, SequenceFoldable, TextFoldable

TB = TypeVar("TB")


@dataclass(frozen=True)
class Rope:
    """Text stored as a tuple of chunks, folded as the characters of their concatenation."""

    chunks: tuple[str, ...]


class RopeByFoldr(MonoFoldable[Rope, str]):
    def foldr(self, f: Callable[[str, Lazy[TB]], TB], z: TB, xs: Rope) -> TB:
        return lazy_foldr(f, z, chain.from_iterable(xs.chunks))


class RopeByFoldMap(MonoFoldable[Rope, str]):
    def fold_map(self, f: Callable[[str], TMonoid], xs: Rope, t: Type[TMonoid]) -> TMonoid:
        return msum((f(c) for chunk in xs.chunks for c in chunk), t)


ROPES = [Rope(()), Rope(("",)), Rope(("x",)), Rope(("he", "", "llo")), Rope(("ab", "cd", "e"))]
TEXT = TextFoldable()


def _derived_matches_text(instance: MonoFoldable) -> None:
    for rope in ROPES:
        s = "".join(rope.chunks)
        assert instance.foldl(lambda acc, c: acc + c, "", rope) == s
        assert instance.foldl_strict(lambda acc, c: c + acc, "", rope) == s[::-1]
        assert instance.foldr(lambda c, rest: c + rest.force(), "", rope) == s
        assert instance.foldr_strict(lambda c, acc: acc + c, "", rope) == s[::-1]
        assert instance.fold_map(lambda c: Sum(ord(c)), rope, Sum) == Sum(sum(map(ord, s)))
        assert instance.fold_m(lambda acc, c: Some(acc + [c]), [], rope, Option) == Some(list(s))
        if s:
            assert instance.foldl1(lambda a, b: f"({a}{b})", rope) == TEXT.foldl1(lambda a, b: f"({a}{b})", s)
            assert instance.foldr1(lambda a, b: f"({a}{b})", rope) == TEXT.foldr1(lambda a, b: f"({a}{b})", s)
        else:
            with pytest.raises(EmptyStructure):
                instance.foldl1(max, rope)
            with pytest.raises(EmptyStructure):
                instance.foldr1(max, rope)


def test_derivations_from_foldr() -> None:
    _derived_matches_text(RopeByFoldr())


def test_derivations_from_fold_map() -> None:
    _derived_matches_text(RopeByFoldMap())


@pytest.mark.parametrize("instance", [RopeByFoldr(), RopeByFoldMap()], ids=["foldr", "fold_map"])
def test_derivations_on_long_ropes(instance: MonoFoldable) -> None:
    rope = Rope(("abcde",) * 1_000)
    s = "".join(rope.chunks)
    log: list[str] = []
    assert instance.foldl(lambda acc, c: acc + 1, 0, rope) == 5_000
    assert instance.foldl_strict(lambda acc, c: acc + 1, 0, rope) == 5_000
    assert instance.foldr_strict(lambda c, acc: acc + c, "", rope) == s[::-1]
    assert instance.fold_map(lambda c: Sum(1), rope, Sum) == Sum(5_000)
    assert instance.foldl1(lambda a, b: b, rope) == "e"
    assert instance.foldr1(lambda a, b: a, rope) == "a"
    assert instance.fold_m(lambda acc, c: Some(acc + 1), 0, rope, Option) == Some(5_000)
    instance.map_m_(lambda c: IO(lambda: log.append(c)), rope, IO).run()
    assert "".join(log) == s


def test_derived_foldr_is_lazy() -> None:
    calls = []

    def first(c: str, rest: Lazy[str]) -> str:
        calls.append(c)
        return c

    assert RopeByFoldMap().foldr(first, "", Rope(("abc", "def"))) == "a"
    assert calls == ["a"]


def test_derived_map_m_orders_effects() -> None:
    log: list[str] = []
    effect = RopeByFoldr().map_m_(lambda c: IO(lambda: log.append(c)), Rope(("ab", "c")), IO)
    assert log == []
    effect.run()
    assert log == ["a", "b", "c"]


def test_derived_fold_m_stops_on_nothing() -> None:
    visited: list[str] = []

    def step(acc: int, c: str) -> Option[int]:
        visited.append(c)
        return Nothing() if c == "b" else Some(acc + 1)

    assert RopeByFoldr().fold_m(step, 0, Rope(("abc",)), Option) == Nothing()
    assert visited == ["a", "b"]


def test_minimal_definition_is_enforced() -> None:
    with pytest.raises(TypeError):

        class Incomplete(MonoFoldable[list, int]):
            def foldl(self, f, z, xs):
                return z


def test_empty_structure() -> None:
    err = EmptyStructure("foldr1")
    assert str(err) == "foldr1: empty structure"
    assert err.op == "foldr1"
    assert isinstance(err, ValueError)


def test_registry(caplog: pytest.LogCaptureFixture) -> None:
    rope = RopeByFoldr()
    fallback = SequenceFoldable()
    registry = Registry(fallback=fallback)
    registry.register(Rope, rope)
    registry.register(str, TEXT)
    assert Rope in registry

    assert registry.get(Rope(("a",))) is rope
    assert registry.get("abc") is TEXT

    class Shout(str):
        pass

    assert registry.get(Shout("abc")) is TEXT

    with caplog.at_level(logging.DEBUG, logger="monofold.mf.core"):
        assert registry.get([1, 2]) is fallback
    assert "falling back to SequenceFoldable" in caplog.text

    with pytest.raises(TypeError):
        registry.get(42)
    with pytest.raises(TypeError):
        Registry().get([1, 2])
