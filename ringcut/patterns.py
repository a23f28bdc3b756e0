"""
Boundary-pattern catalogue.

A pattern places ring vertices a, b, c, ... (in cyclic order) on a
surrounding 6- or 7-cycle: segment i runs outside the configuration from
the i-th to the next vertex with a fixed length. Shapes constrain the
contracted distances (0 or 1) between some of the vertices; every ring
tuple matching a shape is tried against the rules of that shape.
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import combinations

import numpy as np

_LETTERS = "abcde"


@dataclass(frozen=True, slots=True)
class Shape:
    """
    Distance constraints on a tuple of ring vertices.

    Named like "ab0_ac1_bc1": every token fixes the contracted distance
    between two tuple positions. The first token is always "ab".
    """
    name: str
    size: int
    constraints: tuple[tuple[int, int, int], ...]

    @classmethod
    def parse(cls, name: str) -> Shape:
        constraints = []
        for token in name.split("_"):
            i, j, d = _LETTERS.index(token[0]), _LETTERS.index(token[1]), int(token[2])
            constraints.append((i, j, d))
        assert constraints[0][:2] == (0, 1), f"shape {name} must start with ab"
        size = max(max(i, j) for i, j, _ in constraints) + 1
        return cls(name=name, size=size, constraints=tuple(constraints))

    def matches(self, dist_contracted: np.ndarray, vs: tuple[int, ...]) -> bool:
        return all(dist_contracted[vs[i], vs[j]] == d for i, j, d in self.constraints)


def find_ring_tuples(dist_contracted: np.ndarray, r: int, shape: Shape) -> list[tuple[int, ...]]:
    """
    All ring tuples in cyclic order matching a shape.

    For every pair a < b at the required distance the tuple is either
    (a, b, ...) with the rest on the arc after b, or (b, a, ...) with the
    rest strictly between a and b. Pairs are only reported as (a, b).

    Args:
        dist_contracted: Contracted distance matrix
        r: Ring size
        shape: Constraints to satisfy

    Returns:
        Sorted list of distinct tuples
    """
    found = set()
    d0 = shape.constraints[0][2]
    extra = shape.size - 2
    for a in range(r):
        for b in range(a + 1, r):
            if dist_contracted[a, b] != d0:
                continue
            if extra == 0:
                found.add((a, b))
                continue
            for rest in combinations(range(b + 1, a + r), extra):
                vs = (a, b) + tuple(x % r for x in rest)
                if shape.matches(dist_contracted, vs):
                    found.add(vs)
            for rest in combinations(range(a + 1, b), extra):
                vs = (b, a) + rest
                if shape.matches(dist_contracted, vs):
                    found.add(vs)
    return sorted(found)


@dataclass(frozen=True, slots=True)
class ChainCheck:
    """forbidden_vertex_size on the tuple positions in order."""
    order: tuple[int, ...]
    k: int
    rev: bool = False


@dataclass(frozen=True, slots=True)
class PairCheck:
    """forbidden_vertex_size_pair on two runs of tuple positions."""
    first: tuple[int, ...]
    second: tuple[int, ...]
    k1: int
    k2: int


@dataclass(frozen=True, slots=True)
class PatternRule:
    """
    One catalogue entry.

    Attributes:
        tag: Case name, e.g. "6cut-7"
        label: Pattern label as reported, e.g. "24-1"
        shape: Name of the tuple shape
        lengths: Segment lengths (sum is the cut size)
        one_edge: Segments closed through one extra edge
        order: Permutation of the tuple positions used for validation and
            the report
        check: Optional vertex-size check; a pattern it confirms is excluded
    """
    tag: str
    label: str
    shape: str
    lengths: tuple[int, ...]
    one_edge: tuple[bool, ...]
    order: tuple[int, ...]
    check: ChainCheck | PairCheck | None = None

    @property
    def cut_size(self) -> int:
        return sum(self.lengths)


def _positions(letters: str) -> tuple[int, ...]:
    return tuple(_LETTERS.index(x) for x in letters)


def _chain(order: str, k: int, rev: bool = False) -> ChainCheck:
    return ChainCheck(order=_positions(order), k=k, rev=rev)


def _pair(first: str, second: str, k1: int, k2: int) -> PairCheck:
    return PairCheck(first=_positions(first), second=_positions(second), k1=k1, k2=k2)


def _rule(
    tag: str,
    label: str,
    shape: str,
    lengths: str,
    mask: str,
    check: ChainCheck | PairCheck | None = None,
    order: str | None = None
) -> PatternRule:
    lens = tuple(int(x) for x in lengths)
    assert len(mask) == len(lens)
    return PatternRule(
        tag=tag,
        label=label,
        shape=shape,
        lengths=lens,
        one_edge=tuple(x == "1" for x in mask),
        order=_positions(order) if order else tuple(range(len(lens))),
        check=check,
    )


PATTERN_RULES: tuple[PatternRule, ...] = (
    _rule("6cut-1", "24", "ab0", "24", "00", _chain("ba", 4)),
    _rule("6cut-1", "42", "ab0", "42", "00", _chain("ab", 4)),

    _rule("6cut-2", "2121", "ab0_cd0", "2121", "0000"),

    _rule("6cut-3", "222", "ab0_ac0_bc0", "222", "000"),

    _rule("6cut-4", "2121", "ab0_cd1", "2121", "0000"),
    _rule("6cut-4", "2121-1", "ab0_cd0", "2121", "1000"),
    _rule("6cut-4", "2121-2", "ab0_cd0", "2121", "0100"),
    _rule("6cut-4", "2121-3", "ab0_cd0", "2121", "0010"),
    _rule("6cut-4", "2121-4", "ab0_cd0", "2121", "0001"),

    _rule("6cut-5", "222", "ab0_ac1_bc1", "222", "000"),
    _rule("6cut-5", "222-1", "ab0_ac0_bc0", "222", "100"),
    _rule("6cut-5", "222-2", "ab0_ac0_bc0", "222", "010"),
    _rule("6cut-5", "222-3", "ab0_ac0_bc0", "222", "001"),

    _rule("6cut-6", "33", "ab0", "33", "00"),

    _rule("6cut-7", "24", "ab1", "24", "00", _chain("ba", 4)),
    _rule("6cut-7", "42", "ab1", "42", "00", _chain("ab", 4)),
    _rule("6cut-7", "24-1", "ab0", "24", "10", _chain("ba", 5)),
    _rule("6cut-7", "42-1", "ab0", "42", "10", _chain("ab", 5)),
    _rule("6cut-7", "24-2", "ab0", "24", "01", _chain("ba", 5)),
    _rule("6cut-7", "42-2", "ab0", "42", "01", _chain("ab", 5)),

    _rule("6cut-8", "2121", "ab1_cd1", "2121", "0000", _pair("ab", "cd", 1, 1)),
    _rule("6cut-8", "2121-1", "ab0_cd1", "2121", "1000", _pair("ab", "cd", 2, 1)),
    _rule("6cut-8", "2121-2", "ab0_cd1", "2121", "0100", _pair("ab", "cd", 2, 1)),
    _rule("6cut-8", "2121-14", "ab0_cd0", "2121", "1001", _pair("ab", "cd", 3, 1)),
    _rule("6cut-8", "2121-23", "ab0_cd0", "2121", "0110", _pair("ab", "cd", 3, 1)),
    _rule("6cut-8", "2121-13", "ab0_cd0", "2121", "1010", _pair("ab", "cd", 2, 2)),
    _rule("6cut-8", "2121-24", "ab0_cd0", "2121", "0101", _pair("ab", "cd", 2, 2)),

    _rule("6cut-9", "222", "ab1_bc1", "222", "000", _chain("abc", 2, rev=True)),
    _rule("6cut-9", "222-1", "ab0_bc1", "222", "100", _chain("abc", 3, rev=True)),
    _rule("6cut-9", "222-3", "ab1_bc0", "222", "001", _chain("abc", 3, rev=True)),
    _rule("6cut-9", "222-13", "ab0_ac0_bc0", "222", "101", _chain("abc", 4, rev=True)),
    _rule("6cut-9", "222-13", "ab0_ac0_bc0", "222", "101", _chain("bca", 4, rev=True), order="bca"),
    _rule("6cut-9", "222-13", "ab0_ac0_bc0", "222", "101", _chain("cab", 4, rev=True), order="cab"),
    _rule("6cut-9", "2220-14", "ab0_cd0", "2220", "1001", _pair("ab", "cd", 2, 2)),
    _rule("6cut-9", "2022-23", "ab0_cd0", "2022", "0110", _pair("ab", "cd", 2, 2)),

    _rule("6cut-10", "222", "ab1_ac1_bc1", "222", "000"),
    _rule("6cut-10", "2220-14", "ab0_bc1_cd0", "2220", "1001"),

    _rule("7cut-1", "25", "ab0", "25", "00", _chain("ba", 5)),
    _rule("7cut-1", "52", "ab0", "52", "00", _chain("ab", 5)),

    _rule("7cut-2", "3121", "ab0_cd0", "3121", "0000"),
    _rule("7cut-2", "2131", "ab0_cd0", "2131", "0000"),

    _rule("7cut-3", "2122", "ab0_cd0", "2122", "0000"),
    _rule("7cut-3", "2221", "ab0_cd0", "2221", "0000"),

    _rule("7cut-4", "322", "ab0_ac0_bc0", "322", "000"),
    _rule("7cut-4", "232", "ab0_ac0_bc0", "232", "000"),
    _rule("7cut-4", "223", "ab0_ac0_bc0", "223", "000"),

    _rule("7cut-5", "223", "ab0_bc1", "223", "000", _chain("abc", 3, rev=True)),
    _rule("7cut-5", "223", "ab1_bc0", "223", "000", _chain("abc", 3, rev=True)),
    _rule("7cut-5", "223-1", "ab0_ac0_bc0", "223", "100", _chain("abc", 4, rev=True)),
    _rule("7cut-5", "223-1", "ab0_ac0_bc0", "223", "100", _chain("bca", 4, rev=True), order="bca"),
    _rule("7cut-5", "223-1", "ab0_ac0_bc0", "223", "100", _chain("cab", 4, rev=True), order="cab"),
    _rule("7cut-5", "223-1", "ab0_ac0_bc0", "322", "100", _chain("bca", 4, rev=True)),
    _rule("7cut-5", "223-1", "ab0_ac0_bc0", "322", "100", _chain("cab", 4, rev=True), order="bca"),
    _rule("7cut-5", "223-1", "ab0_ac0_bc0", "322", "100", _chain("abc", 4, rev=True), order="cab"),

    _rule("7cut-6", "2122", "ab0_cd1", "2122", "0000", _pair("ab", "cd", 1, 2)),
    _rule("7cut-6", "2221", "ab0_cd1", "2221", "0000", _pair("ab", "cd", 1, 2)),
    _rule("7cut-6", "2122-1", "ab0_cd0", "2122", "1000", _pair("ab", "cd", 1, 3)),
    _rule("7cut-6", "2221-2", "ab0_cd0", "2221", "0100", _pair("ab", "cd", 1, 3)),
    _rule("7cut-6", "2221-3", "ab0_cd0", "2221", "0010", _pair("ab", "cd", 1, 3)),
    _rule("7cut-6", "2122-4", "ab0_cd0", "2122", "0001", _pair("ab", "cd", 1, 3)),
    _rule("7cut-6", "2221-1", "ab0_cd0", "2221", "1000", _pair("ab", "cd", 2, 2)),
    _rule("7cut-6", "2122-2", "ab0_cd0", "2122", "0100", _pair("ab", "cd", 2, 2)),
    _rule("7cut-6", "2122-3", "ab0_cd0", "2122", "0010", _pair("ab", "cd", 2, 2)),
    _rule("7cut-6", "2221-4", "ab0_cd0", "2221", "0001", _pair("ab", "cd", 2, 2)),

    _rule("7cut-7", "2221", "ab0_bc1_cd1", "2221", "0000"),
    _rule("7cut-7", "2221", "ab1_bc1_cd0", "2221", "0000"),
    _rule("7cut-7", "2221-1", "ab0_bc1_cd0", "2221", "1000"),
    _rule("7cut-7", "2221-4", "ab0_bc1_cd0", "2221", "0001"),
    _rule("7cut-7", "22021-34", "ab0_bc0_de0", "22021", "00110"),
    _rule("7cut-7", "22120-15", "ab0_bc0_de0", "22120", "10001"),

    _rule("7cut-8", "2221", "ab1_bc0_cd1", "2221", "0000"),
    _rule("7cut-8", "2221-1", "ab0_bc0_cd1", "2221", "1000"),
    _rule("7cut-8", "2221-4", "ab1_bc0_cd0", "2221", "0001"),
    _rule("7cut-8", "2221-14", "ab0_bc0_cd0", "2221", "1001"),
    _rule("7cut-8", "2221-14", "ab0_bc0_cd0", "2221", "1001", order="bcda"),
    _rule("7cut-8", "2221-14", "ab0_bc0_cd0", "2221", "1001", order="cdab"),
    _rule("7cut-8", "2221-14", "ab0_bc0_cd0", "2221", "1001", order="dabc"),

    _rule("7cut-9", "34", "ab0", "34", "00"),
    _rule("7cut-9", "43", "ab0", "43", "00"),

    _rule("7cut-10", "322", "ab0_ac1_bc1", "322", "000"),
    _rule("7cut-10", "232-1", "ab0_ac0_bc0", "232", "100"),
    _rule("7cut-10", "223-2", "ab0_ac0_bc0", "223", "010"),
    _rule("7cut-10", "322-3", "ab0_ac0_bc0", "322", "001"),

    _rule("7cut-11", "3121", "ab0_cd1", "3121", "0000"),
    _rule("7cut-11", "2131-1", "ab0_cd0", "2131", "1000"),
    _rule("7cut-11", "2131-2", "ab0_cd0", "2131", "0100"),
    _rule("7cut-11", "3121-3", "ab0_cd0", "3121", "0010"),
    _rule("7cut-11", "3121-4", "ab0_cd0", "3121", "0001"),

    _rule("7cut-12", "25", "ab1", "25", "00", _chain("ba", 5)),
    _rule("7cut-12", "52", "ab1", "52", "00", _chain("ab", 5)),
    _rule("7cut-12", "25-1", "ab0", "25", "10", _chain("ba", 6)),
    _rule("7cut-12", "52-1", "ab0", "52", "10", _chain("ab", 6)),
    _rule("7cut-12", "25-2", "ab0", "25", "01", _chain("ba", 6)),
    _rule("7cut-12", "52-2", "ab0", "52", "01", _chain("ab", 6)),

    _rule("7cut-13", "223", "ab1_bc1", "223", "000", _chain("abc", 3, rev=True)),
    _rule("7cut-13", "223-1", "ab0_bc1", "223", "100", _chain("abc", 4, rev=True)),
    _rule("7cut-13", "223-3", "ab1_bc0", "223", "001", _chain("abc", 4, rev=True)),
    _rule("7cut-13", "322-12", "ab0_ac0_bc0", "322", "110", _chain("bca", 5, rev=True)),
    _rule("7cut-13", "223-13", "ab0_ac0_bc0", "223", "101", _chain("abc", 5, rev=True)),
    _rule("7cut-13", "232-23", "ab0_ac0_bc0", "232", "011", _chain("cab", 5, rev=True)),
    _rule("7cut-13", "2320-14", "ab0_cd0", "2320", "1001", _pair("ab", "cd", 2, 3)),
    _rule("7cut-13", "2023-23", "ab0_cd0", "2023", "0110", _pair("ab", "cd", 2, 3)),

    _rule("7cut-14", "2221", "ab1_cd1", "2221", "0000", _pair("ab", "cd", 1, 2)),
    _rule("7cut-14", "2122", "ab1_cd1", "2122", "0000", _pair("ab", "cd", 1, 2)),
    _rule("7cut-14", "2122-1", "ab0_cd1", "2122", "1000", _pair("ab", "cd", 1, 3)),
    _rule("7cut-14", "2221-2", "ab0_cd1", "2221", "0100", _pair("ab", "cd", 1, 3)),
    _rule("7cut-14", "2221-1", "ab0_cd1", "2221", "1000", _pair("ab", "cd", 2, 2)),
    _rule("7cut-14", "2122-2", "ab0_cd1", "2122", "0100", _pair("ab", "cd", 2, 2)),
    _rule("7cut-14", "2122-14", "ab0_cd0", "2122", "1001", _pair("ab", "cd", 1, 4)),
    _rule("7cut-14", "2221-23", "ab0_cd0", "2221", "0110", _pair("ab", "cd", 1, 4)),
    _rule("7cut-14", "2221-14", "ab0_cd0", "2221", "1001", _pair("ab", "cd", 2, 3)),
    _rule("7cut-14", "2122-23", "ab0_cd0", "2122", "0110", _pair("ab", "cd", 2, 3)),
    _rule("7cut-14", "2122-13", "ab0_cd0", "2122", "1010", _pair("ab", "cd", 2, 3)),
    _rule("7cut-14", "2221-24", "ab0_cd0", "2221", "0101", _pair("ab", "cd", 2, 3)),
    _rule("7cut-14", "2221-13", "ab0_cd0", "2221", "1010", _pair("ab", "cd", 2, 3)),
    _rule("7cut-14", "2122-24", "ab0_cd0", "2122", "0101", _pair("ab", "cd", 2, 3)),

    _rule("7cut-15", "2221", "ab1_bc1_cd1", "2221", "0000", _chain("abcd", 1, rev=True)),
    _rule("7cut-15", "2221-1", "ab0_bc1_cd1", "2221", "1000", _chain("abcd", 2, rev=True)),
    _rule("7cut-15", "2221-4", "ab1_bc1_cd0", "2221", "0001", _chain("abcd", 2, rev=True)),
    _rule("7cut-15", "2221-14", "ab0_bc1_cd0", "2221", "1001", _chain("abcd", 3, rev=True)),
    _rule("7cut-15", "22021-34", "ab1_bc0_de0", "22021", "00110", _pair("abc", "de", 1, 2)),
    _rule("7cut-15", "22120-15", "ab0_bc1_de0", "22120", "10001", _pair("abc", "de", 1, 2)),
    _rule("7cut-15", "22120-135", "ab0_bc0_de0", "22120", "10101", _pair("abc", "de", 2, 2)),
    _rule("7cut-15", "22021-134", "ab0_bc0_de0", "22021", "10110", _pair("abc", "de", 2, 2)),
)


def shapes_in_use() -> list[Shape]:
    """Distinct shapes referenced by the catalogue, in first-use order."""
    names = list(dict.fromkeys(rule.shape for rule in PATTERN_RULES))
    return [Shape.parse(name) for name in names]
