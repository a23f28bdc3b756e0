"""Configuration (ring + interior) data model, .conf reader and dual edge ids."""

from __future__ import annotations
from dataclasses import dataclass
from itertools import combinations
from pathlib import Path
from typing import Iterable, Sequence

Edge = tuple[int, int]
VertexPath = tuple[int, ...]


class ConfigurationError(ValueError):
    """Raised when a configuration or its contraction input breaks the input contract."""


@dataclass(frozen=True, slots=True)
class Configuration:
    """
    A configuration together with its ring.

    Vertices are integers in [0, n). The first r of them form the ring, in
    cyclic order; the rest are interior (configuration) vertices.

    The adjacency is normalised to a tuple of sorted neighbour tuples so that
    every traversal visits neighbours in ascending order.
    """
    n: int
    r: int
    adjacency: tuple[tuple[int, ...], ...]

    def __post_init__(self):
        if self.r < 3:
            raise ConfigurationError(f"ring size must be at least 3, got {self.r}")
        if self.n < self.r:
            raise ConfigurationError(f"vertex count {self.n} is smaller than ring size {self.r}")
        if len(self.adjacency) != self.n:
            raise ConfigurationError(
                f"adjacency has {len(self.adjacency)} entries, expected {self.n}"
            )
        normalised = tuple(tuple(sorted(set(nbrs))) for nbrs in self.adjacency)
        object.__setattr__(self, "adjacency", normalised)

        for v, nbrs in enumerate(normalised):
            for u in nbrs:
                if not 0 <= u < self.n:
                    raise ConfigurationError(f"vertex {v} has out-of-range neighbour {u}")
                if u == v:
                    raise ConfigurationError(f"vertex {v} has a self-loop")
                if v not in normalised[u]:
                    raise ConfigurationError(f"edge ({v}, {u}) is not symmetric")
        for i in range(self.r):
            if (i + 1) % self.r not in normalised[i]:
                raise ConfigurationError(f"ring edge ({i}, {(i + 1) % self.r}) is missing")

    @classmethod
    def from_adjacency(cls, r: int, adjacency: Sequence[Iterable[int]]) -> Configuration:
        """Build from any sequence of neighbour iterables (0-based)."""
        return cls(n=len(adjacency), r=r, adjacency=tuple(tuple(a) for a in adjacency))

    @classmethod
    def from_interior(cls, r: int, interior: Sequence[Iterable[int]]) -> Configuration:
        """
        Build from the neighbour lists of the interior vertices only.

        Ring edges are synthesised from r. interior[i] lists the neighbours of
        vertex r + i; every listed edge is added in both directions.

        Args:
            r: Ring size
            interior: Neighbour lists (0-based) of vertices r, r+1, ...

        Returns:
            The configuration on r + len(interior) vertices
        """
        n = r + len(interior)
        adj: list[set[int]] = [set() for _ in range(n)]
        for i in range(r):
            adj[i].add((i + 1) % r)
            adj[(i + 1) % r].add(i)
        for offset, nbrs in enumerate(interior):
            v = r + offset
            for u in nbrs:
                if not 0 <= u < n:
                    raise ConfigurationError(f"vertex {v} has out-of-range neighbour {u}")
                adj[v].add(u)
                adj[u].add(v)
        return cls.from_adjacency(r, adj)

    def is_ring(self, v: int) -> bool:
        """True iff v is a ring vertex."""
        return 0 <= v < self.r

    def neighbors(self, v: int) -> tuple[int, ...]:
        return self.adjacency[v]

    def degree(self, v: int) -> int:
        return len(self.adjacency[v])

    def has_edge(self, u: int, v: int) -> bool:
        return v in self.adjacency[u]

    def arc_length(self, a: int, b: int) -> int:
        """Number of ring edges from a forward (increasing index) to b."""
        self.require_ring(a, b)
        return (b - a) % self.r if a != b else self.r

    def ring_between(self, p: int, q: int) -> list[int]:
        """Ring vertices strictly between p and q going forward from p."""
        self.require_ring(p, q)
        result = []
        v = (p + 1) % self.r
        while v != q:
            result.append(v)
            v = (v + 1) % self.r
        return result

    def require_ring(self, *vertices: int) -> None:
        for v in vertices:
            if not self.is_ring(v):
                raise ConfigurationError(f"vertex {v} is not a ring vertex (r={self.r})")

    def edges(self) -> list[Edge]:
        """All edges as (min, max) pairs, sorted."""
        return [(v, u) for v in range(self.n) for u in self.adjacency[v] if v < u]

    def __repr__(self) -> str:
        return f"Configuration(n={self.n}, r={self.r}, edges={len(self.edges())})"


def parse_conf(text: str, source: str = "<string>") -> Configuration:
    """
    Parse the textual .conf format.

    Format:
        line 1      : free-form header (ignored)
        then        : n r
        then per interior vertex v = r+1..n (1-based): v d u_1 ... u_d

    Tokens after the header may wrap freely across lines. Neighbours below r
    get the reverse edge added; ring edges are synthesised from r alone.

    Raises:
        ConfigurationError: If the stream is short or inconsistent
    """
    lines = text.splitlines()
    if not lines:
        raise ConfigurationError(f"{source}: empty configuration file")
    tokens = " ".join(lines[1:]).split()
    try:
        values = [int(tok) for tok in tokens]
    except ValueError as exc:
        raise ConfigurationError(f"{source}: non-integer token ({exc})") from exc

    pos = 0

    def take() -> int:
        nonlocal pos
        if pos >= len(values):
            raise ConfigurationError(f"{source}: unexpected end of file")
        value = values[pos]
        pos += 1
        return value

    n, r = take(), take()
    if r < 3 or n < r:
        raise ConfigurationError(f"{source}: invalid sizes n={n}, r={r}")

    adj: list[set[int]] = [set() for _ in range(n)]
    for i in range(r):
        adj[i].add((i + 1) % r)
        adj[(i + 1) % r].add(i)
    for i in range(r, n):
        v = take() - 1
        if v != i:
            raise ConfigurationError(f"{source}: expected vertex {i + 1}, found {v + 1}")
        d = take()
        for _ in range(d):
            u = take() - 1
            if not 0 <= u < n:
                raise ConfigurationError(f"{source}: vertex {v + 1} has out-of-range neighbour {u + 1}")
            adj[v].add(u)
            if u < r:
                adj[u].add(v)

    try:
        return Configuration.from_adjacency(r, adj)
    except ConfigurationError as exc:
        raise ConfigurationError(f"{source}: {exc}") from exc


def read_conf(path: Path | str) -> Configuration:
    """
    Read a configuration from a .conf file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    with open(path) as f:
        return parse_conf(f.read(), source=str(path))


def triangles(conf: Configuration) -> list[tuple[int, int, int]]:
    """All triangles (x < y < z), sorted."""
    found = []
    for x, y, z in combinations(range(conf.n), 3):
        if conf.has_edge(x, y) and conf.has_edge(y, z) and conf.has_edge(x, z):
            found.append((x, y, z))
    return found


def dual_edge_order(conf: Configuration) -> list[Edge]:
    """
    Primal edges in dual edge-id order.

    Ring edges come first in ring order, then the edges of every triangle in
    ascending order, each edge numbered the first time it is seen.
    """
    order: list[Edge] = []
    seen: set[Edge] = set()

    def add(x: int, y: int) -> None:
        e = (min(x, y), max(x, y))
        if e not in seen:
            seen.add(e)
            order.append(e)

    for i in range(conf.r):
        add(i, (i + 1) % conf.r)
    for x, y, z in triangles(conf):
        add(x, y)
        add(y, z)
        add(z, x)
    return order


def edges_from_ids(conf: Configuration, edge_ids: Iterable[int]) -> list[Edge]:
    """
    Translate dual edge ids into primal vertex pairs.

    Raises:
        ConfigurationError: If an id has no edge
    """
    order = dual_edge_order(conf)
    edges = []
    for eid in edge_ids:
        if not 0 <= eid < len(order):
            raise ConfigurationError(f"edge id {eid} out of range (0..{len(order) - 1})")
        edges.append(order[eid])
    return edges
