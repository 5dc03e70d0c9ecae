from dataclasses import dataclass
from typing import Dict, Generic, Set, Tuple

from .graph import Graph, V, check_vertex, check_weight


@dataclass(frozen=True)
class Edge(Generic[V]):
    """Immutable directed edge source -> target with a positive weight."""

    source: V
    target: V
    weight: int

    def __post_init__(self):
        if self.source is None or self.target is None:
            raise ValueError("edge endpoints cannot be None")
        if self.weight <= 0:
            raise ValueError(f"edge weight must be positive, got {self.weight}")

    def __str__(self):
        return f"{self.source} -> {self.target} ({self.weight})"


class EdgesGraph(Graph[V]):
    """
    Graph stored as a vertex set plus a collection of Edge records.

    Edges are keyed by their (source, target) pair, which keeps at most one
    edge per ordered pair. _out and _in index the pairs by endpoint so that
    targets() and sources() do not scan every edge.

    Rep invariant:
      - every edge endpoint is in self._vertices
      - every edge weight is > 0
      - self._edges[(s, t)] has source s and target t
      - t in self._out[s] and s in self._in[t] exactly when (s, t) is an edge
    """

    def __init__(self):
        self._vertices: Set[V] = set()
        self._edges: Dict[Tuple[V, V], Edge] = {}
        self._out: Dict[V, Set[V]] = {}
        self._in: Dict[V, Set[V]] = {}
        self._check_rep()

    def _check_rep(self):
        for pair in self._edges:
            self._check_edge(*pair)
        assert sum(map(len, self._out.values())) == len(self._edges), "stale _out index"
        assert sum(map(len, self._in.values())) == len(self._edges), "stale _in index"

    def _check_edge(self, source, target):
        assert source in self._vertices, f"edge from non-vertex {source!r}"
        assert target in self._vertices, f"edge to non-vertex {target!r}"
        e = self._edges.get((source, target))
        indexed_out = target in self._out.get(source, ())
        indexed_in = source in self._in.get(target, ())
        if e is None:
            assert not indexed_out and not indexed_in, f"index names missing edge {source!r} -> {target!r}"
            return
        assert (e.source, e.target) == (source, target), f"misfiled edge {e}"
        assert e.weight > 0, f"non-positive weight on {e}"
        assert indexed_out and indexed_in, f"unindexed edge {e}"

    def add_vertex(self, vertex: V) -> bool:
        check_vertex(vertex)
        if vertex in self._vertices:
            return False
        self._vertices.add(vertex)
        return True

    def set_edge(self, source: V, target: V, weight: int) -> int:
        check_vertex(source)
        check_vertex(target)
        check_weight(weight)

        self._vertices.add(source)
        self._vertices.add(target)

        pair = (source, target)
        old = self._edges.pop(pair, None)
        previous = old.weight if old is not None else 0

        if weight > 0:
            self._edges[pair] = Edge(source, target, weight)
            self._out.setdefault(source, set()).add(target)
            self._in.setdefault(target, set()).add(source)
        elif old is not None:
            self._out[source].discard(target)
            self._in[target].discard(source)

        self._check_edge(source, target)
        return previous

    def remove_vertex(self, vertex: V) -> bool:
        if vertex not in self._vertices:
            return False
        self._vertices.remove(vertex)
        for target in self._out.pop(vertex, set()):
            del self._edges[(vertex, target)]
            self._in.get(target, set()).discard(vertex)
        for source in self._in.pop(vertex, set()):
            self._edges.pop((source, vertex), None)
            self._out.get(source, set()).discard(vertex)
        self._check_rep()
        return True

    def vertices(self) -> Set[V]:
        return set(self._vertices)

    def sources(self, target: V) -> Dict[V, int]:
        return {s: self._edges[(s, target)].weight for s in self._in.get(target, ())}

    def targets(self, source: V) -> Dict[V, int]:
        return {t: self._edges[(source, t)].weight for t in self._out.get(source, ())}

    def __str__(self):
        lines = ["Vertices: " + ", ".join(sorted(map(str, self._vertices))), "Edges:"]
        lines.extend("  " + s for s in sorted(str(e) for e in self._edges.values()))
        return "\n".join(lines)
