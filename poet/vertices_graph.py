from typing import Dict, Generic, Optional, Set

from .graph import Graph, V, check_vertex, check_weight


class Vertex(Generic[V]):
    """
    Mutable vertex that carries its own incoming and outgoing edges.

    sources maps each predecessor to the weight of its edge into this vertex,
    targets maps each successor to the weight of the edge out of it.
    """

    def __init__(self, label: V):
        if label is None:
            raise ValueError("vertex label cannot be None")
        self.label = label
        self._sources: Dict[V, int] = {}
        self._targets: Dict[V, int] = {}

    def check_rep(self):
        for other, weight in self._sources.items():
            assert other is not None and weight > 0, f"bad source edge on {self.label!r}"
        for other, weight in self._targets.items():
            assert other is not None and weight > 0, f"bad target edge on {self.label!r}"

    def sources(self) -> Dict[V, int]:
        return dict(self._sources)

    def targets(self) -> Dict[V, int]:
        return dict(self._targets)

    def set_source(self, source: V, weight: int) -> int:
        previous = self._sources.pop(source, 0)
        if weight > 0:
            self._sources[source] = weight
        return previous

    def set_target(self, target: V, weight: int) -> int:
        previous = self._targets.pop(target, 0)
        if weight > 0:
            self._targets[target] = weight
        return previous

    def forget(self, other: V):
        """Drop any edge between this vertex and other, in either direction."""
        self._sources.pop(other, None)
        self._targets.pop(other, None)

    def __str__(self):
        return f"{self.label} [sources={self._sources}, targets={self._targets}]"


class VerticesGraph(Graph[V]):
    """
    Graph stored as Vertex objects, each holding its own adjacency.

    Rep invariant:
      - self._vertices[label].label == label
      - every label named in a Vertex's sources/targets is a vertex
      - u.targets[v] == w exactly when v.sources[u] == w, with w > 0
    """

    def __init__(self):
        self._vertices: Dict[V, Vertex] = {}
        self._check_rep()

    def _check_rep(self):
        for label, v in self._vertices.items():
            assert v.label == label, f"vertex {v.label!r} filed under {label!r}"
            v.check_rep()
            for t in v._targets:
                self._check_edge(label, t)
            for s in v._sources:
                self._check_edge(s, label)

    def _check_edge(self, source, target):
        src = self._vertices.get(source)
        tgt = self._vertices.get(target)
        assert src is not None, f"edge from non-vertex {source!r}"
        assert tgt is not None, f"edge to non-vertex {target!r}"
        weight = src._targets.get(target, 0)
        assert weight >= 0, f"negative weight on {source!r} -> {target!r}"
        assert tgt._sources.get(source, 0) == weight, (
            f"unmirrored edge {source!r} -> {target!r}"
        )

    def _find(self, label: V) -> Optional[Vertex]:
        return self._vertices.get(label)

    def _find_or_add(self, label: V) -> Vertex:
        vertex = self._vertices.get(label)
        if vertex is None:
            vertex = self._vertices[label] = Vertex(label)
        return vertex

    def add_vertex(self, vertex: V) -> bool:
        check_vertex(vertex)
        if vertex in self._vertices:
            return False
        self._vertices[vertex] = Vertex(vertex)
        return True

    def set_edge(self, source: V, target: V, weight: int) -> int:
        check_vertex(source)
        check_vertex(target)
        check_weight(weight)

        src = self._find_or_add(source)
        tgt = self._find_or_add(target)

        previous = src.set_target(target, weight)
        tgt.set_source(source, weight)

        self._check_edge(source, target)
        return previous

    def remove_vertex(self, vertex: V) -> bool:
        doomed = self._vertices.pop(vertex, None)
        if doomed is None:
            return False
        for other in set(doomed._sources) | set(doomed._targets):
            if other != vertex:
                self._vertices[other].forget(vertex)
        self._check_rep()
        return True

    def vertices(self) -> Set[V]:
        return set(self._vertices)

    def sources(self, target: V) -> Dict[V, int]:
        vertex = self._find(target)
        return vertex.sources() if vertex is not None else {}

    def targets(self, source: V) -> Dict[V, int]:
        vertex = self._find(source)
        return vertex.targets() if vertex is not None else {}

    def __str__(self):
        lines = ["Vertices: " + ", ".join(sorted(str(label) for label in self._vertices)), "Edges:"]
        edges = [
            f"{v.label} -> {t} ({w})" for v in self._vertices.values() for t, w in v._targets.items()
        ]
        lines.extend("  " + s for s in sorted(edges))
        return "\n".join(lines)
