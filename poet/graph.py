from abc import ABC, abstractmethod
from typing import Dict, Generic, Hashable, Set, TypeVar

V = TypeVar("V", bound=Hashable)


class InvalidArgumentError(ValueError):
    """Raised when a graph operation gets a missing vertex or a bad weight."""


class Graph(ABC, Generic[V]):
    """
    Mutable weighted directed graph.

    Vertices are unique hashable values. Each ordered (source, target) pair
    has at most one edge, and every edge has a positive integer weight.
    Self-loops are allowed. Every collection handed back is a fresh copy.

    Implementations own their storage; this class only fixes the contract.
    """

    @abstractmethod
    def add_vertex(self, vertex: V) -> bool:
        """
        Add a vertex if it is not already present.

        Returns True if the graph changed, False if the vertex existed.
        """

    @abstractmethod
    def set_edge(self, source: V, target: V, weight: int) -> int:
        """
        Add, change or remove the edge source -> target.

        weight > 0 creates or overwrites the edge, adding missing endpoints.
        weight == 0 removes the edge if there is one.
        Returns the previous weight, or 0 if there was no edge.
        """

    @abstractmethod
    def remove_vertex(self, vertex: V) -> bool:
        """
        Remove a vertex together with every edge into or out of it.

        Returns False if the vertex was not in the graph.
        """

    @abstractmethod
    def vertices(self) -> Set[V]:
        ...

    @abstractmethod
    def sources(self, target: V) -> Dict[V, int]:
        """Vertices with an edge into target, mapped to the edge weight."""

    @abstractmethod
    def targets(self, source: V) -> Dict[V, int]:
        """Vertices with an edge out of source, mapped to the edge weight."""


def check_vertex(vertex):
    if vertex is None:
        raise InvalidArgumentError("vertex cannot be None")


def check_weight(weight):
    # bool is an int subclass; True is not a weight
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise InvalidArgumentError(f"weight must be an int, got {weight!r}")
    if weight < 0:
        raise InvalidArgumentError(f"weight cannot be negative, got {weight}")


def empty() -> Graph:
    """New empty graph using the default (edge list) representation."""
    from .edges_graph import EdgesGraph

    return EdgesGraph()


def count_edges(graph: Graph) -> int:
    return sum(len(graph.targets(v)) for v in graph.vertices())


def describe(graph: Graph) -> dict:
    return {
        "representation": type(graph).__name__,
        "vertices": len(graph.vertices()),
        "edges": count_edges(graph),
    }
