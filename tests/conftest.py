"""
Pytest configuration and shared fixtures.
"""

import pytest

from poet.edges_graph import EdgesGraph
from poet.vertices_graph import VerticesGraph

GRAPH_TYPES = [EdgesGraph, VerticesGraph]


@pytest.fixture(params=GRAPH_TYPES, ids=lambda cls: cls.__name__)
def graph_type(request):
    """Each graph representation in turn."""
    return request.param


@pytest.fixture
def graph(graph_type):
    """A new empty graph of the representation under test."""
    return graph_type()


@pytest.fixture
def corpus_file(tmp_path):
    """Write corpus text to a temporary file and return its path."""
    def _write(content, name="corpus.txt"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
