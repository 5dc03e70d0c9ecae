"""Tests for corpus reading and affinity graph construction."""

import random
import time

import pytest

from poet.corpus import CorpusReadError, build_graph, read_corpus, tokenize
from poet.graph import InvalidArgumentError


def test_tokenize_splits_on_any_whitespace():
    assert tokenize("  To explore\tstrange\n\nnew worlds \n") == [
        "To", "explore", "strange", "new", "worlds",
    ]


def test_tokenize_blank():
    assert tokenize("") == []
    assert tokenize(" \n\t ") == []
    assert tokenize(None) == []


def test_read_corpus_lines_in_order(corpus_file):
    path = corpus_file("To explore strange\nnew worlds\n")
    assert read_corpus(path) == ["To", "explore", "strange", "new", "worlds"]


def test_read_corpus_missing_file(tmp_path):
    with pytest.raises(CorpusReadError) as info:
        read_corpus(tmp_path / "missing.txt")
    assert isinstance(info.value.__cause__, OSError)


def test_read_corpus_bad_encoding(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes("caf\xe9".encode("latin-1"))
    with pytest.raises(CorpusReadError):
        read_corpus(path)


def test_read_corpus_directory(tmp_path):
    with pytest.raises(CorpusReadError):
        read_corpus(tmp_path)


def test_build_counts_adjacencies(graph):
    tokens = "To seek out new life and new civilizations".split()
    g, _ = build_graph(tokens, graph)

    assert g is graph
    assert g.vertices() == {"to", "seek", "out", "new", "life", "and", "civilizations"}
    assert g.targets("new") == {"life": 1, "civilizations": 1}
    assert g.sources("new") == {"out": 1, "and": 1}


def test_build_repeated_pair_accumulates(graph):
    g, _ = build_graph(["a", "b", "A", "b", "a", "B"], graph)
    assert g.targets("a") == {"b": 3}
    assert g.targets("b") == {"a": 2}


def test_build_self_loop(graph):
    g, _ = build_graph(["very", "Very", "VERY", "good"], graph)
    assert g.targets("very") == {"very": 2, "good": 1}


def test_build_case_map_first_occurrence_wins(graph):
    _, case_map = build_graph(["Hello", "hello", "HELLO", "World"], graph)
    assert dict(case_map) == {"hello": "Hello", "world": "World"}


def test_build_case_map_is_read_only(graph):
    _, case_map = build_graph(["Hello"], graph)
    with pytest.raises(TypeError):
        case_map["hello"] = "HELLO"


def test_build_keeps_punctuation_in_vertices(graph):
    g, _ = build_graph(["sound", "system."], graph)
    assert g.vertices() == {"sound", "system."}


def test_build_skips_empty_tokens(graph):
    g, _ = build_graph(["a", "", "b"], graph)
    assert g.targets("a") == {"b": 1}


def test_build_single_token(graph):
    g, case_map = build_graph(["Alone"], graph)
    assert g.vertices() == {"alone"}
    assert g.targets("alone") == {}
    assert dict(case_map) == {"alone": "Alone"}


def test_build_default_graph():
    g, case_map = build_graph(["x", "y"])
    assert g.targets("x") == {"y": 1}


def test_build_rejects_non_empty_graph(graph):
    graph.add_vertex("stale")
    with pytest.raises(InvalidArgumentError):
        build_graph(["a"], graph)


def test_build_from_file(corpus_file, graph):
    path = corpus_file("This is a test\nof the system")
    g, _ = build_graph(read_corpus(path), graph)
    # adjacency carries across line breaks
    assert g.targets("test") == {"of": 1}


def test_build_large_corpus_is_fast(graph):
    rng = random.Random(7)
    vocab = [f"w{i}" for i in range(5000)]
    tokens = [rng.choice(vocab) for _ in range(20000)]

    start = time.perf_counter()
    g, case_map = build_graph(tokens, graph)
    elapsed = time.perf_counter() - start

    assert len(case_map) == len(g.vertices())
    assert sum(sum(g.targets(v).values()) for v in g.vertices()) == len(tokens) - 1
    assert elapsed < 10.0, f"building 20k tokens took {elapsed:.1f}s"


def test_remove_after_large_build(graph):
    tokens = [f"w{i % 300}" for i in range(3000)]
    g, _ = build_graph(tokens, graph)
    assert g.remove_vertex("w0") is True
    assert "w0" not in g.targets("w299")
    assert "w0" not in g.sources("w1")
