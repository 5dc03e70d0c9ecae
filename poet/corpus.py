import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from .graph import Graph, InvalidArgumentError, empty

logger = logging.getLogger(__name__)


class CorpusReadError(Exception):
    """The corpus source could not be read."""


def tokenize(text):
    # whitespace split, empty tokens dropped, line then left-to-right order
    return (text or "").split()


def read_corpus(path: Union[str, Path]) -> List[str]:
    """
    Read a UTF-8 corpus file into raw tokens.

    All-or-nothing: any read or decode failure raises CorpusReadError and
    no tokens are returned.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusReadError(f"cannot read corpus {path}: {e}") from e

    tokens = tokenize(text)
    logger.info("[Corpus] Read %d tokens from %s", len(tokens), path)
    return tokens


def build_graph(
    tokens: Iterable[str],
    graph: Optional[Graph] = None,
) -> Tuple[Graph, Mapping[str, str]]:
    """
    Build the word affinity graph in one pass over the corpus tokens.

    Each token is lowercased and added as a vertex; the edge from the
    previous token to this one gains 1 weight per adjacency. The returned
    case map records the spelling of each word's first occurrence.

    graph: optional empty graph to fill, which picks the representation.
    """
    if graph is None:
        graph = empty()
    elif graph.vertices():
        raise InvalidArgumentError("build_graph needs an empty graph")

    case_map = {}
    prev = None
    for token in tokens:
        if not token:
            continue
        word = token.lower()
        graph.add_vertex(word)
        case_map.setdefault(word, token)

        if prev is not None:
            weight = graph.targets(prev).get(word, 0)
            graph.set_edge(prev, word, weight + 1)
        prev = word

    return graph, MappingProxyType(case_map)
