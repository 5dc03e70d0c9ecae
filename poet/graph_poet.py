import logging
import re
import string
from pathlib import Path
from typing import Iterable, Mapping, Optional, Type, Union

from .corpus import build_graph, read_corpus, tokenize
from .edges_graph import EdgesGraph
from .graph import Graph

logger = logging.getLogger(__name__)

# trailing run of ASCII punctuation only; leading/internal punctuation stays
_TRAILING_PUNCT = re.compile("[" + re.escape(string.punctuation) + "]+$")


def strip_trailing_punctuation(word: str) -> str:
    return _TRAILING_PUNCT.sub("", word)


def lookup_key(word: str) -> str:
    return strip_trailing_punctuation(word).lower()


class GraphPoet:
    """
    Inserts bridge words between the words of an input sentence.

    For two consecutive input words w1, w2 a bridge is a corpus word b with
    edges w1 -> b and b -> w2 in the affinity graph. The bridge with the
    largest combined weight is inserted, spelled as it first appeared in the
    corpus. Ties go to the alphabetically first canonical word.

    The graph and case map are shared read-only: nothing here mutates them,
    so one poet can serve any number of callers as long as no one else
    mutates the graph either.
    """

    def __init__(self, graph: Graph, case_map: Mapping[str, str]):
        self.graph = graph
        self.case_map = case_map

    @classmethod
    def from_tokens(cls, tokens: Iterable[str], representation: Type[Graph] = EdgesGraph):
        graph, case_map = build_graph(tokens, representation())
        return cls(graph, case_map)

    @classmethod
    def from_text(cls, text: str, representation: Type[Graph] = EdgesGraph):
        return cls.from_tokens(tokenize(text), representation)

    @classmethod
    def from_file(cls, path: Union[str, Path], representation: Type[Graph] = EdgesGraph):
        """Raises CorpusReadError if the corpus cannot be read."""
        return cls.from_tokens(read_corpus(path), representation)

    def find_bridge(self, word1: str, word2: str) -> Optional[str]:
        """
        Best bridge between two canonical (lowercase, stripped) words.

        Returns the canonical bridge word, or None when no two-edge path
        word1 -> b -> word2 exists.
        """
        first_hop = self.graph.targets(word1)
        bridge = None
        best = 0
        for candidate in sorted(first_hop):
            second_hop = self.graph.targets(candidate)
            if word2 not in second_hop:
                continue
            weight = first_hop[candidate] + second_hop[word2]
            if weight > best:
                best = weight
                bridge = candidate
        return bridge

    def spelling(self, word: str) -> str:
        return self.case_map.get(word, word)

    def poem(self, text: Optional[str]) -> str:
        """
        Return text with bridge words inserted.

        Input words are kept exactly as given, punctuation and case included.
        Blank input gives "".
        """
        if text is None or not text.strip():
            return ""

        words = text.split()
        out = [words[0]]
        for w1, w2 in zip(words, words[1:]):
            bridge = self.find_bridge(lookup_key(w1), lookup_key(w2))
            if bridge is not None:
                out.append(self.spelling(bridge))
            out.append(w2)

        logger.debug("[Poet] %d input words -> %d output words", len(words), len(out))
        return " ".join(out)

    def __str__(self):
        return str(self.graph)
