import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from fastapi import FastAPI, BackgroundTasks, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from poet.corpus import CorpusReadError, read_corpus, tokenize
from poet.edges_graph import EdgesGraph
from poet.graph import describe
from poet.graph_poet import GraphPoet
from poet.vertices_graph import VerticesGraph

logger = logging.getLogger(__name__)

def configure_logging(level=logging.INFO):
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    for name in ("app", "poet"):
        logging.getLogger(name).setLevel(level)

configure_logging()

app = FastAPI(title="Graph Poet: bridge words from a word affinity graph")

# -----------------------
# Config
# -----------------------
CORPUS_PATH = Path(os.environ.get("POET_CORPUS", "corpus/poet.txt"))

DEFAULT_CORPUS = [
    "This is a test of the Mugar Omni Theater sound system.",
    "To explore strange new worlds",
    "To seek out new life and new civilizations",
]

REPRESENTATIONS = {
    "edges": EdgesGraph,
    "vertices": VerticesGraph,
}
DEFAULT_REPRESENTATION = "edges"

# -----------------------
# Active poet
# -----------------------
@dataclass(frozen=True)
class ActivePoet:
    poet: GraphPoet
    source: str
    representation: str

# A built poet is never mutated; replacing it is one assignment to _active.
_active: Optional[ActivePoet] = None
_build_lock = threading.Lock()

def invalidate_poet_cache():
    global _active
    _active = None

def set_active(poet: GraphPoet, source: str, representation: str):
    global _active
    _active = ActivePoet(poet, source, representation)

def is_corpus_ready(path: Path) -> bool:
    """True if the corpus file exists, is readable and holds at least one word."""
    if not path.is_file():
        return False
    try:
        return bool(read_corpus(path))
    except CorpusReadError:
        return False

def load_poet(representation: str = DEFAULT_REPRESENTATION):
    """
    Build a poet from CORPUS_PATH, falling back to DEFAULT_CORPUS when the
    file is missing or has no words. A file that exists but cannot be read
    is an error.
    """
    graph_type = REPRESENTATIONS[representation]
    tokens = read_corpus(CORPUS_PATH) if CORPUS_PATH.exists() else []
    if tokens:
        poet = GraphPoet.from_tokens(tokens, graph_type)
        source = str(CORPUS_PATH)
    else:
        logger.warning("[Poet] Corpus %s missing or empty; using built-in default corpus", CORPUS_PATH)
        poet = GraphPoet.from_text("\n".join(DEFAULT_CORPUS), graph_type)
        source = "default"
    logger.info("[Poet] Built from %s: %s", source, describe(poet.graph))
    return poet, source

def get_active() -> ActivePoet:
    global _active
    active = _active
    if active is None:
        with _build_lock:
            active = _active
            if active is None:
                poet, source = load_poet()
                active = _active = ActivePoet(poet, source, DEFAULT_REPRESENTATION)
    return active

def get_poet() -> GraphPoet:
    return get_active().poet

# -----------------------
# Request schemas
# -----------------------
class PoemRequest(BaseModel):
    text: str = ""

class CorpusRequest(BaseModel):
    text: str
    representation: Literal["edges", "vertices"] = DEFAULT_REPRESENTATION

class ReloadRequest(BaseModel):
    representation: Literal["edges", "vertices"] = DEFAULT_REPRESENTATION

# -----------------------
# Root & status
# -----------------------
@app.get("/")
def root():
    return {"status": "Graph Poet API Active"}

@app.get("/poet/status")
def poet_status():
    try:
        active = get_active()
    except CorpusReadError as e:
        raise HTTPException(status_code=500, detail=f"Corpus load failed: {e}")

    return {
        "corpus_path": str(CORPUS_PATH),
        "corpus_ready": is_corpus_ready(CORPUS_PATH),
        "source": active.source,
        "using_default_corpus": active.source == "default",
        "representation": active.representation,
        "graph": describe(active.poet.graph),
    }

# -----------------------
# Poem endpoints
# -----------------------
@app.post("/poem")
@app.post("/generate_poem")
def generate_poem(req: PoemRequest):
    try:
        poet = get_poet()
        text = poet.poem(req.text)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Poem generation failed: {e}")

    return {
        "poem": text,
        "bridges": len(text.split()) - len(req.text.split()),
    }

@app.get("/poet/graph", response_class=PlainTextResponse)
def poet_graph():
    try:
        return str(get_poet())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Graph dump failed: {e}")

# -----------------------
# Corpus endpoints
# -----------------------
@app.post("/poet/corpus")
def api_set_corpus(req: CorpusRequest):
    if not tokenize(req.text):
        raise HTTPException(status_code=422, detail="Corpus text has no words")

    try:
        poet = GraphPoet.from_text(req.text, REPRESENTATIONS[req.representation])
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Graph build failed: {e}")

    set_active(poet, "request", req.representation)
    return {"status": "built", "graph": describe(poet.graph)}

@app.post("/poet/reload")
def api_reload(background_tasks: BackgroundTasks, req: Optional[ReloadRequest] = None):
    representation = req.representation if req is not None else DEFAULT_REPRESENTATION

    def run():
        try:
            poet, source = load_poet(representation)
        except CorpusReadError as e:
            # previous poet stays active
            logger.error("[Reload] Failed: %s", e)
            return

        set_active(poet, source, representation)
        logger.info("[Reload] Complete")

    background_tasks.add_task(run)
    return {
        "status": "started",
        "corpus_path": str(CORPUS_PATH),
        "representation": representation,
    }
