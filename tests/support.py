# /tests/support.py
# Small fakes shared by the test modules.

import time
from typing import Dict, List, Tuple

from core.embeddings import Embedder
from core.memory_database import InMemoryGraphStore
from core.models import Domain, GraphEdge, GraphNode
from core.registry import DomainBackend, DomainRegistry
from core.vector_store import VectorStore

EXEMPLARS = {
    Domain.SCIENCE: [
        "How do atoms bond together into molecules?",
        "Explain natural selection and evolution",
        "What is quantum mechanics?",
    ],
    Domain.TECHNOLOGY: [
        "How do neural networks learn from data?",
        "How do I deploy containers with Kubernetes?",
        "What is a vector database?",
    ],
    Domain.PHILOSOPHY: [
        "What is the meaning of life?",
        "Is it moral to lie?",
        "Do we have free will?",
    ],
}


class StaticVectorStore(VectorStore):
    """Returns a fixed ranking of (id, distance) pairs, whatever the query."""

    def __init__(self, results: List[Tuple[str, float]] = None, metadata: Dict[str, dict] = None):
        self.results = list(results or [])
        self.metadata = metadata or {}
        self.calls = 0

    def add(self, records):
        raise NotImplementedError

    def search(self, vector, k):
        self.calls += 1
        return self.results[:k]

    def get_metadata(self, record_id):
        return dict(self.metadata.get(record_id, {}))

    def __len__(self):
        return len(self.results)

    def __contains__(self, record_id):
        return any(record_id == r for r, _ in self.results)


class FailingVectorStore(StaticVectorStore):
    def search(self, vector, k):
        self.calls += 1
        raise ConnectionError("store offline")


class SlowVectorStore(StaticVectorStore):
    def __init__(self, delay: float, results=None):
        super().__init__(results)
        self.delay = delay

    def search(self, vector, k):
        time.sleep(self.delay)
        return super().search(vector, k)


class FixedEmbedder(Embedder):
    """Looks vectors up in a table; unknown texts map to the fallback vector."""

    def __init__(self, table: Dict[str, List[float]], fallback: List[float] = None):
        self.table = table
        self.dimensions = len(next(iter(table.values())))
        self.fallback = fallback or [1.0] + [0.0] * (self.dimensions - 1)

    def embed(self, text):
        return list(self.table.get(text, self.fallback))


def make_graph(nodes: List[Tuple[str, str]], edges: List[Tuple[str, str, str]] = ()) -> InMemoryGraphStore:
    """nodes are (id, name), edges are (source, target, relation_type)."""
    store = InMemoryGraphStore()
    store.write_graph(
        [GraphNode(id=node_id, labels={"Concept"}, properties={"name": name}) for node_id, name in nodes],
        [GraphEdge(source=s, target=t, relation_type=r) for s, t, r in edges],
    )
    return store


def make_registry(vector_stores: Dict[Domain, VectorStore] = None, graph_stores: Dict = None, exemplars: Dict = None) -> DomainRegistry:
    vector_stores = vector_stores or {}
    graph_stores = graph_stores or {}
    exemplars = exemplars or EXEMPLARS
    return DomainRegistry({
        domain: DomainBackend(
            vector_store=vector_stores.get(domain, StaticVectorStore()),
            graph_store=graph_stores.get(domain, InMemoryGraphStore()),
            exemplars=exemplars[domain],
        )
        for domain in Domain
    })


class SlowGraphStore(InMemoryGraphStore):
    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay

    def get_node(self, node_id):
        time.sleep(self.delay)
        return super().get_node(node_id)


class SlowEmbedder(Embedder):
    dimensions = 2

    def __init__(self, delay: float):
        self.delay = delay

    def embed(self, text):
        time.sleep(self.delay)
        return [1.0, 0.0]
