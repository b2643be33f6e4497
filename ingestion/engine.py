from typing import Dict, List, Mapping

from core.embeddings import Embedder
from core.exceptions import ConfigurationError
from core.logger import get_logger
from core.models import Domain, GraphNode, VectorRecord
from core.registry import DomainBackend
from ingestion.sources import DomainSeed, SeedSource

logger = get_logger(__name__)


def record_text(node: GraphNode) -> str:
    """The text a node is embedded from: its name, labels and description."""
    parts = [node.name, " ".join(sorted(node.labels)), str(node.properties.get("description", ""))]
    return ". ".join(p for p in parts if p)


class IngestionEngine:
    def __init__(self, sources: List[SeedSource], embedder: Embedder):
        self.sources = sources
        self.embedder = embedder

    def load(self) -> Dict[Domain, DomainSeed]:
        """Loads every source and merges seeds that target the same domain."""
        merged: Dict[Domain, DomainSeed] = {}
        for source in self.sources:
            for seed in source.load_seeds():
                if seed.domain not in merged:
                    merged[seed.domain] = seed.model_copy(deep=True)
                    continue
                target = merged[seed.domain]
                target.nodes.extend(seed.nodes)
                target.edges.extend(seed.edges)
                target.exemplars.extend(e for e in seed.exemplars if e not in target.exemplars)
        return merged

    def build_records(self, seed: DomainSeed) -> List[VectorRecord]:
        """One vector record per graph node, sharing its id so hits can be enriched from the graph."""
        texts = [record_text(node) for node in seed.nodes]
        vectors = self.embedder.embed_many(texts) if texts else []
        return [
            VectorRecord(
                id=node.id,
                vector=vector,
                metadata={"name": node.name, "labels": sorted(node.labels), "text": text},
            )
            for node, text, vector in zip(seed.nodes, texts, vectors)
        ]

    def ingest(self, seed: DomainSeed, backend: DomainBackend) -> int:
        """
        Writes a seed into one domain's stores. Records already present in the
        vector store are skipped, so re-running an ingestion only adds what's new.
        """
        backend.graph_store.write_graph(seed.nodes, seed.edges)
        records = [r for r in self.build_records(seed) if r.id not in backend.vector_store]
        if records:
            backend.vector_store.add(records)
        logger.info(
            "Ingested domain seed",
            extra={"domain": seed.domain.value, "nodes": len(seed.nodes), "edges": len(seed.edges), "new_records": len(records)},
        )
        return len(records)

    def run(self, backends: Mapping[Domain, DomainBackend]) -> Dict[Domain, int]:
        """
        Runs the ingestion pipeline:
        1. Loads and merges seeds from all sources.
        2. Writes each seed into its domain's graph and vector store.
        """
        seeds = self.load()
        if not seeds:
            logger.warning("No seeds loaded, nothing to ingest")
            return {}

        stats = {}
        for domain, seed in seeds.items():
            if domain not in backends:
                raise ConfigurationError(f"Seed data targets unregistered domain '{domain.value}'.")
            stats[domain] = self.ingest(seed, backends[domain])

        self._write_bridges(seeds, backends)
        return stats

    def _write_bridges(self, seeds: Dict[Domain, DomainSeed], backends: Mapping[Domain, DomainBackend]):
        """
        An edge between nodes of two domains is stored with its source's seed.
        It is also written to the other endpoint's domain, so that node sees it
        as an incoming edge when the graphs are traversed.
        """
        owners = {node.id: domain for domain, seed in seeds.items() for node in seed.nodes}
        for domain, seed in seeds.items():
            for edge in seed.edges:
                for endpoint in (edge.source, edge.target):
                    other = owners.get(endpoint)
                    if other is not None and other != domain:
                        backends[other].graph_store.write_graph([], [edge])
                        logger.info(
                            "Wrote bridging edge",
                            extra={"source": edge.source, "relation": edge.relation_type, "target": edge.target, "domain": other.value},
                        )
