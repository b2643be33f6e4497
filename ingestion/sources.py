# /ingestion/sources.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List
import json
import os

from pydantic import BaseModel, Field

from core.logger import get_logger
from core.models import Domain, GraphEdge, GraphNode
from ingestion.seeds import BUILTIN_SEEDS

logger = get_logger(__name__)


class DomainSeed(BaseModel):
    """Everything needed to populate one domain's stores and its router exemplars."""
    domain: Domain
    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)
    exemplars: List[str] = Field(default_factory=list)


def seed_from_dict(domain: str, data: Dict[str, Any]) -> DomainSeed:
    """
    Accepts nodes/edges either as tuples (the built-in format) or as objects
    (the JSON file format, e.g. {"id": ..., "labels": [...], "properties": {...}}).
    """
    nodes = []
    for node in data.get("nodes", []):
        if isinstance(node, dict):
            nodes.append(GraphNode(**node))
        else:
            node_id, labels, properties = node
            nodes.append(GraphNode(id=node_id, labels=set(labels), properties=dict(properties)))

    edges = []
    for edge in data.get("edges", []):
        if isinstance(edge, dict):
            edges.append(GraphEdge(**edge))
        else:
            source, target, relation_type, confidence = edge
            edges.append(GraphEdge(source=source, target=target, relation_type=relation_type, confidence=confidence))

    return DomainSeed(domain=Domain(domain), nodes=nodes, edges=edges, exemplars=list(data.get("exemplars", [])))


class SeedSource(ABC):
    """Abstract base class for a source of domain seed data."""
    @abstractmethod
    def load_seeds(self) -> List[DomainSeed]:
        """Loads seeds from the source and returns them as a list."""
        pass


class BuiltinSeedSource(SeedSource):
    """The science, technology and philosophy demo graphs shipped with the package."""
    def load_seeds(self) -> List[DomainSeed]:
        return [seed_from_dict(domain, data) for domain, data in BUILTIN_SEEDS.items()]


class JsonSeedSource(SeedSource):
    """
    Loads seeds from a JSON file, or from every *.json file in a directory.
    Each file maps domain identifiers to {"nodes": [...], "edges": [...], "exemplars": [...]}.
    """
    def __init__(self, path: str):
        if not os.path.exists(path):
            raise ValueError(f"The path {path} does not exist.")
        self.path = path

    def _files(self) -> List[str]:
        if os.path.isdir(self.path):
            return [os.path.join(self.path, f) for f in sorted(os.listdir(self.path)) if f.endswith(".json")]
        return [self.path]

    def load_seeds(self) -> List[DomainSeed]:
        seeds = []
        for file_path in self._files():
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            for domain, domain_data in data.items():
                seeds.append(seed_from_dict(domain, domain_data))
            logger.info("Loaded seed file", extra={"path": file_path, "domains": sorted(data)})
        return seeds
