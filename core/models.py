# /core/models.py

from enum import Enum
from typing import Any, Dict, Iterator, List, Literal, Optional, Set, Union
from pydantic import BaseModel, ConfigDict, Field

# Shared data structures for the orchestration layer and its collaborators.

class Domain(str, Enum):
    """The closed set of knowledge domains. Each needs a registered vector and graph store."""
    SCIENCE = "science"
    TECHNOLOGY = "technology"
    PHILOSOPHY = "philosophy"


Direction = Literal["in", "out", "both"]
MergeMode = Literal["per_domain", "overall"]


# --- Store-side records ---

class VectorRecord(BaseModel):
    id: str = Field(description="Identifier, unique within the owning domain.")
    vector: List[float] = Field(description="Fixed-length embedding of the record.")
    metadata: Dict[str, Any] = Field(default_factory=dict)

class GraphNode(BaseModel):
    id: str = Field(description="Identifier, unique within the owning domain.")
    labels: Set[str] = Field(default_factory=set, description="Node labels such as Concept or Scientist.")
    properties: Dict[str, Any] = Field(default_factory=dict)

    @property
    def name(self) -> str:
        return str(self.properties.get("name", self.id))

class GraphEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from", description="The ID of the source node.")
    target: str = Field(alias="to", description="The ID of the target node.")
    relation_type: str = Field(description="The type of relationship (e.g., PIONEERED, INFLUENCES).")
    confidence: float = Field(1.0, ge=0.0, le=1.0)


# --- Query-side results ---

class SearchHit(BaseModel):
    domain: Domain
    id: str
    score: float = Field(ge=0.0, le=1.0, description="Similarity, 1.0 is an exact match.")
    metadata: Dict[str, Any] = Field(default_factory=dict)

class RouterDecision(BaseModel):
    domain: Domain
    confidence: float = Field(ge=0.0, le=1.0)
    scores: Dict[Domain, float] = Field(default_factory=dict, description="Score of every registered domain.")

class GraphConnection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    relation: str
    target: str = Field(alias="to")

class QueryResult(BaseModel):
    domain: Domain
    matches: List[SearchHit] = Field(default_factory=list)
    graph_connections: List[GraphConnection] = Field(default_factory=list)

class DomainWarning(BaseModel):
    """Marks a domain that contributed nothing because its store failed or timed out."""
    domain: Domain
    reason: str

class FusedHits(BaseModel):
    hits: List[SearchHit] = Field(default_factory=list)
    warnings: List[DomainWarning] = Field(default_factory=list)

class EnhancedResults(BaseModel):
    results: List[QueryResult] = Field(default_factory=list)
    warnings: List[DomainWarning] = Field(default_factory=list, description="Domains whose graph lookups failed or timed out.")

class SearchResponse(BaseModel):
    query: str
    decision: Optional[RouterDecision] = None
    hits: List[SearchHit] = Field(default_factory=list)
    results: List[QueryResult] = Field(default_factory=list)
    warnings: List[DomainWarning] = Field(default_factory=list)


# --- Connection paths ---

class PathNode(BaseModel):
    node_id: str
    domain: Domain
    name: str

class PathEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    relation_type: str
    source: str = Field(alias="from", description="Node id the stored edge starts at.")
    target: str = Field(alias="to", description="Node id the stored edge ends at.")

class ConnectionPath(BaseModel):
    """
    A walk between two concepts. Nodes and edges alternate, so there is always
    one edge fewer than nodes; a path without nodes means no connection was found.
    """
    nodes: List[PathNode] = Field(default_factory=list)
    edges: List[PathEdge] = Field(default_factory=list)

    @property
    def hops(self) -> int:
        return len(self.edges)

    def is_empty(self) -> bool:
        return not self.nodes

    def elements(self) -> Iterator[Union[PathNode, PathEdge]]:
        for i, node in enumerate(self.nodes):
            if i > 0:
                yield self.edges[i - 1]
            yield node

    def render(self) -> str:
        if self.is_empty():
            return ""
        parts = [f"[{self.nodes[0].name}]"]
        for previous, edge, node in zip(self.nodes, self.edges, self.nodes[1:]):
            if edge.source == previous.node_id and edge.target == node.node_id:
                parts.append(f"-{edge.relation_type}->")
            else:
                parts.append(f"<-{edge.relation_type}-")
            parts.append(f"[{node.name}]")
        return " ".join(parts)


# --- Store inspection ---

class GraphStats(BaseModel):
    """Counts over one domain's graph. Bridging edges count in every domain that stores them."""
    nodes: int = 0
    edges: int = 0
    average_degree: float = 0.0
    labels: Dict[str, int] = Field(default_factory=dict, description="Nodes per label, domain label excluded.")
    relation_types: Dict[str, int] = Field(default_factory=dict, description="Edges per relationship type.")

    @classmethod
    def from_counts(cls, nodes: int, labels: Dict[str, int], relation_types: Dict[str, int]) -> "GraphStats":
        edges = sum(relation_types.values())
        return cls(
            nodes=nodes,
            edges=edges,
            average_degree=(2.0 * edges / nodes) if nodes else 0.0,
            labels=dict(sorted(labels.items())),
            relation_types=dict(sorted(relation_types.items())),
        )

class DomainStats(BaseModel):
    domain: Domain
    vector_records: int
    graph: GraphStats

class StatsResponse(BaseModel):
    domains: List[DomainStats] = Field(default_factory=list)
