# /core/connections.py

from collections import deque
from typing import Dict, List, Optional, Tuple

from core.config import settings
from core.exceptions import InvalidQuery, UnknownConcept
from core.logger import get_logger
from core.models import ConnectionPath, Domain, GraphEdge, GraphNode, PathEdge, PathNode
from core.registry import DomainRegistry

logger = get_logger(__name__)

NodeKey = Tuple[Domain, str]
Parents = Dict[NodeKey, Optional[Tuple[NodeKey, GraphEdge]]]


class _FederatedGraph:
    """Read-through view over every registered graph store, scoped to one search."""

    def __init__(self, registry: DomainRegistry):
        self.registry = registry
        self.nodes: Dict[NodeKey, GraphNode] = {}

    def lookup(self, domain: Domain, node_id: str) -> Optional[GraphNode]:
        key = (domain, node_id)
        if key not in self.nodes:
            node = self.registry.graph_store(domain).get_node(node_id)
            if node is None:
                return None
            self.nodes[key] = node
        return self.nodes[key]

    def resolve(self, concept: str) -> NodeKey:
        for domain in self.registry.domains:
            if self.lookup(domain, concept) is not None:
                return (domain, concept)
        for domain in self.registry.domains:
            node = self.registry.graph_store(domain).find_node_by_name(concept)
            if node is not None:
                self.nodes[(domain, node.id)] = node
                return (domain, node.id)
        raise UnknownConcept(concept)

    def locate(self, preferred: Domain, node_id: str) -> Optional[NodeKey]:
        if self.lookup(preferred, node_id) is not None:
            return (preferred, node_id)
        for domain in self.registry.domains:
            if domain != preferred and self.lookup(domain, node_id) is not None:
                return (domain, node_id)
        return None

    def neighbours(self, key: NodeKey) -> List[Tuple[NodeKey, GraphEdge]]:
        """Incident edges in both directions, ordered by (relation type, neighbour id, direction)."""
        domain, node_id = key
        candidates = []
        for edge in self.registry.graph_store(domain).get_edges(node_id, "both"):
            outgoing = edge.source == node_id
            other = edge.target if outgoing else edge.source
            if other == node_id:
                continue
            candidates.append((edge.relation_type, other, "out" if outgoing else "in", edge))
        candidates.sort(key=lambda c: c[:3])

        result = []
        for _, other, _, edge in candidates:
            located = self.locate(domain, other)
            if located is not None:
                result.append((located, edge))
        return result

    def path_node(self, key: NodeKey) -> PathNode:
        node = self.nodes[key]
        return PathNode(node_id=node.id, domain=key[0], name=node.name)


class ConnectionFinder:
    """
    Breadth-first search for the shortest chain of relationships between two concepts.

    The per-domain graph stores are traversed as one federated graph: a node is
    identified by (domain, id), edges are walked in both directions, and an edge
    endpoint that the owning domain doesn't hold is looked up by id in the other
    domains. That lookup is what lets bridging edges cross domains.
    """

    def __init__(self, registry: DomainRegistry, max_hops: int = None):
        self.registry = registry
        self.max_hops = max_hops or settings.MAX_HOPS

    def resolve(self, concept: str) -> NodeKey:
        """Exact id first, then a case-insensitive name match, scanning domains in sorted order."""
        return _FederatedGraph(self.registry).resolve(self._clean(concept))

    @staticmethod
    def _clean(concept: str) -> str:
        if concept is None or not str(concept).strip():
            raise InvalidQuery("Concept names must be non-empty.")
        return str(concept).strip()

    @staticmethod
    def _build_path(graph: _FederatedGraph, end: NodeKey, parents: Parents) -> ConnectionPath:
        nodes = [graph.path_node(end)]
        edges = []
        current = end
        while parents[current] is not None:
            previous, edge = parents[current]
            edges.append(PathEdge(relation_type=edge.relation_type, source=edge.source, target=edge.target))
            nodes.append(graph.path_node(previous))
            current = previous
        nodes.reverse()
        edges.reverse()
        return ConnectionPath(nodes=nodes, edges=edges)

    def find_connections(self, concept_a: str, concept_b: str, max_hops: int = None) -> ConnectionPath:
        max_hops = self.max_hops if max_hops is None else max_hops
        if not isinstance(max_hops, int) or max_hops < 1:
            raise InvalidQuery("max_hops must be a positive integer.")

        graph = _FederatedGraph(self.registry)
        start = graph.resolve(self._clean(concept_a))
        goal = graph.resolve(self._clean(concept_b))

        parents: Parents = {start: None}
        if start == goal:
            return self._build_path(graph, start, parents)

        frontier = deque([start])
        for _ in range(max_hops):
            next_frontier = deque()
            while frontier:
                current = frontier.popleft()
                for neighbour, edge in graph.neighbours(current):
                    if neighbour in parents:
                        continue
                    parents[neighbour] = (current, edge)
                    if neighbour == goal:
                        path = self._build_path(graph, goal, parents)
                        logger.info("Connection found", extra={"source": concept_a, "target": concept_b, "hops": path.hops})
                        return path
                    next_frontier.append(neighbour)
            if not next_frontier:
                break
            frontier = next_frontier

        logger.info("No connection within bound", extra={"source": concept_a, "target": concept_b, "max_hops": max_hops})
        return ConnectionPath()
