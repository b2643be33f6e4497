from collections import Counter
from typing import Dict, List, Optional

from core.database import GraphStore
from core.models import Direction, GraphEdge, GraphNode, GraphStats


class InMemoryGraphStore(GraphStore):
    """
    Dict-backed graph for one domain. Edges are indexed from both ends; an edge
    may point at a node id owned by another domain (a bridging edge).
    """

    def __init__(self):
        self._nodes: Dict[str, GraphNode] = {}
        self._outgoing: Dict[str, List[GraphEdge]] = {}
        self._incoming: Dict[str, List[GraphEdge]] = {}

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        return self._nodes.get(node_id)

    def get_edges(self, node_id: str, direction: Direction = "both") -> List[GraphEdge]:
        if direction == "out":
            return list(self._outgoing.get(node_id, []))
        if direction == "in":
            return list(self._incoming.get(node_id, []))
        if direction == "both":
            return list(self._outgoing.get(node_id, [])) + list(self._incoming.get(node_id, []))
        raise ValueError(f"Unknown edge direction '{direction}'.")

    def find_node_by_name(self, name: str) -> Optional[GraphNode]:
        wanted = name.strip().lower()
        for node_id in sorted(self._nodes):
            node = self._nodes[node_id]
            if str(node.properties.get("name", "")).lower() == wanted:
                return node
        return None

    def write_graph(self, nodes: List[GraphNode], edges: List[GraphEdge]):
        for node in nodes:
            self._nodes[node.id] = node
        for edge in edges:
            existing = self._outgoing.setdefault(edge.source, [])
            # Same (source, target, type) merges like Neo4j's MERGE
            existing[:] = [
                e for e in existing
                if not (e.target == edge.target and e.relation_type == edge.relation_type)
            ]
            existing.append(edge)
            incoming = self._incoming.setdefault(edge.target, [])
            incoming[:] = [
                e for e in incoming
                if not (e.source == edge.source and e.relation_type == edge.relation_type)
            ]
            incoming.append(edge)

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._outgoing.values())

    def stats(self) -> GraphStats:
        labels = Counter(label for node in self._nodes.values() for label in node.labels)
        relation_types = Counter(e.relation_type for edges in self._outgoing.values() for e in edges)
        return GraphStats.from_counts(self.node_count(), labels, relation_types)

    def close(self):
        pass
