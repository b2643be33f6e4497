# /core/database.py

from abc import ABC, abstractmethod
import re
from neo4j import GraphDatabase
from typing import List, Optional

from core.models import Direction, GraphEdge, GraphNode, GraphStats

class GraphStore(ABC):
    """
    An abstract base class defining the interface the orchestrator uses to read one domain's graph.
    """
    @abstractmethod
    def get_node(self, node_id: str) -> Optional[GraphNode]:
        pass

    @abstractmethod
    def get_edges(self, node_id: str, direction: Direction = "both") -> List[GraphEdge]:
        pass

    @abstractmethod
    def find_node_by_name(self, name: str) -> Optional[GraphNode]:
        """Case-insensitive match on the node's `name` property."""
        pass

    @abstractmethod
    def write_graph(self, nodes: List[GraphNode], edges: List[GraphEdge]):
        pass

    @abstractmethod
    def stats(self) -> GraphStats:
        """Node, edge, label and relationship-type counts for this domain."""
        pass

    @abstractmethod
    def close(self):
        pass


_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

def _check_identifier(value: str) -> str:
    # Labels and relationship types are interpolated into Cypher, parameters can't carry them
    if not _IDENTIFIER.match(value):
        raise ValueError(f"'{value}' is not a valid Neo4j label or relationship type.")
    return value


class Neo4jGraphStore(GraphStore):
    """
    Concrete implementation of the GraphStore for Neo4j. Every node of the domain
    carries the domain label (e.g. :Science) next to its own labels, so several
    domains can share one database without seeing each other's nodes.
    """
    def __init__(self, uri: str, user: str, password: str, domain_label: str, database: str = None, driver=None):
        self.domain_label = _check_identifier(domain_label)
        self.database = database
        self._driver = driver or GraphDatabase.driver(uri, auth=(user, password))

    def _run(self, query: str, **params) -> List[dict]:
        with self._driver.session(database=self.database) as session:
            return session.run(query, params).data()

    def _to_node(self, row: dict) -> GraphNode:
        labels = {label for label in row["labels"] if label != self.domain_label}
        properties = dict(row["properties"])
        properties.pop("id", None)
        return GraphNode(id=row["id"], labels=labels, properties=properties)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        rows = self._run(
            f"MATCH (n:`{self.domain_label}` {{id: $id}}) "
            "RETURN n.id AS id, labels(n) AS labels, properties(n) AS properties LIMIT 1",
            id=node_id,
        )
        return self._to_node(rows[0]) if rows else None

    def get_edges(self, node_id: str, direction: Direction = "both") -> List[GraphEdge]:
        patterns = {
            "out": ["(n)-[r]->(m)"],
            "in": ["(m)-[r]->(n)"],
            "both": ["(n)-[r]->(m)", "(m)-[r]->(n)"],
        }
        if direction not in patterns:
            raise ValueError(f"Unknown edge direction '{direction}'.")

        edges = []
        for pattern in patterns[direction]:
            rows = self._run(
                f"MATCH (n:`{self.domain_label}` {{id: $id}}) MATCH {pattern} "
                "RETURN startNode(r).id AS source, endNode(r).id AS target, "
                "type(r) AS relation_type, coalesce(r.confidence, 1.0) AS confidence",
                id=node_id,
            )
            edges.extend(GraphEdge(**row) for row in rows)
        return edges

    def find_node_by_name(self, name: str) -> Optional[GraphNode]:
        rows = self._run(
            f"MATCH (n:`{self.domain_label}`) WHERE toLower(n.name) = toLower($name) "
            "RETURN n.id AS id, labels(n) AS labels, properties(n) AS properties ORDER BY n.id LIMIT 1",
            name=name,
        )
        return self._to_node(rows[0]) if rows else None

    def write_graph(self, nodes: List[GraphNode], edges: List[GraphEdge]):
        """
        Writes nodes and edges with MERGE, so running an ingestion twice is harmless.
        Edge endpoints are matched by id in any domain, which is how bridging edges are stored.
        """
        with self._driver.session(database=self.database) as session:
            for node in nodes:
                labels = "".join(f":`{_check_identifier(label)}`" for label in sorted(node.labels))
                set_labels = f" SET n{labels}" if labels else ""
                session.run(
                    f"MERGE (n:`{self.domain_label}` {{id: $id}}){set_labels} SET n += $properties",
                    {"id": node.id, "properties": node.properties},
                )
            for edge in edges:
                session.run(
                    f"""
                    MATCH (a {{id: $source}})
                    MATCH (b {{id: $target}})
                    MERGE (a)-[r:`{_check_identifier(edge.relation_type)}`]->(b)
                    SET r.confidence = $confidence
                    """,
                    {"source": edge.source, "target": edge.target, "confidence": edge.confidence},
                )

    def stats(self) -> GraphStats:
        """
        Counts the domain's nodes and every relationship touching one of them,
        so a bridging edge is counted by both of its endpoint domains.
        """
        label = f"`{self.domain_label}`"
        nodes = self._run(f"MATCH (n:{label}) RETURN count(n) AS nodes")
        labels = self._run(
            f"MATCH (n:{label}) UNWIND labels(n) AS label WITH label WHERE label <> $domain_label "
            "RETURN label, count(*) AS count",
            domain_label=self.domain_label,
        )
        relations = self._run(
            f"MATCH (a)-[r]->(b) WHERE a:{label} OR b:{label} "
            "RETURN type(r) AS relation_type, count(r) AS count"
        )
        return GraphStats.from_counts(
            nodes=nodes[0]["nodes"] if nodes else 0,
            labels={row["label"]: row["count"] for row in labels},
            relation_types={row["relation_type"]: row["count"] for row in relations},
        )

    def close(self):
        self._driver.close()
