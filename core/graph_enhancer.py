import asyncio
from typing import Dict, List, Optional, Sequence, Tuple

from core.config import settings
from core.exceptions import InvalidQuery
from core.logger import get_logger
from core.models import Domain, DomainWarning, EnhancedResults, GraphConnection, QueryResult, SearchHit
from core.registry import DomainRegistry

logger = get_logger(__name__)


class GraphEnhancer:
    """Attaches the graph neighbourhood of each search hit, grouped per domain."""

    def __init__(self, registry: DomainRegistry, depth: int = None):
        self.registry = registry
        self.depth = depth or settings.ENHANCER_DEPTH

    def _connections_for(self, hit: SearchHit, depth: int) -> List[GraphConnection]:
        store = self.registry.graph_store(hit.domain)
        if store.get_node(hit.id) is None:
            logger.info("Hit has no graph node", extra={"domain": hit.domain.value, "id": hit.id})
            return []

        seen_edges = set()
        connections = []
        visited = {hit.id}
        frontier = [hit.id]
        for _ in range(depth):
            next_frontier = []
            for node_id in frontier:
                for edge in store.get_edges(node_id, "both"):
                    key = (edge.source, edge.relation_type, edge.target)
                    if key not in seen_edges:
                        seen_edges.add(key)
                        connections.append(GraphConnection(source=edge.source, relation=edge.relation_type, target=edge.target))
                    neighbour = edge.target if edge.source == node_id else edge.source
                    if neighbour not in visited:
                        visited.add(neighbour)
                        next_frontier.append(neighbour)
            frontier = next_frontier
        return connections

    async def enhance(self, hits: Sequence[SearchHit], depth: int = None, timeout: Optional[float] = None) -> EnhancedResults:
        """
        Looks up every hit's neighbourhood concurrently. A lookup that fails, or
        is still running when `timeout` expires, leaves its hit without
        connections and adds a warning for the hit's domain.
        """
        depth = self.depth if depth is None else depth
        if depth < 1:
            raise InvalidQuery("Enhancement depth must be at least 1.")
        if not hits:
            return EnhancedResults()

        tasks = [asyncio.create_task(asyncio.to_thread(self._connections_for, hit, depth)) for hit in hits]
        _, pending = await asyncio.wait(tasks, timeout=timeout)
        for task in pending:
            task.cancel()

        warnings: Dict[Domain, DomainWarning] = {}
        grouped: Dict[Domain, Tuple[List[SearchHit], List[GraphConnection]]] = {}
        for hit, task in zip(hits, tasks):
            connections: List[GraphConnection] = []
            if task in pending:
                reason = f"graph lookup timed out after {round(timeout, 3)}s"
            elif task.exception() is not None:
                reason = f"graph lookup failed: {type(task.exception()).__name__}: {task.exception()}"
            else:
                reason = None
                connections = task.result()
            if reason is not None:
                logger.warning(
                    "Hit left without graph connections",
                    extra={"domain": hit.domain.value, "id": hit.id, "reason": reason},
                )
                warnings.setdefault(hit.domain, DomainWarning(domain=hit.domain, reason=reason))

            matches, domain_connections = grouped.setdefault(hit.domain, ([], []))
            matches.append(hit)
            known = {(c.source, c.relation, c.target) for c in domain_connections}
            domain_connections.extend(c for c in connections if (c.source, c.relation, c.target) not in known)

        return EnhancedResults(
            results=[
                QueryResult(domain=domain, matches=matches, graph_connections=connections)
                for domain, (matches, connections) in grouped.items()
            ],
            warnings=list(warnings.values()),
        )
