# /core/orchestrator.py

import asyncio
from typing import Iterable, List, Optional

from core.config import settings
from core.connections import ConnectionFinder
from core.embeddings import Embedder
from core.exceptions import AllDomainsUnavailable, DomainUnavailable
from core.graph_enhancer import GraphEnhancer
from core.logger import get_logger
from core.models import (
    ConnectionPath,
    Domain,
    DomainStats,
    DomainWarning,
    MergeMode,
    RouterDecision,
    SearchResponse,
    StatsResponse,
)
from core.registry import DomainRegistry
from core.retriever import MultiDomainSearch
from core.router import IntentRouter, validate_query

logger = get_logger(__name__)


class _Deadline:
    """One time budget shared by every step of a single request."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        self._loop = asyncio.get_running_loop()
        self._expires = self._loop.time() + timeout

    def remaining(self) -> float:
        return max(0.0, self._expires - self._loop.time())


class KnowledgeOrchestrator:
    """
    The single entry point front ends talk to.

    Store handles arrive through the registry and the embedder is injected too,
    so nothing here opens a database on its own. Routing, embedding and store
    calls are blocking and run in worker threads. A search's `timeout` covers
    the whole request, from routing to graph enrichment. Call `close()` to
    release the registered stores.
    """

    def __init__(self, registry: DomainRegistry, embedder: Embedder, router: IntentRouter = None):
        self.registry = registry
        self.embedder = embedder
        self.router = router or IntentRouter(embedder, registry.exemplars())
        self.fusion = MultiDomainSearch(registry)
        self.enhancer = GraphEnhancer(registry)
        self.connection_finder = ConnectionFinder(registry)

    @staticmethod
    async def _within(deadline: _Deadline, domains: Iterable[Domain], func, *args):
        """Runs a blocking call in a thread; missing the deadline fails every domain the request targets."""
        try:
            return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=deadline.remaining())
        except asyncio.TimeoutError:
            reason = f"timed out after {round(deadline.timeout, 3)}s"
            logger.warning("Request deadline expired before the stores were queried", extra={"reason": reason})
            raise AllDomainsUnavailable([DomainWarning(domain=d, reason=reason) for d in domains]) from None

    async def route(self, query: str) -> RouterDecision:
        query = validate_query(query)
        return await asyncio.to_thread(self.router.route, query)

    async def search(self, query: str, k: Optional[int] = None, timeout: Optional[float] = None) -> SearchResponse:
        """Routes the query, searches the chosen domain only, then adds graph context."""
        query = validate_query(query)
        deadline = _Deadline(settings.SEARCH_TIMEOUT_SECONDS if timeout is None else timeout)

        decision = await self._within(deadline, self.registry.domains, self.router.route, query)
        vector = await self._within(deadline, [decision.domain], self.embedder.embed, query)

        fused = await self.fusion.search(vector, [decision.domain], k=k, timeout=deadline.remaining())
        enhanced = await self.enhancer.enhance(fused.hits, timeout=deadline.remaining())
        return SearchResponse(
            query=query,
            decision=decision,
            hits=fused.hits,
            results=enhanced.results,
            warnings=fused.warnings + enhanced.warnings,
        )

    async def multi_domain_search(
        self,
        query: str,
        k: Optional[int] = None,
        merge_mode: Optional[MergeMode] = None,
        timeout: Optional[float] = None,
    ) -> SearchResponse:
        """Skips routing and fans the query out to every registered domain."""
        query = validate_query(query)
        deadline = _Deadline(settings.SEARCH_TIMEOUT_SECONDS if timeout is None else timeout)

        vector = await self._within(deadline, self.registry.domains, self.embedder.embed, query)

        fused = await self.fusion.search(
            vector, self.registry.domains, k=k, merge_mode=merge_mode, timeout=deadline.remaining(),
        )
        enhanced = await self.enhancer.enhance(fused.hits, timeout=deadline.remaining())
        return SearchResponse(query=query, hits=fused.hits, results=enhanced.results, warnings=fused.warnings + enhanced.warnings)

    async def find_connections(self, concept_a: str, concept_b: str, max_hops: Optional[int] = None) -> ConnectionPath:
        return await asyncio.to_thread(self.connection_finder.find_connections, concept_a, concept_b, max_hops)

    def _domain_stats(self, domain: Domain) -> DomainStats:
        backend = self.registry.get(domain)
        try:
            return DomainStats(domain=domain, vector_records=len(backend.vector_store), graph=backend.graph_store.stats())
        except Exception as e:
            raise DomainUnavailable(domain, f"{type(e).__name__}: {e}") from e

    async def stats(self) -> StatsResponse:
        """Record and graph counts per domain, for checking what ingestion wrote."""
        domains: List[DomainStats] = await asyncio.gather(
            *(asyncio.to_thread(self._domain_stats, domain) for domain in self.registry.domains)
        )
        logger.info(
            "Collected domain stats",
            extra={"domains": {s.domain.value: {"vectors": s.vector_records, "nodes": s.graph.nodes} for s in domains}},
        )
        return StatsResponse(domains=list(domains))

    def close(self):
        self.registry.close()
        logger.info("Orchestrator closed", extra={"domains": [d.value for d in self.registry.domains]})
