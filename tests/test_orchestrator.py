# /tests/test_orchestrator.py

import unittest
from unittest.mock import MagicMock
import asyncio
import time
import sys
import os

# Add root directory to path to allow imports from 'core'
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from core.bootstrap import build_orchestrator
from core.config import Settings
from core.embeddings import HashingEmbedder
from core.database import GraphStore
from core.exceptions import AllDomainsUnavailable, DomainUnavailable, InvalidQuery, UnknownConcept
from core.models import Domain
from core.orchestrator import KnowledgeOrchestrator
from core.router import IntentRouter
from support import (
    EXEMPLARS,
    FailingVectorStore,
    FixedEmbedder,
    SlowEmbedder,
    SlowGraphStore,
    StaticVectorStore,
    make_registry,
)


class TestKnowledgeOrchestrator(unittest.IsolatedAsyncioTestCase):
    """End-to-end over the in-memory backend seeded with the built-in domain graphs."""

    def setUp(self):
        self.orchestrator = build_orchestrator(Settings(STORE_BACKEND="memory", EMBEDDING_PROVIDER="hash"))

    def tearDown(self):
        self.orchestrator.close()

    async def test_route(self):
        decision = await self.orchestrator.route("How do atoms bond together?")

        self.assertEqual(decision.domain, Domain.SCIENCE)
        self.assertEqual(set(decision.scores), set(Domain))

    async def test_search_stays_in_routed_domain(self):
        response = await self.orchestrator.search("How do atoms bond together?", k=3)

        self.assertEqual(response.decision.domain, Domain.SCIENCE)
        self.assertTrue(1 <= len(response.hits) <= 3)
        self.assertTrue(all(h.domain == Domain.SCIENCE for h in response.hits))
        self.assertEqual([r.domain for r in response.results], [Domain.SCIENCE])
        self.assertEqual(response.warnings, [])

    async def test_search_hits_carry_graph_context(self):
        response = await self.orchestrator.search("What is quantum mechanics and who pioneered it?", k=3)

        connections = [c for r in response.results for c in r.graph_connections]
        self.assertTrue(connections)
        self.assertTrue(all(h.metadata.get("name") for h in response.hits))

    async def test_multi_domain_search_returns_k_per_domain(self):
        response = await self.orchestrator.multi_domain_search("How do atoms bond together?", k=3)

        self.assertIsNone(response.decision)
        self.assertEqual(len(response.hits), 9)
        for domain in Domain:
            self.assertEqual(sum(1 for h in response.hits if h.domain == domain), 3)
        scores = [h.score for h in response.hits]
        self.assertEqual(scores, sorted(scores, reverse=True))

    async def test_multi_domain_search_overall_mode(self):
        response = await self.orchestrator.multi_domain_search("knowledge and learning", k=3, merge_mode="overall")

        self.assertEqual(len(response.hits), 3)

    async def test_find_connections_across_domains(self):
        direct = await self.orchestrator.find_connections("Einstein", "Quantum Mechanics")
        bridged = await self.orchestrator.find_connections("Einstein", "Deontology")

        self.assertEqual(direct.render(), "[Einstein] -PIONEERED-> [Quantum Mechanics]")
        self.assertEqual(bridged.render(), "[Einstein] -READ-> [Kant] -FOUNDED-> [Deontology]")

    async def test_stats_match_ingested_seeds(self):
        stats = await self.orchestrator.stats()

        by_domain = {s.domain: s for s in stats.domains}
        self.assertEqual([s.domain for s in stats.domains], [Domain.PHILOSOPHY, Domain.SCIENCE, Domain.TECHNOLOGY])
        for domain_stats in stats.domains:
            self.assertGreater(domain_stats.graph.nodes, 0)
            self.assertEqual(domain_stats.vector_records, domain_stats.graph.nodes)
        # Bridging edges are stored, and counted, on both sides
        self.assertEqual(by_domain[Domain.SCIENCE].graph.relation_types["READ"], 1)
        self.assertEqual(by_domain[Domain.PHILOSOPHY].graph.relation_types["READ"], 1)
        self.assertEqual(by_domain[Domain.PHILOSOPHY].graph.relation_types["DRAWS_ON"], 1)
        self.assertIn("Scientist", by_domain[Domain.SCIENCE].graph.labels)

    async def test_errors_reach_the_caller(self):
        with self.assertRaises(InvalidQuery):
            await self.orchestrator.search("   ")
        with self.assertRaises(InvalidQuery):
            await self.orchestrator.multi_domain_search("")
        with self.assertRaises(UnknownConcept):
            await self.orchestrator.find_connections("Einstein", "Nobody In Particular")


class TestOrchestratorDegradation(unittest.IsolatedAsyncioTestCase):

    async def test_failing_domain_is_reported_not_raised(self):
        registry = make_registry(vector_stores={
            Domain.SCIENCE: StaticVectorStore([("qm", 0.1)]),
            Domain.TECHNOLOGY: FailingVectorStore(),
            Domain.PHILOSOPHY: StaticVectorStore([("kant", 0.2)]),
        })
        orchestrator = KnowledgeOrchestrator(registry, HashingEmbedder(64))

        response = await orchestrator.multi_domain_search("anything at all", k=2)

        self.assertEqual([h.id for h in response.hits], ["qm", "kant"])
        self.assertEqual([w.domain for w in response.warnings], [Domain.TECHNOLOGY])

    async def test_routed_domain_failing_raises(self):
        registry = make_registry(vector_stores={Domain.SCIENCE: FailingVectorStore()})
        orchestrator = KnowledgeOrchestrator(registry, HashingEmbedder(64))

        with self.assertRaises(AllDomainsUnavailable):
            await orchestrator.search("How do atoms bond together into molecules?")

    async def test_graph_store_failure_is_reported_as_warning(self):
        broken = MagicMock(spec=GraphStore)
        broken.get_node.side_effect = ConnectionError("graph offline")
        registry = make_registry(
            vector_stores={Domain.SCIENCE: StaticVectorStore([("qm", 0.1)])},
            graph_stores={Domain.SCIENCE: broken},
        )
        orchestrator = KnowledgeOrchestrator(registry, HashingEmbedder(64))

        response = await orchestrator.multi_domain_search("anything at all", k=2)

        self.assertEqual([h.id for h in response.hits], ["qm"])
        self.assertEqual([w.domain for w in response.warnings], [Domain.SCIENCE])
        self.assertIn("graph offline", response.warnings[0].reason)

    async def test_stats_failure_names_the_domain(self):
        broken = MagicMock(spec=GraphStore)
        broken.stats.side_effect = ConnectionError("graph offline")
        orchestrator = KnowledgeOrchestrator(make_registry(graph_stores={Domain.TECHNOLOGY: broken}), HashingEmbedder(64))

        with self.assertRaises(DomainUnavailable) as ctx:
            await orchestrator.stats()

        self.assertEqual(ctx.exception.domain, Domain.TECHNOLOGY)


class TestOrchestratorDeadline(unittest.IsolatedAsyncioTestCase):
    """The caller's timeout bounds the whole request, not only the vector search."""

    async def test_slow_graph_store_does_not_hold_the_request(self):
        registry = make_registry(
            vector_stores={Domain.PHILOSOPHY: StaticVectorStore([("kant", 0.1)])},
            graph_stores={Domain.PHILOSOPHY: SlowGraphStore(delay=1.0)},
        )
        orchestrator = KnowledgeOrchestrator(registry, HashingEmbedder(64))

        started = time.monotonic()
        response = await orchestrator.multi_domain_search("anything", timeout=0.2)
        elapsed = time.monotonic() - started

        self.assertLess(elapsed, 0.6)
        self.assertEqual([h.id for h in response.hits], ["kant"])
        self.assertEqual([w.domain for w in response.warnings], [Domain.PHILOSOPHY])
        self.assertIn("timed out", response.warnings[0].reason)

    async def test_slow_embedding_runs_off_the_event_loop_and_within_the_deadline(self):
        router = IntentRouter(FixedEmbedder({"anything": [1.0, 0.0]}), EXEMPLARS)
        orchestrator = KnowledgeOrchestrator(make_registry(), SlowEmbedder(delay=0.5), router=router)

        stalls = []

        async def ticker():
            last = time.monotonic()
            while True:
                await asyncio.sleep(0.02)
                now = time.monotonic()
                stalls.append(now - last)
                last = now

        ticking = asyncio.create_task(ticker())
        started = time.monotonic()
        try:
            with self.assertRaises(AllDomainsUnavailable) as ctx:
                await orchestrator.multi_domain_search("anything", timeout=0.1)
            elapsed = time.monotonic() - started
        finally:
            ticking.cancel()

        self.assertLess(elapsed, 0.4)
        self.assertLess(max(stalls), 0.2)
        self.assertEqual(sorted(w.domain.value for w in ctx.exception.warnings), ["philosophy", "science", "technology"])

    async def test_routing_runs_off_the_event_loop(self):
        router = IntentRouter(FixedEmbedder({"anything": [1.0, 0.0]}), EXEMPLARS)
        orchestrator = KnowledgeOrchestrator(make_registry(), SlowEmbedder(delay=0.5), router=router)
        router.embedder = SlowEmbedder(delay=0.5)

        with self.assertRaises(AllDomainsUnavailable):
            await orchestrator.search("anything", timeout=0.1)


if __name__ == '__main__':
    unittest.main()
