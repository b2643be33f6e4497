# /core/retriever.py

import asyncio
from typing import Dict, Iterable, List, Optional

from core.config import settings
from core.exceptions import AllDomainsUnavailable, DomainUnavailable, InvalidQuery
from core.logger import get_logger
from core.models import Domain, DomainWarning, FusedHits, MergeMode, SearchHit
from core.registry import DomainRegistry

logger = get_logger(__name__)


def fusion_key(hit: SearchHit):
    """Descending score, then (domain, id) so equal scores order the same way every time."""
    return (-hit.score, hit.domain.value, hit.id)


def merge_hits(batches: Iterable[List[SearchHit]], k: int = None) -> List[SearchHit]:
    merged = sorted((hit for batch in batches for hit in batch), key=fusion_key)
    return merged[:k] if k is not None else merged


class MultiDomainSearch:
    """
    Sends one query vector to one or more domain vector stores and fuses the hits.

    Store calls are blocking, so each branch runs in a worker thread and the
    branches are awaited together. A branch that raises or misses the deadline
    becomes a DomainWarning; only when every branch fails does the search fail.
    """

    def __init__(self, registry: DomainRegistry):
        self.registry = registry

    def _query_store(self, domain: Domain, vector: List[float], k: int) -> List[SearchHit]:
        store = self.registry.vector_store(domain)
        hits = []
        for record_id, distance in store.search(vector, k):
            # Stores report distances; fused rankings need comparable similarities
            score = min(1.0, max(0.0, 1.0 - float(distance)))
            hits.append(SearchHit(domain=domain, id=record_id, score=score, metadata=store.get_metadata(record_id)))
        return hits

    async def _branch(self, domain: Domain, vector: List[float], k: int) -> List[SearchHit]:
        try:
            return await asyncio.to_thread(self._query_store, domain, vector, k)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise DomainUnavailable(domain, f"{type(e).__name__}: {e}") from e

    async def search(
        self,
        vector: List[float],
        target_domains: Iterable[Domain],
        k: int = None,
        merge_mode: Optional[MergeMode] = None,
        timeout: Optional[float] = None,
    ) -> FusedHits:
        k = settings.SEARCH_K if k is None else k
        merge_mode = merge_mode or settings.FUSION_MERGE_MODE
        timeout = settings.SEARCH_TIMEOUT_SECONDS if timeout is None else timeout

        if not isinstance(k, int) or k < 1:
            raise InvalidQuery("k must be a positive integer.")
        if merge_mode not in ("per_domain", "overall"):
            raise InvalidQuery(f"Unknown merge mode '{merge_mode}'.")
        domains = self.registry.require(target_domains)
        if not domains:
            raise InvalidQuery("At least one target domain is required.")

        tasks: Dict[Domain, asyncio.Task] = {
            domain: asyncio.create_task(self._branch(domain, vector, k)) for domain in domains
        }
        done, pending = await asyncio.wait(tasks.values(), timeout=timeout)
        for task in pending:
            task.cancel()

        batches: List[List[SearchHit]] = []
        warnings: List[DomainWarning] = []
        for domain, task in tasks.items():
            if task in pending:
                reason = f"timed out after {round(timeout, 3)}s"
            elif task.exception() is not None:
                reason = task.exception().reason if isinstance(task.exception(), DomainUnavailable) else str(task.exception())
            else:
                batches.append(task.result())
                continue
            logger.warning("Domain unavailable during search", extra={"domain": domain.value, "reason": reason})
            warnings.append(DomainWarning(domain=domain, reason=reason))

        if len(warnings) == len(domains):
            raise AllDomainsUnavailable(warnings)

        if len(domains) == 1:
            # Single-domain mode returns the store's own ranking untouched
            hits = batches[0]
        else:
            hits = merge_hits(batches, k if merge_mode == "overall" else None)

        logger.info(
            "Search complete",
            extra={"domains": [d.value for d in domains], "hits": len(hits), "failed": [w.domain.value for w in warnings]},
        )
        return FusedHits(hits=hits, warnings=warnings)
