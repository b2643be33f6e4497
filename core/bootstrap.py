# /core/bootstrap.py

import os
from typing import Dict

from core.config import Settings, settings as default_settings
from core.database import Neo4jGraphStore
from core.embeddings import Embedder, get_embedder
from core.exceptions import ConfigurationError
from core.logger import get_logger
from core.memory_database import InMemoryGraphStore
from core.models import Domain
from core.orchestrator import KnowledgeOrchestrator
from core.registry import DomainBackend, DomainRegistry
from core.vector_store import FaissVectorStore, InMemoryVectorStore
from ingestion.engine import IngestionEngine
from ingestion.sources import BuiltinSeedSource

logger = get_logger(__name__)


def build_backends(embedder: Embedder, config: Settings = None) -> Dict[Domain, DomainBackend]:
    """
    Opens one vector store and one graph store per domain. With the memory
    backend the built-in seeds are ingested straight away; the persistent
    backend expects `run_ingestion.py` to have populated Neo4j and FAISS.
    """
    config = config or default_settings
    engine = IngestionEngine([BuiltinSeedSource()], embedder)
    seeds = engine.load()

    backends = {}
    for domain in Domain:
        exemplars = seeds[domain].exemplars if domain in seeds else []
        if config.STORE_BACKEND == "memory":
            vector_store = InMemoryVectorStore(embedder.dimensions)
            graph_store = InMemoryGraphStore()
        elif config.STORE_BACKEND == "persistent":
            vector_store = FaissVectorStore(embedder.dimensions, path=os.path.join(config.VECTOR_STORE_PATH, domain.value))
            graph_store = Neo4jGraphStore(
                config.NEO4J_URI,
                config.NEO4J_USERNAME,
                config.NEO4J_PASSWORD,
                domain_label=domain.value.capitalize(),
            )
        else:
            raise ConfigurationError(f"Unknown store backend '{config.STORE_BACKEND}'.")
        backends[domain] = DomainBackend(vector_store=vector_store, graph_store=graph_store, exemplars=exemplars)

    if config.STORE_BACKEND == "memory":
        engine.run(backends)
    return backends


def build_orchestrator(config: Settings = None, embedder: Embedder = None) -> KnowledgeOrchestrator:
    config = config or default_settings
    embedder = embedder or get_embedder(config)
    registry = DomainRegistry(build_backends(embedder, config))
    logger.info(
        "Orchestrator built",
        extra={"backend": config.STORE_BACKEND, "embedder": config.EMBEDDING_PROVIDER, "domains": [d.value for d in registry.domains]},
    )
    return KnowledgeOrchestrator(registry, embedder)
