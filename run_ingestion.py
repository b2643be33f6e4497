# /run_ingestion.py

import argparse
import sys
from dotenv import load_dotenv

from core.bootstrap import build_backends
from core.config import settings
from core.embeddings import get_embedder
from core.logger import get_logger
from core.vector_store import FaissVectorStore
from ingestion.engine import IngestionEngine
from ingestion.sources import BuiltinSeedSource, JsonSeedSource

logger = get_logger("run_ingestion")

def main(argv=None):
    """
    Populates the configured domain stores from the built-in seeds and any
    extra JSON seed files. With STORE_BACKEND=persistent this writes to Neo4j
    and saves one FAISS index per domain under VECTOR_STORE_PATH.
    """
    load_dotenv()

    parser = argparse.ArgumentParser(description="Load seed data into the knowledge domains.")
    parser.add_argument("--seeds", action="append", default=[], help="Extra JSON seed file or directory (repeatable).")
    parser.add_argument("--no-builtin", action="store_true", help="Skip the built-in demo seeds.")
    args = parser.parse_args(argv)

    sources = [] if args.no_builtin else [BuiltinSeedSource()]
    sources.extend(JsonSeedSource(path) for path in args.seeds)
    if not sources:
        print("Error: no seed sources selected.")
        return 1

    embedder = get_embedder(settings)
    backends = build_backends(embedder, settings)
    try:
        # The memory backend arrives pre-seeded, so only non-builtin sources add anything there
        stats = IngestionEngine(sources, embedder).run(backends)
        for backend in backends.values():
            if isinstance(backend.vector_store, FaissVectorStore):
                backend.vector_store.save()
    finally:
        for backend in backends.values():
            backend.vector_store.close()
            backend.graph_store.close()

    for domain, count in stats.items():
        print(f"{domain.value}: {count} new vector records")
    logger.info("Ingestion finished", extra={"backend": settings.STORE_BACKEND})
    return 0


if __name__ == '__main__':
    sys.exit(main())
