# /core/registry.py

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping

from core.database import GraphStore
from core.exceptions import ConfigurationError
from core.models import Domain
from core.vector_store import VectorStore


@dataclass
class DomainBackend:
    """Everything the orchestrator needs for one domain."""
    vector_store: VectorStore
    graph_store: GraphStore
    exemplars: List[str] = field(default_factory=list)


class DomainRegistry:
    """
    Closed mapping from Domain to its backend, validated once at construction.
    Asking for an unregistered domain later is a configuration error, not a KeyError.
    """

    def __init__(self, backends: Mapping[Domain, DomainBackend], require_all: bool = True):
        self._backends: Dict[Domain, DomainBackend] = {}
        for domain, backend in backends.items():
            try:
                domain = Domain(domain)
            except ValueError:
                raise ConfigurationError(f"'{domain}' is not a known domain.") from None
            self._validate(domain, backend)
            self._backends[domain] = backend

        if not self._backends:
            raise ConfigurationError("At least one domain must be registered.")

        missing = [d.value for d in Domain if d not in self._backends]
        if require_all and missing:
            raise ConfigurationError(f"No backend registered for domain(s): {', '.join(missing)}")

    @staticmethod
    def _validate(domain: Domain, backend: DomainBackend):
        if not isinstance(backend.vector_store, VectorStore):
            raise ConfigurationError(f"Domain '{domain.value}' has no vector store.")
        if not isinstance(backend.graph_store, GraphStore):
            raise ConfigurationError(f"Domain '{domain.value}' has no graph store.")
        if not [e for e in backend.exemplars if e and e.strip()]:
            raise ConfigurationError(f"Domain '{domain.value}' has no intent exemplars.")

    @property
    def domains(self) -> List[Domain]:
        """Registered domains in lexicographic order of their identifiers."""
        return sorted(self._backends, key=lambda d: d.value)

    def get(self, domain: Domain) -> DomainBackend:
        try:
            return self._backends[Domain(domain)]
        except (KeyError, ValueError):
            raise ConfigurationError(f"Domain '{getattr(domain, 'value', domain)}' is not registered.") from None

    def vector_store(self, domain: Domain) -> VectorStore:
        return self.get(domain).vector_store

    def graph_store(self, domain: Domain) -> GraphStore:
        return self.get(domain).graph_store

    def exemplars(self) -> Dict[Domain, List[str]]:
        return {d: list(self._backends[d].exemplars) for d in self.domains}

    def require(self, domains: Iterable[Domain]) -> List[Domain]:
        """Validates a set of target domains and returns them in sorted order."""
        resolved = set()
        for domain in domains:
            self.get(domain)
            resolved.add(Domain(domain))
        return sorted(resolved, key=lambda d: d.value)

    def close(self):
        for domain in self.domains:
            backend = self._backends[domain]
            backend.vector_store.close()
            backend.graph_store.close()

    def __contains__(self, domain) -> bool:
        try:
            return Domain(domain) in self._backends
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._backends)
