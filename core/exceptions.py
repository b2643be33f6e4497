# /core/exceptions.py

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from core.models import DomainWarning


class OrchestratorError(Exception):
    """Base class for every failure the orchestration layer reports to a caller."""


class ConfigurationError(OrchestratorError):
    """A domain, provider or backend is missing or incompletely registered."""


class InvalidQuery(OrchestratorError, ValueError):
    """The input was rejected before any store was touched."""


class DomainUnavailable(OrchestratorError):
    """One domain's backing store failed or timed out."""

    def __init__(self, domain, reason: str):
        self.domain = domain
        self.reason = reason
        super().__init__(f"Domain '{getattr(domain, 'value', domain)}' unavailable: {reason}")


class AllDomainsUnavailable(OrchestratorError):
    """Every targeted domain failed, so there is nothing to return."""

    def __init__(self, warnings: List["DomainWarning"]):
        self.warnings = list(warnings)
        failed = ", ".join(w.domain.value for w in self.warnings)
        super().__init__(f"All target domains are unavailable: {failed}")


class UnknownConcept(OrchestratorError, LookupError):
    """A connection endpoint does not resolve to a node in any domain."""

    def __init__(self, concept: str):
        self.concept = concept
        super().__init__(f"Concept '{concept}' was not found in any domain.")
