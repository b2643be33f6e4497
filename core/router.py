from typing import Dict, List, Mapping

import numpy as np

from core.config import settings
from core.embeddings import Embedder
from core.exceptions import ConfigurationError, InvalidQuery
from core.logger import get_logger
from core.models import Domain, RouterDecision

logger = get_logger(__name__)


def validate_query(query: str) -> str:
    if query is None or not isinstance(query, str) or not query.strip():
        raise InvalidQuery("Query must be a non-empty string.")
    return query.strip()


class IntentRouter:
    """
    Routes a query to the domain whose exemplar phrases it most resembles.

    Exemplars are embedded once here. A domain's score is the mean of its
    `top_k` best exemplar similarities, where similarity is cosine mapped onto
    [0, 1]. Scores within `tie_epsilon` of the best are ties and go to the
    domain whose identifier sorts first.
    """

    def __init__(self, embedder: Embedder, exemplars: Mapping[Domain, List[str]], top_k: int = None, tie_epsilon: float = None):
        self.embedder = embedder
        self.top_k = top_k or settings.ROUTER_TOP_K
        self.tie_epsilon = settings.ROUTER_TIE_EPSILON if tie_epsilon is None else tie_epsilon
        if self.top_k < 1:
            raise ConfigurationError("Router top_k must be at least 1.")

        self._exemplar_matrices: Dict[Domain, np.ndarray] = {}
        for domain, phrases in exemplars.items():
            phrases = [p for p in phrases if p and p.strip()]
            if not phrases:
                raise ConfigurationError(f"Domain '{Domain(domain).value}' has no intent exemplars.")
            vectors = np.asarray(embedder.embed_many(phrases), dtype=np.float64)
            norms = np.linalg.norm(vectors, axis=1, keepdims=True)
            norms[norms == 0] = 1.0
            self._exemplar_matrices[Domain(domain)] = vectors / norms

        if not self._exemplar_matrices:
            raise ConfigurationError("The router needs at least one domain.")
        logger.info("Intent router ready", extra={"domains": sorted(d.value for d in self._exemplar_matrices)})

    def score_domains(self, query: str) -> Dict[Domain, float]:
        query = validate_query(query)
        vector = np.asarray(self.embedder.embed(query), dtype=np.float64)
        norm = np.linalg.norm(vector)
        if norm > 0:
            vector = vector / norm

        scores = {}
        for domain, matrix in self._exemplar_matrices.items():
            similarities = (matrix @ vector + 1.0) / 2.0
            best = np.sort(similarities)[::-1][:self.top_k]
            scores[domain] = float(np.clip(best.mean(), 0.0, 1.0))
        return scores

    def route(self, query: str) -> RouterDecision:
        scores = self.score_domains(query)
        top_score = max(scores.values())
        tied = [d for d, s in scores.items() if top_score - s <= self.tie_epsilon]
        domain = min(tied, key=lambda d: d.value)

        logger.info(
            "Routed query",
            extra={"domain": domain.value, "confidence": round(scores[domain], 6), "tied": len(tied) > 1},
        )
        return RouterDecision(domain=domain, confidence=scores[domain], scores=scores)
