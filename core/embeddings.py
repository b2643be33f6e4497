# /core/embeddings.py

import hashlib
import re
from abc import ABC, abstractmethod
from typing import List

import numpy as np

from core.config import settings
from core.exceptions import ConfigurationError

TOKEN_PATTERN = re.compile(r"[a-z0-9]+")


class Embedder(ABC):
    """Turns text into a fixed-length vector. Implementations must be deterministic."""

    dimensions: int

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        pass

    def embed_many(self, texts: List[str]) -> List[List[float]]:
        return [self.embed(text) for text in texts]


class HashingEmbedder(Embedder):
    """
    Bag-of-words feature hashing. Each lower-cased token is hashed with blake2b
    (stable across processes, unlike the built-in hash) into one of `dimensions`
    buckets, and the count vector is L2-normalised. Texts sharing words end up
    with high cosine similarity, which is all routing and the demo stores need.
    """

    def __init__(self, dimensions: int = 384):
        if dimensions <= 0:
            raise ConfigurationError("Embedding dimensions must be positive.")
        self.dimensions = dimensions

    def _bucket(self, token: str) -> int:
        digest = hashlib.blake2b(token.encode("utf-8"), digest_size=8).digest()
        return int.from_bytes(digest, "big") % self.dimensions

    def embed(self, text: str) -> List[float]:
        vector = np.zeros(self.dimensions, dtype=np.float64)
        for token in TOKEN_PATTERN.findall(text.lower()):
            vector[self._bucket(token)] += 1.0
        norm = np.linalg.norm(vector)
        if norm > 0:
            vector /= norm
        return vector.tolist()


class GoogleEmbedder(Embedder):
    """Adapter over langchain's Google Generative AI embeddings."""

    def __init__(self, model: str, dimensions: int, api_key: str = ""):
        from langchain_google_genai import GoogleGenerativeAIEmbeddings

        kwargs = {"model": model}
        if api_key:
            kwargs["google_api_key"] = api_key
        self._client = GoogleGenerativeAIEmbeddings(**kwargs)
        self.dimensions = dimensions

    def embed(self, text: str) -> List[float]:
        return list(self._client.embed_query(text))

    def embed_many(self, texts: List[str]) -> List[List[float]]:
        return [list(v) for v in self._client.embed_documents(texts)]


def get_embedder(config=None) -> Embedder:
    config = config or settings
    provider = config.EMBEDDING_PROVIDER
    if provider == "hash":
        return HashingEmbedder(config.EMBEDDING_DIMENSIONS)
    if provider == "google":
        return GoogleEmbedder(config.EMBEDDING_MODEL, config.EMBEDDING_DIMENSIONS, config.GOOGLE_API_KEY)
    raise ConfigurationError(f"Unknown embedding provider '{provider}'.")
