# /core/vector_store.py

import json
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

import numpy as np

from core.models import VectorRecord


class VectorStore(ABC):
    """
    Nearest-neighbour search over one domain's records.
    `search` returns (id, cosine distance) pairs, best match first.
    """

    @abstractmethod
    def add(self, records: List[VectorRecord]) -> None:
        pass

    @abstractmethod
    def search(self, vector: List[float], k: int) -> List[Tuple[str, float]]:
        pass

    @abstractmethod
    def get_metadata(self, record_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def __contains__(self, record_id: str) -> bool:
        pass

    def close(self):
        pass


def _normalize(vector) -> np.ndarray:
    array = np.asarray(vector, dtype=np.float32)
    norm = np.linalg.norm(array)
    if norm == 0:
        return array
    return array / norm


def _check_batch(records: List[VectorRecord], dimensions: int, existing) -> None:
    seen = set()
    for record in records:
        if len(record.vector) != dimensions:
            raise ValueError(f"Vector dimension {len(record.vector)} does not match expected dimension {dimensions}")
        if record.id in existing or record.id in seen:
            raise ValueError(f"Record '{record.id}' already exists.")
        seen.add(record.id)


class InMemoryVectorStore(VectorStore):
    """Brute-force cosine search held in a numpy matrix."""

    def __init__(self, dimensions: int):
        self.dimensions = dimensions
        self._ids: List[str] = []
        self._metadata: Dict[str, Dict[str, Any]] = {}
        self._matrix = np.zeros((0, dimensions), dtype=np.float32)

    def add(self, records: List[VectorRecord]) -> None:
        _check_batch(records, self.dimensions, self._metadata)
        rows = []
        for record in records:
            rows.append(_normalize(record.vector))
            self._ids.append(record.id)
            self._metadata[record.id] = dict(record.metadata)
        if rows:
            self._matrix = np.vstack([self._matrix, np.vstack(rows)])

    def search(self, vector: List[float], k: int) -> List[Tuple[str, float]]:
        if not self._ids or k <= 0:
            return []
        similarities = self._matrix @ _normalize(vector)
        # Stable sort keeps insertion order among equal scores
        order = np.argsort(-similarities, kind="stable")[:k]
        return [(self._ids[i], float(1.0 - similarities[i])) for i in order]

    def get_metadata(self, record_id: str) -> Dict[str, Any]:
        return dict(self._metadata.get(record_id, {}))

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._metadata


class FaissVectorStore(VectorStore):
    """
    FAISS inner-product index over normalised vectors, so the inner product is
    the cosine similarity and the reported distance is 1 - cosine.
    Ids and metadata live in a JSON sidecar next to the index file.
    """

    INDEX_FILE = "index.faiss"
    SIDECAR_FILE = "records.json"

    def __init__(self, dimensions: int, path: str = None):
        import faiss

        self._faiss = faiss
        self.dimensions = dimensions
        self.path = path
        self.index = faiss.IndexFlatIP(dimensions)
        self._ids: List[str] = []
        self._metadata: Dict[str, Dict[str, Any]] = {}

        if path and os.path.exists(os.path.join(path, self.INDEX_FILE)):
            self._load()

    def add(self, records: List[VectorRecord]) -> None:
        _check_batch(records, self.dimensions, self._metadata)
        vectors = []
        for record in records:
            vectors.append(_normalize(record.vector))
            self._ids.append(record.id)
            self._metadata[record.id] = dict(record.metadata)
        if vectors:
            self.index.add(np.vstack(vectors).astype(np.float32))

    def search(self, vector: List[float], k: int) -> List[Tuple[str, float]]:
        if not self.index.ntotal or k <= 0:
            return []
        query = _normalize(vector).reshape(1, -1)
        scores, indices = self.index.search(query, min(k, self.index.ntotal))
        results = []
        for score, position in zip(scores[0], indices[0]):
            if position < 0:
                continue
            results.append((self._ids[position], float(1.0 - score)))
        return results

    def get_metadata(self, record_id: str) -> Dict[str, Any]:
        return dict(self._metadata.get(record_id, {}))

    def __len__(self) -> int:
        return int(self.index.ntotal)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._metadata

    def save(self):
        if not self.path:
            raise ValueError("FaissVectorStore was created without a path.")
        os.makedirs(self.path, exist_ok=True)
        self._faiss.write_index(self.index, os.path.join(self.path, self.INDEX_FILE))
        with open(os.path.join(self.path, self.SIDECAR_FILE), 'w', encoding='utf-8') as f:
            json.dump({"ids": self._ids, "metadata": self._metadata}, f, indent=2)

    def _load(self):
        self.index = self._faiss.read_index(os.path.join(self.path, self.INDEX_FILE))
        with open(os.path.join(self.path, self.SIDECAR_FILE), 'r', encoding='utf-8') as f:
            sidecar = json.load(f)
        self._ids = sidecar["ids"]
        self._metadata = sidecar["metadata"]
        if len(self._ids) != self.index.ntotal:
            raise ValueError(f"Sidecar in {self.path} lists {len(self._ids)} ids but the index holds {self.index.ntotal}.")
