from typing import List, Optional
from pydantic import BaseModel, Field

from core.models import ConnectionPath, MergeMode


class QueryRequest(BaseModel):
    query: str
    k: Optional[int] = Field(None, ge=1, description="Hits requested from each domain store.")

class MultiQueryRequest(QueryRequest):
    merge_mode: Optional[MergeMode] = Field(None, description="'per_domain' keeps top-k per domain, 'overall' truncates the fused list.")

class ConnectionRequest(BaseModel):
    concept_a: str
    concept_b: str
    max_hops: Optional[int] = Field(None, ge=1)

class ConnectionResponse(BaseModel):
    found: bool
    hops: int
    rendered: str
    path: ConnectionPath

    @classmethod
    def from_path(cls, path: ConnectionPath) -> "ConnectionResponse":
        return cls(found=not path.is_empty(), hops=path.hops, rendered=path.render(), path=path)

class DomainsResponse(BaseModel):
    domains: List[str]
