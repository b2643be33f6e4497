from fastapi import APIRouter, Depends, HTTPException, Request

from api.schemas import ConnectionRequest, ConnectionResponse, DomainsResponse, MultiQueryRequest, QueryRequest
from core.exceptions import AllDomainsUnavailable, DomainUnavailable, InvalidQuery, UnknownConcept
from core.logger import get_logger
from core.models import RouterDecision, SearchResponse, StatsResponse
from core.orchestrator import KnowledgeOrchestrator

logger = get_logger(__name__)

router = APIRouter(
    tags=["Knowledge Universe"]
)


def get_orchestrator(request: Request) -> KnowledgeOrchestrator:
    """The orchestrator is created once in the app lifespan and shared by every request."""
    return request.app.state.orchestrator


def _to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, InvalidQuery):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, UnknownConcept):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, AllDomainsUnavailable):
        return HTTPException(
            status_code=503,
            detail={"message": str(e), "warnings": [w.model_dump(mode="json") for w in e.warnings]},
        )
    if isinstance(e, DomainUnavailable):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


@router.get("/domains", response_model=DomainsResponse)
def list_domains(orchestrator: KnowledgeOrchestrator = Depends(get_orchestrator)):
    return DomainsResponse(domains=[d.value for d in orchestrator.registry.domains])


@router.get("/domains/stats", response_model=StatsResponse)
async def domain_stats(orchestrator: KnowledgeOrchestrator = Depends(get_orchestrator)):
    """Vector record and graph counts per domain, to verify what ingestion wrote."""
    try:
        return await orchestrator.stats()
    except DomainUnavailable as e:
        raise _to_http_error(e)


@router.post("/route", response_model=RouterDecision)
async def route_query(request: QueryRequest, orchestrator: KnowledgeOrchestrator = Depends(get_orchestrator)):
    """Classifies the query into the best matching domain."""
    try:
        return await orchestrator.route(request.query)
    except InvalidQuery as e:
        raise _to_http_error(e)


@router.post("/search", response_model=SearchResponse)
async def search(request: QueryRequest, orchestrator: KnowledgeOrchestrator = Depends(get_orchestrator)):
    """Routes the query to one domain and returns graph-enriched matches."""
    try:
        return await orchestrator.search(request.query, k=request.k)
    except (InvalidQuery, AllDomainsUnavailable) as e:
        raise _to_http_error(e)


@router.post("/search/multi", response_model=SearchResponse)
async def multi_domain_search(request: MultiQueryRequest, orchestrator: KnowledgeOrchestrator = Depends(get_orchestrator)):
    """Searches every domain at once and fuses the hits into one ranking."""
    try:
        response = await orchestrator.multi_domain_search(request.query, k=request.k, merge_mode=request.merge_mode)
    except (InvalidQuery, AllDomainsUnavailable) as e:
        raise _to_http_error(e)
    if response.warnings:
        logger.warning("Multi-domain search degraded", extra={"failed": [w.domain.value for w in response.warnings]})
    return response


@router.post("/connections", response_model=ConnectionResponse)
async def find_connections(request: ConnectionRequest, orchestrator: KnowledgeOrchestrator = Depends(get_orchestrator)):
    """Finds the shortest relationship path between two concepts, across domains if needed."""
    try:
        path = await orchestrator.find_connections(request.concept_a, request.concept_b, max_hops=request.max_hops)
    except (InvalidQuery, UnknownConcept) as e:
        raise _to_http_error(e)
    return ConnectionResponse.from_path(path)
