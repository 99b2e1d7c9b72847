"""
Search API Endpoints

Carrier directory search with AI suggestion fallback:
- Filters by transport type, origin and destination
- Verified-only restriction
- Unverified AI suggestions when the store has no match or is unavailable
"""

import time

import structlog
from fastapi import APIRouter, HTTPException, Response

from app.api.dependencies import (
    SearchRateKeyDep,
    SearchServiceDep,
    map_domain_exception_to_http,
)
from app.api.schemas.search_schemas import SearchRequest, SearchResponse
from app.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)
router = APIRouter(tags=["search"])

DURATION_HEADER = "x-duration-ms"


@router.post("/search", response_model=SearchResponse, response_model_exclude_none=True)
async def search_carriers(
    search_request: SearchRequest,
    response: Response,
    search_service: SearchServiceDep,
    rate_key: SearchRateKeyDep,
) -> SearchResponse:
    """
    Search the carrier directory.

    Returns store matches with ``usedAi=false``. When nothing matches, the
    store is unreachable or the query fails, returns ``carriers=[]`` with
    unverified ``suggestions``, ``usedAi=true`` and a ``notice``. Elapsed
    time is reported in the ``x-duration-ms`` header.
    """
    started = time.perf_counter()
    try:
        result = await search_service.search(search_request.to_filter(), rate_key)
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Search request failed", error=str(exc))
        raise HTTPException(status_code=500, detail="Search request could not be completed")

    response.headers[DURATION_HEADER] = str(int((time.perf_counter() - started) * 1000))
    return SearchResponse.from_domain(result)
