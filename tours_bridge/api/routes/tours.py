from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from tours_bridge.api.dependencies import get_tour_service
from tours_bridge.domain.models.tour import ListResult, TourDetail
from tours_bridge.services.tour_service import TourService

tours_router = APIRouter()


@tours_router.get(
    "",
    response_model=ListResult,
    response_model_by_alias=True,
    summary="List tours"
)
async def list_tours(
    tour_service: TourService = Depends(get_tour_service),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    limit: Optional[str] = Query(None, description="Legacy alias for pageSize"),
    query: Optional[str] = Query(None),
):
    """
    Gets one page of tours, optionally filtered by a search term.

    Values are taken as strings and coerced by the service so that an
    oversized or malformed page size is clamped instead of rejected.
    """
    request = tour_service.build_search_request(
        page=page,
        page_size=page_size if page_size is not None else limit,
        query=query,
    )
    return await tour_service.list_tours(request)


@tours_router.get(
    "/{tour_id}",
    response_model=TourDetail,
    response_model_by_alias=True,
    summary="Get tour"
)
async def get_tour(
    tour_id: str = Path(...),
    tour_service: TourService = Depends(get_tour_service),
):
    """Gets one tour by id, with the raw provider payload under ``raw``."""
    return await tour_service.get_tour(tour_id)
