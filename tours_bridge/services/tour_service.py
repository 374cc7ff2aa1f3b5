from typing import Any, Dict
from urllib.parse import quote

from tours_bridge.adapters.interfaces.connector import APIConnector, HttpMethod
from tours_bridge.adapters.interfaces.normalizer import DataNormalizer
from tours_bridge.core.config import Settings
from tours_bridge.core.exceptions import NotFoundError
from tours_bridge.core.logging import get_logger
from tours_bridge.domain.models.tour import ListResult, SearchRequest, Tour, TourDetail

logger = get_logger(__name__)


class TourService:
    """
    Translates inbound list/detail requests into provider calls.

    Each operation issues exactly one upstream call through the connector and
    normalizes the result. UpstreamError from the connector propagates to the
    request boundary untouched.
    """

    def __init__(self, connector: APIConnector, normalizer: DataNormalizer, settings: Settings):
        self.connector = connector
        self.normalizer = normalizer
        self.settings = settings

    def build_search_request(
        self,
        page: Any = None,
        page_size: Any = None,
        query: Any = None,
    ) -> SearchRequest:
        """Coerce raw query values, injecting the configured vendor id."""
        return SearchRequest.from_params(
            page=page,
            page_size=page_size,
            query=query,
            vendor_id=self.settings.BOKUN_VENDOR_ID,
            default_page_size=self.settings.DEFAULT_PAGE_SIZE,
            max_page_size=self.settings.MAX_PAGE_SIZE,
        )

    def build_search_body(self, request: SearchRequest) -> Dict[str, Any]:
        """
        Build the provider search body.

        ``query`` and ``vendorId`` are omitted entirely when unset; the
        provider rejects empty strings and nulls for them.
        """
        body: Dict[str, Any] = {
            "page": request.page,
            "pageSize": request.page_size,
        }
        if request.query:
            body["query"] = request.query
        if request.vendor_id:
            body["vendorId"] = request.vendor_id
        return body

    async def list_tours(self, request: SearchRequest) -> ListResult:
        """Search the provider and normalize one page of tours."""
        body = self.build_search_body(request)
        logger.info(
            f"Searching tours page={request.page} pageSize={request.page_size}",
            extra={"has_query": bool(request.query)}
        )

        payload = await self.connector.request(
            HttpMethod.POST, self.settings.BOKUN_SEARCH_PATH, json=body
        )

        records, total = self.normalizer.extract_listing(payload)
        tours = [self.normalizer.normalize(record) for record in records]

        unidentified = sum(1 for tour in tours if not tour.has_id())
        if unidentified:
            logger.warning(f"{unidentified} upstream record(s) had no resolvable id")
            if self.settings.DROP_UNIDENTIFIED_TOURS:
                tours = [tour for tour in tours if tour.has_id()]

        logger.debug(f"Normalized {len(tours)} tours (upstream total {total})")
        return ListResult(
            page=request.page,
            page_size=request.page_size,
            total=total,
            items=tours,
        )

    async def get_tour(self, tour_id: str) -> TourDetail:
        """Fetch one tour by id and return it normalized, with the raw payload attached."""
        tour_id = (tour_id or "").strip()
        if not tour_id:
            raise NotFoundError("Tour", tour_id)

        logger.info(f"Fetching tour {tour_id}")
        path = self.settings.BOKUN_DETAIL_PATH.format(id=quote(tour_id, safe=""))
        payload = await self.connector.request(HttpMethod.GET, path)

        tour: Tour = self.normalizer.normalize(payload)
        return TourDetail(**tour.model_dump(), raw=payload)
