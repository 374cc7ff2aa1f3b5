"""
Domain models for the Tours Bridge service.

These models are request-scoped: nothing here is persisted beyond a single
inbound call.
"""

from tours_bridge.domain.models.tour import (
    DEFAULT_CURRENCY,
    UNTITLED_TOUR,
    ListResult,
    SearchRequest,
    Tour,
    TourDetail,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "UNTITLED_TOUR",
    "ListResult",
    "SearchRequest",
    "Tour",
    "TourDetail",
]
