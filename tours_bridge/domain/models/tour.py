from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_CURRENCY = "USD"
UNTITLED_TOUR = "Untitled tour"

TourId = Union[int, str]


class CamelModel(BaseModel):
    """Base for models exposed to the frontend with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Tour(CamelModel):
    """Canonical, card-friendly representation of one bookable activity."""

    id: Optional[TourId] = None
    title: str = UNTITLED_TOUR
    subtitle: Optional[str] = None
    slug: Optional[str] = None
    cover: Optional[str] = None
    rating: Optional[float] = None
    rating_count: Optional[int] = None
    from_price: Optional[float] = None
    currency: str = Field(default=DEFAULT_CURRENCY, min_length=1)
    duration: Optional[str] = None
    url: Optional[str] = None

    def has_id(self) -> bool:
        return self.id is not None and self.id != ""


class TourDetail(Tour):
    """A normalized tour plus the untouched provider payload it came from."""

    raw: Any = None


class ListResult(CamelModel):
    """One page of normalized tours. ``total`` is a hint when the provider omits it."""

    page: int
    page_size: int
    total: int
    items: List[Tour] = Field(default_factory=list)


def _coerce_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class SearchRequest(CamelModel):
    """Inbound list/search parameters after coercion and clamping."""

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1)
    query: Optional[str] = None
    vendor_id: Optional[str] = None

    @classmethod
    def from_params(
        cls,
        page: Any = None,
        page_size: Any = None,
        query: Any = None,
        vendor_id: Optional[str] = None,
        default_page_size: int = 20,
        max_page_size: int = 50,
    ) -> "SearchRequest":
        """
        Build a request from loosely-typed query values.

        Out of range or unparsable values are corrected rather than rejected:
        page falls back to 1, page size to the default, and page size is
        clamped to ``[1, max_page_size]``.
        """
        parsed_page = _coerce_int(page)
        if parsed_page is None or parsed_page < 1:
            parsed_page = 1

        parsed_size = _coerce_int(page_size)
        if parsed_size is None:
            parsed_size = default_page_size
        parsed_size = max(1, min(parsed_size, max_page_size))

        cleaned_query = query.strip() if isinstance(query, str) else None

        return cls(
            page=parsed_page,
            page_size=parsed_size,
            query=cleaned_query or None,
            vendor_id=vendor_id or None,
        )
