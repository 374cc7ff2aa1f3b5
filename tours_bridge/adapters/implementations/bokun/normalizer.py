"""
Normalization of Bokun activity records into canonical tours.

The provider's record shape drifts between accounts and API versions, so
every canonical field is resolved through an ordered fallback chain: the first
candidate holding a non-empty value wins. The chain order below is part of the
public contract; reordering it changes which field wins when several are
present at once.
"""
import math
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from tours_bridge.adapters.interfaces.normalizer import DataNormalizer
from tours_bridge.core.logging import get_logger
from tours_bridge.domain.models.tour import DEFAULT_CURRENCY, UNTITLED_TOUR, Tour

logger = get_logger(__name__)

RawActivity = Dict[str, Any]

ID_KEYS = ("id", "activityId", "productId", "bokunId")
TITLE_KEYS = ("title", "name", "activityTitle")
SUBTITLE_KEYS = ("subtitle", "excerpt", "shortDescription")
SLUG_KEYS = ("slug", "seoSlug")

COVER_KEYS = ("coverImageUrl", "cover", "coverImage")
MEDIA_COLLECTION_KEYS = ("images", "photos", "media")
MEDIA_URL_KEYS = ("url", "originalUrl")

FEEDBACK_BLOCK_KEYS = ("feedback", "reviewSummary")
FEEDBACK_AVERAGE_KEYS = ("average", "averageRating")
FEEDBACK_COUNT_KEYS = ("count", "total")
FLAT_RATING_KEYS = ("rating", "reviewRating", "averageRating")
FLAT_RATING_COUNT_KEYS = ("reviewCount", "ratingCount", "numberOfReviews")

PRICE_BLOCK_KEYS = ("priceFrom", "fromPrice", "lowestPrice", "price", "pricing")
PRICE_AMOUNT_KEYS = ("amount", "value", "price", "from")
CURRENCY_KEYS = ("currency", "currencyCode")

DURATION_KEYS = ("duration", "durationText", "durationLabel")
DURATION_MINUTES_KEY = "durationMinutes"

URL_KEYS = ("url", "publicUrl", "canonicalUrl")

LIST_CONTAINER_KEYS = ("results", "items")
TOTAL_KEYS = ("totalHits", "total", "totalCount")

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


def is_empty(value: Any) -> bool:
    """None, blank strings and empty collections are empty. Zero is not."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def first_present(source: Any, keys: Sequence[str]) -> Any:
    """Return the value of the first key in ``keys`` holding a non-empty value."""
    if not isinstance(source, Mapping):
        return None
    for key in keys:
        value = source.get(key)
        if not is_empty(value):
            return value
    return None


def as_text(value: Any) -> Optional[str]:
    """
    Read a value as display text.

    Args:
        value: Raw field value

    Returns:
        Optional[str]: Stripped string, a number rendered as text, or None
    """
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return str(value)
        except ValueError:
            # int above the interpreter's digit limit for str()
            return None
    return None


def as_number(value: Any) -> Optional[float]:
    """
    Read a value as a finite float.

    Args:
        value: Raw field value (number or numeric string)

    Returns:
        Optional[float]: The number, or None if unparsable, infinite or too large
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def as_count(value: Any) -> Optional[int]:
    """Read a value as a non-negative whole count, else None."""
    number = as_number(value)
    if number is None or number < 0 or not number.is_integer():
        return None
    return int(number)


def as_currency(value: Any) -> Optional[str]:
    """Read a value as an upper-cased three-letter currency code, else None."""
    if not isinstance(value, str):
        return None
    code = value.strip().upper()
    return code if _CURRENCY_RE.match(code) else None


def _first(source: Mapping, keys: Sequence[str], convert) -> Any:
    """Like first_present, but a candidate only counts if ``convert`` accepts it."""
    for key in keys:
        value = source.get(key)
        if is_empty(value):
            continue
        converted = convert(value)
        if converted is not None:
            return converted
    return None


class ActivityNormalizer(DataNormalizer[RawActivity, Tour]):
    """Maps one raw Bokun activity onto the canonical Tour schema."""

    def __init__(self, url_prefix: str = "/tours"):
        self.url_prefix = "/" + url_prefix.strip("/") if url_prefix.strip("/") else ""

    def normalize(self, raw_data: Any) -> Tour:
        """Map one raw activity onto a Tour. Never raises."""
        raw = raw_data if isinstance(raw_data, Mapping) else {}

        tour_id = self.resolve_id(raw)
        slug = _first(raw, SLUG_KEYS, as_text)
        rating, rating_count = self.resolve_rating(raw)
        from_price, currency = self.resolve_price(raw)

        return Tour(
            id=tour_id,
            title=_first(raw, TITLE_KEYS, as_text) or UNTITLED_TOUR,
            subtitle=_first(raw, SUBTITLE_KEYS, as_text),
            slug=slug,
            cover=self.resolve_cover(raw),
            rating=rating,
            rating_count=rating_count,
            from_price=from_price,
            currency=currency,
            duration=self.resolve_duration(raw),
            url=self.resolve_url(raw, slug, tour_id),
        )

    def resolve_id(self, raw: Mapping) -> Optional[Any]:
        """
        Resolve the tour id through ``ID_KEYS``.

        Args:
            raw: Raw activity record

        Returns:
            Optional[Any]: An int or string id, or None when no alias holds one
        """
        for key in ID_KEYS:
            value = raw.get(key)
            if isinstance(value, bool) or is_empty(value):
                continue
            if isinstance(value, int):
                if as_text(value) is None:
                    continue
                return value
            if isinstance(value, float) and value.is_integer():
                return int(value)
            if isinstance(value, (str, float)):
                return str(value).strip()
        return None

    def resolve_cover(self, raw: Mapping) -> Optional[str]:
        """Explicit cover field, then the first media item's url, then its alternate url."""
        for key in COVER_KEYS:
            value = raw.get(key)
            if isinstance(value, Mapping):
                url = _first(value, MEDIA_URL_KEYS, as_text)
            else:
                url = as_text(value) if isinstance(value, str) else None
            if url:
                return url

        collection = first_present(raw, MEDIA_COLLECTION_KEYS)
        if isinstance(collection, list) and collection:
            first = collection[0]
            if isinstance(first, Mapping):
                return _first(first, MEDIA_URL_KEYS, as_text)
            if isinstance(first, str):
                return as_text(first)
        return None

    def resolve_rating(self, raw: Mapping) -> Tuple[Optional[float], Optional[int]]:
        """Nested feedback block first, then the flat rating and review-count fields."""
        rating = None
        count = None

        for key in FEEDBACK_BLOCK_KEYS:
            block = raw.get(key)
            if not isinstance(block, Mapping):
                continue
            if rating is None:
                rating = _first(block, FEEDBACK_AVERAGE_KEYS, as_number)
            if count is None:
                count = _first(block, FEEDBACK_COUNT_KEYS, as_count)

        if rating is None:
            rating = _first(raw, FLAT_RATING_KEYS, as_number)
        if count is None:
            count = _first(raw, FLAT_RATING_COUNT_KEYS, as_count)

        return rating, count

    def resolve_price(self, raw: Mapping) -> Tuple[Optional[float], str]:
        """
        Resolve the from-price and currency through ``PRICE_BLOCK_KEYS``.

        Args:
            raw: Raw activity record

        Returns:
            Tuple[Optional[float], str]: Lowest advertised price and its currency (USD by default)
        """
        amount = None
        currency = None

        for key in PRICE_BLOCK_KEYS:
            block = raw.get(key)
            if is_empty(block):
                continue
            if isinstance(block, Mapping):
                block_amount = _first(block, PRICE_AMOUNT_KEYS, as_number)
                block_currency = _first(block, CURRENCY_KEYS, as_currency)
            else:
                block_amount = as_number(block)
                block_currency = None

            if amount is None and block_amount is not None:
                amount = block_amount
            if currency is None and block_currency is not None:
                currency = block_currency
            if amount is not None and currency is not None:
                break

        if currency is None:
            currency = _first(raw, CURRENCY_KEYS, as_currency)

        return amount, currency or DEFAULT_CURRENCY

    def resolve_duration(self, raw: Mapping) -> Optional[str]:
        """Text duration fields, then ``durationMinutes`` rendered as minutes."""
        duration = _first(raw, DURATION_KEYS, as_text)
        if duration:
            return duration

        minutes = as_count(raw.get(DURATION_MINUTES_KEY))
        if minutes is not None:
            return f"{minutes} min"
        return None

    def resolve_url(self, raw: Mapping, slug: Optional[str], tour_id: Any) -> Optional[str]:
        """Explicit public url, then a url built from the slug, then from the id."""
        explicit = _first(raw, URL_KEYS, as_text)
        if explicit:
            return explicit
        if slug:
            return f"{self.url_prefix}/{slug}"
        if tour_id is not None and tour_id != "":
            return f"{self.url_prefix}/{tour_id}"
        return None

    def extract_listing(self, payload: Any) -> Tuple[List[RawActivity], int]:
        if isinstance(payload, list):
            container = payload
        elif isinstance(payload, Mapping):
            container = next(
                (payload[key] for key in LIST_CONTAINER_KEYS if isinstance(payload.get(key), list)),
                [],
            )
        else:
            container = []

        records = [record for record in container if isinstance(record, Mapping)]
        if len(records) != len(container):
            logger.warning(f"Skipped {len(container) - len(records)} non-object records in listing")

        total = None
        if isinstance(payload, Mapping):
            total = _first(payload, TOTAL_KEYS, as_count)

        return records, total if total is not None else len(records)


_default_normalizer = ActivityNormalizer()


def normalize_activity(raw: Any) -> Tour:
    """Normalize one raw activity with the default ``/tours`` URL prefix."""
    return _default_normalizer.normalize(raw)
