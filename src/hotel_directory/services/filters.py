"""Compile loosely-typed search parameters into a predicate and page window."""

import math
from collections.abc import Mapping
from dataclasses import dataclass

from hotel_directory.domain.hotels import Hotel

PAGE_SIZE = 10


def parse_optional_number(value: object) -> float | None:
    """Parse a query value into a finite number, or None when absent."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_page(value: object) -> int:
    """Return a 1-based page number; absent or non-positive values become 1."""
    number = parse_optional_number(value)
    if number is None:
        return 1
    page = int(number)
    return page if page >= 1 else 1


def total_pages(total_count: int, limit: int = PAGE_SIZE) -> int:
    """Return the number of pages needed to show all matches (at least one)."""
    return max(1, math.ceil(total_count / limit))


@dataclass(frozen=True)
class HotelFilter:
    """Predicate over hotel fields; every present constraint must hold."""

    name_contains: str | None = None
    price_min: float | None = None
    price_max: float | None = None
    rating_min: float | None = None

    @property
    def is_empty(self) -> bool:
        """Return True when the filter matches every hotel."""
        return (
            self.name_contains is None
            and self.price_min is None
            and self.price_max is None
            and self.rating_min is None
        )

    def matches(self, hotel: Hotel) -> bool:
        """Evaluate the predicate against a single hotel."""
        if (
            self.name_contains is not None
            and self.name_contains.lower() not in hotel.name.lower()
        ):
            return False
        if self.price_min is not None and hotel.price_per_night < self.price_min:
            return False
        if self.price_max is not None and hotel.price_per_night > self.price_max:
            return False
        return self.rating_min is None or hotel.rating >= self.rating_min


@dataclass(frozen=True)
class HotelQuery:
    """A compiled predicate together with its page window."""

    predicate: HotelFilter
    offset: int = 0
    limit: int = PAGE_SIZE

    @property
    def page(self) -> int:
        """Return the 1-based page this window corresponds to."""
        return self.offset // self.limit + 1


def compile_query(raw: Mapping[str, object]) -> HotelQuery:
    """Compile raw list parameters into a hotel query.

    Recognised keys are ``name``, ``priceMin``, ``priceMax``, ``rating`` and
    ``page``. Numbers that do not parse to a finite value are ignored.
    """
    name = raw.get("name")
    name_contains = name.strip() if isinstance(name, str) else None
    predicate = HotelFilter(
        name_contains=name_contains or None,
        price_min=parse_optional_number(raw.get("priceMin")),
        price_max=parse_optional_number(raw.get("priceMax")),
        rating_min=parse_optional_number(raw.get("rating")),
    )
    page = parse_page(raw.get("page"))
    return HotelQuery(
        predicate=predicate,
        offset=(page - 1) * PAGE_SIZE,
        limit=PAGE_SIZE,
    )
