"""Services for listing hotels."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from hotel_directory.domain.errors import StoreUnavailable
from hotel_directory.domain.hotels import Hotel, HotelPage
from hotel_directory.services.filters import HotelFilter, HotelQuery, compile_query

logger = logging.getLogger(__name__)


class HotelRepository(Protocol):
    """Persistence interface for hotels."""

    def search_hotels(
        self, predicate: HotelFilter, offset: int, limit: int
    ) -> HotelPage:
        """Return matching hotels newest first, with the count of all matches."""

    def create_hotel(self, payload: dict[str, object]) -> Hotel:
        """Insert a hotel and return the stored record."""

    def update_hotel(self, hotel_id: str, payload: dict[str, object]) -> Hotel | None:
        """Update a hotel in place, returning None when it does not exist."""


@dataclass
class HotelQueryService:
    """Application service for paginated hotel listings."""

    repository: HotelRepository

    def list_hotels(self, query: HotelQuery) -> HotelPage:
        """Return one page of hotels matching the compiled query."""
        try:
            return self.repository.search_hotels(
                query.predicate, query.offset, query.limit
            )
        except Exception as exc:
            logger.exception("Failed to list hotels for %s", query)
            raise StoreUnavailable from exc

    def search(self, raw: Mapping[str, object]) -> HotelPage:
        """Compile raw list parameters and return the matching page."""
        return self.list_hotels(compile_query(raw))
