"""Supabase implementation for hotel persistence."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from hotel_directory.domain.hotels import Hotel, HotelPage, Room
from hotel_directory.services.filters import HotelFilter
from hotel_directory.services.listing import HotelRepository

_LIST_COLUMNS = "*, rooms(*)"


@dataclass
class SupabaseHotelRepository(HotelRepository):
    """Supabase-backed repository for hotels."""

    client: Client
    table_name: str = "hotels"

    def search_hotels(
        self, predicate: HotelFilter, offset: int, limit: int
    ) -> HotelPage:
        """Return a page of matching hotels and the exact match count.

        Records and count come from the same request so they share one
        predicate.
        """
        query = self.client.table(self.table_name).select(_LIST_COLUMNS, count="exact")
        if predicate.name_contains is not None:
            query = query.ilike("name", f"%{_escape_like(predicate.name_contains)}%")
        if predicate.price_min is not None:
            query = query.gte("price_per_night", predicate.price_min)
        if predicate.price_max is not None:
            query = query.lte("price_per_night", predicate.price_max)
        if predicate.rating_min is not None:
            query = query.gte("rating", predicate.rating_min)
        response = (
            query.order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        records = [_parse_hotel(row) for row in response.data or []]
        total_count = response.count if response.count is not None else len(records)
        return HotelPage(records=records, total_count=total_count)

    def create_hotel(self, payload: dict[str, object]) -> Hotel:
        """Insert a hotel and return the stored row."""
        response = self.client.table(self.table_name).insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create hotel")
        return _parse_hotel(response.data[0])

    def update_hotel(self, hotel_id: str, payload: dict[str, object]) -> Hotel | None:
        """Update a hotel by id, returning None when no row matched."""
        response = (
            self.client.table(self.table_name)
            .update(payload)
            .eq("id", hotel_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_hotel(response.data[0])


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the search is a literal substring match."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_hotel(row: dict[str, object]) -> Hotel:
    """Parse a hotel row into a domain model."""
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else datetime.now(tz=UTC)
    )
    photos = row.get("photos")
    rooms = row.get("rooms")
    return Hotel(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        description=row.get("description"),
        location=str(row.get("location", "")),
        address=str(row.get("address", "")),
        rating=float(row.get("rating") or 0.0),
        price_per_night=float(row.get("price_per_night") or 0.0),
        created_at=created_at,
        photos=tuple(str(photo) for photo in photos)
        if isinstance(photos, list)
        else (),
        rooms=tuple(_parse_room(room) for room in rooms)
        if isinstance(rooms, list)
        else (),
    )


def _parse_room(row: dict[str, object]) -> Room:
    """Parse an embedded room row, keeping the remaining columns opaque."""
    attributes = {
        key: value for key, value in row.items() if key not in {"id", "hotel_id"}
    }
    return Room(
        id=str(row["id"]),
        hotel_id=str(row.get("hotel_id", "")),
        attributes=attributes,
    )
