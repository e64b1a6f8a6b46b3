"""Domain models for hotel listings."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Room:
    """Read-only view of a room attached to a hotel."""

    id: str
    hotel_id: str
    attributes: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class Hotel:
    """Represents a persisted hotel record."""

    id: str
    name: str
    description: str | None
    location: str
    address: str
    rating: float
    price_per_night: float
    created_at: datetime
    photos: tuple[str, ...] = ()
    rooms: tuple[Room, ...] = ()


@dataclass(frozen=True)
class HotelPage:
    """A window of matching hotels plus the count of all matches."""

    records: list[Hotel]
    total_count: int


EMPTY_PAGE = HotelPage(records=[], total_count=0)
