"""Pydantic models for the hotel API payloads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from hotel_directory.domain.hotels import Hotel, HotelPage, Room


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RoomOut(_CamelModel):
    """Room payload embedded in a hotel."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    id: str
    hotel_id: str

    @classmethod
    def from_domain(cls, room: Room) -> "RoomOut":
        """Build the payload, keeping opaque room columns in camelCase."""
        extra = {to_camel(key): value for key, value in room.attributes.items()}
        return cls(id=room.id, hotel_id=room.hotel_id, **extra)


class HotelOut(_CamelModel):
    """Hotel payload."""

    id: str
    name: str
    description: str | None = None
    location: str
    address: str
    rating: float
    price_per_night: float
    photos: list[str] = []
    rooms: list[RoomOut] = []
    created_at: datetime

    @classmethod
    def from_domain(cls, hotel: Hotel) -> "HotelOut":
        """Build the payload from a domain hotel."""
        return cls(
            id=hotel.id,
            name=hotel.name,
            description=hotel.description,
            location=hotel.location,
            address=hotel.address,
            rating=hotel.rating,
            price_per_night=hotel.price_per_night,
            photos=list(hotel.photos),
            rooms=[RoomOut.from_domain(room) for room in hotel.rooms],
            created_at=hotel.created_at,
        )


class HotelListOut(_CamelModel):
    """Paginated hotel listing payload."""

    hotels: list[HotelOut]
    total_count: int

    @classmethod
    def from_domain(cls, page: HotelPage) -> "HotelListOut":
        """Build the payload from a page of hotels."""
        return cls(
            hotels=[HotelOut.from_domain(hotel) for hotel in page.records],
            total_count=page.total_count,
        )


class ErrorOut(BaseModel):
    """Error payload returned for failed requests."""

    error: str
    code: str
    fields: list[str] | None = None
