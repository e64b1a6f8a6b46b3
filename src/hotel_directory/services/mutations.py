"""Validated create and update operations for hotels."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from hotel_directory.domain.errors import (
    InvalidInput,
    MissingIdentifier,
    NotFound,
    StoreUnavailable,
)
from hotel_directory.domain.hotels import Hotel
from hotel_directory.services.filters import parse_optional_number
from hotel_directory.services.listing import HotelRepository

logger = logging.getLogger(__name__)

MIN_ADDRESS_LENGTH = 5
MAX_RATING = 5.0


@dataclass(frozen=True)
class HotelFields:
    """Normalized, validated hotel fields ready for persistence.

    ``photos`` is None when the caller did not send the key at all, which
    leaves the stored photos untouched on update.
    """

    name: str
    description: str | None
    location: str
    address: str
    rating: float
    price_per_night: float
    photos: list[object] | None = None

    def to_payload(self, *, default_photos: bool) -> dict[str, object]:
        """Return the store payload using column names."""
        payload: dict[str, object] = {
            "name": self.name,
            "description": self.description,
            "location": self.location,
            "address": self.address,
            "rating": self.rating,
            "price_per_night": self.price_per_night,
        }
        if self.photos is not None:
            payload["photos"] = self.photos
        elif default_photos:
            payload["photos"] = []
        return payload


def _clean_text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_hotel_fields(body: Mapping[str, object]) -> HotelFields:
    """Validate and normalize hotel fields from a request body.

    Raises InvalidInput listing every failing field.
    """
    invalid: list[str] = []

    name = _clean_text(body.get("name"))
    if not name:
        invalid.append("name")
    location = _clean_text(body.get("location"))
    if not location:
        invalid.append("location")
    address = _clean_text(body.get("address"))
    if len(address) < MIN_ADDRESS_LENGTH:
        invalid.append("address")

    price = parse_optional_number(body.get("pricePerNight"))
    if price is None or price < 0:
        invalid.append("pricePerNight")

    rating = parse_optional_number(body.get("rating"))
    if rating is None:
        rating = 0.0
    elif not 0 <= rating <= MAX_RATING:
        invalid.append("rating")

    if invalid:
        raise InvalidInput(invalid)

    photos: list[object] | None = None
    if "photos" in body:
        raw_photos = body["photos"]
        photos = list(raw_photos) if isinstance(raw_photos, list | tuple) else []

    return HotelFields(
        name=name,
        description=_clean_text(body.get("description")) or None,
        location=location,
        address=address,
        rating=rating,
        price_per_night=price,
        photos=photos,
    )


@dataclass
class HotelMutationService:
    """Application service for creating and editing hotels."""

    repository: HotelRepository

    def create(self, body: Mapping[str, object]) -> Hotel:
        """Validate a candidate hotel and persist it with a fresh id."""
        fields = validate_hotel_fields(body)
        try:
            hotel = self.repository.create_hotel(fields.to_payload(default_photos=True))
        except Exception as exc:
            logger.exception("Failed to create hotel %r", fields.name)
            raise StoreUnavailable from exc
        logger.info("Created hotel %s", hotel.id)
        return hotel

    def update(self, body: Mapping[str, object]) -> Hotel:
        """Validate changes and apply them to an existing hotel."""
        raw_id = body.get("id")
        hotel_id = str(raw_id).strip() if raw_id is not None else ""
        if not hotel_id:
            raise MissingIdentifier
        fields = validate_hotel_fields(body)
        try:
            hotel = self.repository.update_hotel(
                hotel_id, fields.to_payload(default_photos=False)
            )
        except Exception as exc:
            logger.exception("Failed to update hotel %s", hotel_id)
            raise StoreUnavailable from exc
        if hotel is None:
            raise NotFound(hotel_id)
        logger.info("Updated hotel %s", hotel.id)
        return hotel
