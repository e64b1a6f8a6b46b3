"""Client-side validation for the hotel create and edit forms."""

import math
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from hotel_directory.domain.hotels import Hotel

FIELD_MESSAGES = {
    "name": "Name must be at least 2 characters.",
    "location": "Location is required.",
    "address": "Address is required and must be at least 5 characters.",
    "rating": "Rating must be between 0 and 5.",
    "price_per_night": "Price must be a positive number.",
}


class HotelForm(BaseModel):
    """Values submitted from the hotel dialogs."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(min_length=2)
    description: str | None = None
    location: str = Field(min_length=2)
    address: str = Field(min_length=5)
    rating: float = Field(default=0.0, ge=0, le=5, allow_inf_nan=False)
    price_per_night: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("rating", mode="before")
    @classmethod
    def _blank_rating_is_zero(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0.0
        return value

    def to_payload(self) -> dict[str, object]:
        """Return the camelCase request body for the API."""
        return {
            "name": self.name,
            "description": self.description or "",
            "location": self.location,
            "address": self.address,
            "rating": self.rating or 0,
            "pricePerNight": self.price_per_night,
        }


def validate_form(
    values: Mapping[str, object],
) -> tuple[HotelForm | None, dict[str, str]]:
    """Validate form values, returning the form or a field -> message map."""
    try:
        return HotelForm.model_validate(dict(values)), {}
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "form"
            field = field_name(field)
            errors.setdefault(field, FIELD_MESSAGES.get(field, error["msg"]))
        return None, errors


def field_name(field: str) -> str:
    """Map a payload key or alias onto its form field name."""
    for name, info in HotelForm.model_fields.items():
        if field in {name, info.alias}:
            return name
    return field


def _finite_or_zero(value: float | None) -> float:
    return value if value is not None and math.isfinite(value) else 0.0


def form_defaults(hotel: Hotel | None = None) -> dict[str, object]:
    """Return initial form values, seeded from ``hotel`` when editing."""
    if hotel is None:
        return {
            "name": "",
            "description": "",
            "location": "",
            "address": "",
            "rating": 0.0,
            "pricePerNight": 0.0,
        }
    return {
        "name": hotel.name,
        "description": hotel.description or "",
        "location": hotel.location,
        "address": hotel.address,
        "rating": _finite_or_zero(hotel.rating),
        "pricePerNight": _finite_or_zero(hotel.price_per_night),
    }
