"""HTTP client for the hotel directory API."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

import httpx

from hotel_directory.domain.errors import (
    HotelError,
    InvalidInput,
    MissingIdentifier,
    NotFound,
    StoreUnavailable,
)
from hotel_directory.domain.hotels import Hotel, HotelPage, Room


class HotelGateway(Protocol):
    """Interface for listing and mutating hotels from the client."""

    async def list_hotels(  # noqa: PLR0913
        self,
        name: str | None = None,
        price_min: float | None = None,
        price_max: float | None = None,
        rating: float | None = None,
        page: int = 1,
    ) -> HotelPage:
        """Fetch one page of hotels matching the filters."""

    async def create_hotel(self, fields: dict[str, object]) -> Hotel:
        """Create a hotel and return the stored record."""

    async def update_hotel(self, hotel_id: str, fields: dict[str, object]) -> Hotel:
        """Update a hotel and return the stored record."""


@dataclass
class HotelApiClient(HotelGateway):
    """HTTPX-backed hotel API client."""

    base_url: str
    admin_token: str
    http_client: httpx.AsyncClient
    timeout: float = 15.0

    @classmethod
    def create(
        cls, base_url: str, admin_token: str, timeout: float = 15.0
    ) -> "HotelApiClient":
        """Create a hotel API client with a managed httpx session."""
        return cls(
            base_url=base_url,
            admin_token=admin_token,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def list_hotels(  # noqa: PLR0913
        self,
        name: str | None = None,
        price_min: float | None = None,
        price_max: float | None = None,
        rating: float | None = None,
        page: int = 1,
    ) -> HotelPage:
        """Fetch one page of hotels matching the filters."""
        params: dict[str, object] = {"page": page}
        if name:
            params["name"] = name
        if price_min is not None:
            params["priceMin"] = price_min
        if price_max is not None:
            params["priceMax"] = price_max
        if rating is not None:
            params["rating"] = rating
        data = await self._request("GET", params=params)
        try:
            return HotelPage(
                records=[parse_hotel(item) for item in data.get("hotels", [])],
                total_count=int(data.get("totalCount", 0)),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise StoreUnavailable(f"Malformed hotel list: {exc!r}") from exc

    async def create_hotel(self, fields: dict[str, object]) -> Hotel:
        """Create a hotel via POST."""
        return _parse_stored_hotel(await self._request("POST", json=fields))

    async def update_hotel(self, hotel_id: str, fields: dict[str, object]) -> Hotel:
        """Update a hotel via PUT."""
        data = await self._request("PUT", json={**fields, "id": hotel_id})
        return _parse_stored_hotel(data)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        params: dict[str, object] | None = None,
        json: dict[str, object] | None = None,
    ) -> dict[str, object]:
        url = f"{self.base_url.rstrip('/')}/api/hotels"
        try:
            response = await self.http_client.request(
                method,
                url,
                params=params,
                json=json,
                headers={"X-Admin-Token": self.admin_token},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            raise StoreUnavailable(f"Hotel API unreachable: {exc}") from exc
        if response.is_error:
            raise _error_from_response(response)
        try:
            payload = response.json()
        except ValueError as exc:
            raise StoreUnavailable(f"Hotel API returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise StoreUnavailable("Hotel API returned an unexpected payload")
        return payload


def _error_from_response(response: httpx.Response) -> HotelError:
    """Map an error response onto the domain error taxonomy."""
    try:
        payload = response.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}
    code = payload.get("code")
    message = payload.get("error")
    if code == InvalidInput.code:
        return InvalidInput(payload.get("fields") or [], message)
    if code == MissingIdentifier.code:
        return MissingIdentifier(message or "Hotel id is required.")
    if code == NotFound.code or response.status_code == httpx.codes.NOT_FOUND:
        return NotFound(message=message or "Hotel was not found.")
    if response.status_code < httpx.codes.INTERNAL_SERVER_ERROR:
        return HotelError(message or f"Request rejected ({response.status_code})")
    return StoreUnavailable(message) if message else StoreUnavailable()


def _parse_stored_hotel(data: dict[str, object]) -> Hotel:
    try:
        return parse_hotel(data)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise StoreUnavailable(f"Malformed hotel payload: {exc!r}") from exc


def parse_hotel(data: dict[str, object]) -> Hotel:
    """Parse a camelCase hotel payload into a domain model."""
    created_raw = data.get("createdAt")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else datetime.now(tz=UTC)
    )
    rooms = []
    for room in data.get("rooms") or []:
        attributes = {
            key: value for key, value in room.items() if key not in {"id", "hotelId"}
        }
        rooms.append(
            Room(
                id=str(room["id"]),
                hotel_id=str(room.get("hotelId", "")),
                attributes=attributes,
            )
        )
    return Hotel(
        id=str(data["id"]),
        name=str(data.get("name", "")),
        description=data.get("description"),
        location=str(data.get("location", "")),
        address=str(data.get("address", "")),
        rating=float(data.get("rating") or 0.0),
        price_per_night=float(data.get("pricePerNight") or 0.0),
        created_at=created_at,
        photos=tuple(str(photo) for photo in data.get("photos") or []),
        rooms=tuple(rooms),
    )
