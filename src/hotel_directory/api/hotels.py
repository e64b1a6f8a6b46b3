"""Hotel listing and mutation endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import (
    APIRouter,
    Body,
    Depends,
    Header,
    HTTPException,
    Query,
    Request,
    status,
)

from hotel_directory.api.schemas import HotelListOut, HotelOut

if TYPE_CHECKING:
    from hotel_directory.containers import AppContainer

router = APIRouter(prefix="/api/hotels", tags=["hotels"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("", dependencies=[Depends(require_admin)], response_model=HotelListOut)
async def list_hotels(  # noqa: PLR0913
    request: Request,
    name: str | None = None,
    price_min: str | None = Query(default=None, alias="priceMin"),
    price_max: str | None = Query(default=None, alias="priceMax"),
    rating: str | None = None,
    page: str | None = None,
) -> HotelListOut:
    """Return one page of hotels matching the filters, newest first."""
    container: AppContainer = request.app.state.container
    result = container.hotel_query_service.search(
        {
            "name": name,
            "priceMin": price_min,
            "priceMax": price_max,
            "rating": rating,
            "page": page,
        }
    )
    return HotelListOut.from_domain(result)


@router.post(
    "",
    dependencies=[Depends(require_admin)],
    response_model=HotelOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_hotel(
    request: Request, body: dict[str, object] = Body(...)
) -> HotelOut:
    """Create a hotel from the submitted fields."""
    container: AppContainer = request.app.state.container
    hotel = container.hotel_mutation_service.create(body)
    return HotelOut.from_domain(hotel)


@router.put("", dependencies=[Depends(require_admin)], response_model=HotelOut)
async def update_hotel(
    request: Request, body: dict[str, object] = Body(...)
) -> HotelOut:
    """Apply the submitted fields to the hotel named by ``id``."""
    container: AppContainer = request.app.state.container
    hotel = container.hotel_mutation_service.update(body)
    return HotelOut.from_domain(hotel)
