"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hotel_directory.api.hotels import router as hotels_router
from hotel_directory.api.schemas import ErrorOut
from hotel_directory.app_logging import configure_logging
from hotel_directory.containers import AppContainer
from hotel_directory.domain.errors import (
    GENERIC_ERROR_MESSAGE,
    HotelError,
    InvalidInput,
    MissingIdentifier,
    NotFound,
    StoreUnavailable,
)

_STATUS_BY_ERROR: dict[type[HotelError], int] = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    MissingIdentifier: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    StoreUnavailable: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Hotel Directory")
    app.state.container = container

    app.include_router(hotels_router)

    @app.exception_handler(HotelError)
    async def hotel_error_handler(request: Request, exc: HotelError) -> JSONResponse:
        status_code = _STATUS_BY_ERROR.get(
            type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            message = GENERIC_ERROR_MESSAGE
        else:
            logger.info(
                "Rejected %s %s: %s", request.method, request.url.path, exc
            )
            message = str(exc)
        payload = ErrorOut(
            error=message,
            code=exc.code,
            fields=exc.fields if isinstance(exc, InvalidInput) else None,
        )
        return JSONResponse(
            status_code=status_code, content=payload.model_dump(exclude_none=True)
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return await hotel_error_handler(
            request, InvalidInput([], "Request body must be a JSON object.")
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
