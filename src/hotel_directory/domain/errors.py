"""Error taxonomy shared by the services, the API and the client."""

GENERIC_ERROR_MESSAGE = "Something went wrong!"


class HotelError(Exception):
    """Base class for hotel directory failures."""

    code = "error"


class InvalidInput(HotelError):
    """One or more hotel fields violate their constraints."""

    code = "invalid_input"

    def __init__(self, fields: list[str], message: str | None = None) -> None:
        self.fields = list(fields)
        super().__init__(message or f"Invalid hotel fields: {', '.join(self.fields)}")


class MissingIdentifier(HotelError):
    """An update was requested without a hotel id."""

    code = "missing_identifier"

    def __init__(self, message: str = "Hotel id is required.") -> None:
        super().__init__(message)


class NotFound(HotelError):
    """The hotel targeted by an update no longer exists."""

    code = "not_found"

    def __init__(self, hotel_id: str | None = None, message: str | None = None) -> None:
        self.hotel_id = hotel_id
        super().__init__(message or f"Hotel {hotel_id} was not found.")


class StoreUnavailable(HotelError):
    """The backing store could not be reached or failed unexpectedly."""

    code = "store_unavailable"

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE) -> None:
        super().__init__(message)

