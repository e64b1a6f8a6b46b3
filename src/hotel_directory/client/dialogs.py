"""Create and edit dialog lifecycle for the hotel table."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from hotel_directory.client.api_client import HotelGateway
from hotel_directory.client.forms import (
    FIELD_MESSAGES,
    HotelForm,
    field_name,
    form_defaults,
    validate_form,
)
from hotel_directory.client.list_state import ListStateController
from hotel_directory.domain.errors import HotelError, InvalidInput
from hotel_directory.domain.hotels import Hotel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Closed:
    """No dialog is open."""


@dataclass(frozen=True)
class CreateOpen:
    """The add-hotel dialog is open."""


@dataclass(frozen=True)
class EditOpen:
    """The edit dialog is open for ``hotel``."""

    hotel: Hotel


DialogState = Closed | CreateOpen | EditOpen


def _dialog_key(state: DialogState) -> str | None:
    if isinstance(state, CreateOpen):
        return "create"
    if isinstance(state, EditOpen):
        return f"edit:{state.hotel.id}"
    return None


class DialogOrchestrator:
    """Opens, submits and closes the hotel dialogs.

    Submissions are serialized per dialog: while one is in flight a second
    submit of the same dialog is ignored. A successful mutation closes the
    dialog and refreshes the list exactly once; a failed one leaves the
    dialog open with its errors so the user can retry.
    """

    def __init__(
        self, gateway: HotelGateway, list_controller: ListStateController
    ) -> None:
        self._gateway = gateway
        self._list = list_controller
        self._state: DialogState = Closed()
        self._in_flight: set[str] = set()
        self.error: str | None = None
        self.field_errors: dict[str, str] = {}

    @property
    def state(self) -> DialogState:
        return self._state

    @property
    def selected_hotel(self) -> Hotel | None:
        return self._state.hotel if isinstance(self._state, EditOpen) else None

    @property
    def is_submitting(self) -> bool:
        """Return True when the open dialog's submit control is disabled."""
        key = _dialog_key(self._state)
        return key is not None and key in self._in_flight

    def open_create(self) -> None:
        self._show(CreateOpen())

    def open_edit(self, hotel: Hotel | None) -> None:
        """Open the edit dialog seeded from ``hotel``."""
        if hotel is None:
            raise ValueError("The edit dialog needs a hotel to edit.")
        self._show(EditOpen(hotel))

    def cancel(self) -> None:
        self._show(Closed())

    def initial_values(self) -> dict[str, object]:
        """Return the values the open dialog's form starts with."""
        return form_defaults(self.selected_hotel)

    async def submit(self, values: Mapping[str, object]) -> Hotel | None:
        """Validate and submit the open dialog's form.

        Returns the persisted hotel, or None when the submission was ignored
        or failed.
        """
        state = self._state
        key = _dialog_key(state)
        if key is None:
            raise RuntimeError("No hotel dialog is open.")
        if key in self._in_flight:
            return None
        form, errors = validate_form(values)
        self.error = None
        self.field_errors = errors
        if form is None:
            return None

        self._in_flight.add(key)
        try:
            hotel = await self._persist(state, form)
        except HotelError as exc:
            logger.warning("Hotel %s submission failed: %s", key, exc)
            if self._state == state:
                self.error = str(exc)
                if isinstance(exc, InvalidInput):
                    self.field_errors = _server_field_errors(exc)
            return None
        finally:
            self._in_flight.discard(key)

        if self._state == state:
            self._show(Closed())
        await self._list.mutation_succeeded(created=isinstance(state, CreateOpen))
        return hotel

    async def _persist(self, state: DialogState, form: HotelForm) -> Hotel:
        payload = form.to_payload()
        if isinstance(state, EditOpen):
            payload["photos"] = list(state.hotel.photos)
            return await self._gateway.update_hotel(state.hotel.id, payload)
        return await self._gateway.create_hotel(payload)

    def _show(self, state: DialogState) -> None:
        self._state = state
        self.error = None
        self.field_errors = {}


def _server_field_errors(exc: InvalidInput) -> dict[str, str]:
    errors: dict[str, str] = {}
    for field in exc.fields:
        name = field_name(field)
        errors[name] = FIELD_MESSAGES.get(name, str(exc))
    return errors
