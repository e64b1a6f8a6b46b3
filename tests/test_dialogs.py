"""Tests for the create and edit dialog lifecycle."""

import asyncio

import pytest

from hotel_directory.client.dialogs import (
    Closed,
    CreateOpen,
    DialogOrchestrator,
    EditOpen,
)
from hotel_directory.client.list_state import ListStateController
from hotel_directory.domain.errors import InvalidInput, StoreUnavailable
from tests.conftest import InProcessHotelGateway, make_hotel

VALID = {
    "name": "The Grand",
    "location": "Paris",
    "address": "12 Rue de Rivoli",
    "pricePerNight": 150,
}


def _orchestrator(
    gateway: InProcessHotelGateway,
) -> tuple[DialogOrchestrator, ListStateController]:
    controller = ListStateController(gateway)
    return DialogOrchestrator(gateway, controller), controller


def test_open_and_cancel() -> None:
    dialogs, _ = _orchestrator(InProcessHotelGateway())
    hotel = make_hotel(1)

    dialogs.open_create()
    assert dialogs.state == CreateOpen()
    assert dialogs.initial_values()["name"] == ""

    dialogs.open_edit(hotel)
    assert dialogs.state == EditOpen(hotel)
    assert dialogs.selected_hotel == hotel
    assert dialogs.initial_values()["name"] == "Hotel 01"

    dialogs.cancel()
    assert dialogs.state == Closed()
    assert dialogs.selected_hotel is None


def test_edit_requires_a_hotel() -> None:
    dialogs, _ = _orchestrator(InProcessHotelGateway())

    with pytest.raises(ValueError):
        dialogs.open_edit(None)


def test_submit_without_open_dialog_fails() -> None:
    dialogs, _ = _orchestrator(InProcessHotelGateway())

    with pytest.raises(RuntimeError):
        asyncio.run(dialogs.submit(VALID))


def test_create_on_page_two_returns_to_first_page() -> None:
    gateway = InProcessHotelGateway()
    gateway.repository.seed(15)

    async def scenario() -> None:
        dialogs, controller = _orchestrator(gateway)
        await controller.set_page(2)
        dialogs.open_create()
        hotel = await dialogs.submit(VALID)
        assert hotel is not None
        assert dialogs.state == Closed()
        assert controller.state.page == 1
        assert controller.state.last_result.records[0].id == hotel.id

    asyncio.run(scenario())

    assert gateway.list_calls == [(None, 2), (None, 1)]
    assert len(gateway.created) == 1


def test_edit_refreshes_current_page_once() -> None:
    gateway = InProcessHotelGateway()
    gateway.repository.seed(15)
    hotel = gateway.repository.hotels["hotel-03"]

    async def scenario() -> None:
        dialogs, controller = _orchestrator(gateway)
        await controller.set_page(2)
        dialogs.open_edit(hotel)
        await dialogs.submit({**dialogs.initial_values(), "name": "Renamed"})
        assert dialogs.state == Closed()
        assert controller.state.page == 2

    asyncio.run(scenario())

    assert gateway.list_calls == [(None, 2), (None, 2)]
    hotel_id, fields = gateway.updated[0]
    assert hotel_id == "hotel-03"
    assert fields["name"] == "Renamed"
    assert gateway.repository.hotels["hotel-03"].name == "Renamed"


def test_client_validation_blocks_submit() -> None:
    gateway = InProcessHotelGateway()

    async def scenario() -> DialogOrchestrator:
        dialogs, _ = _orchestrator(gateway)
        dialogs.open_create()
        assert await dialogs.submit({**VALID, "address": "abc"}) is None
        return dialogs

    dialogs = asyncio.run(scenario())

    assert gateway.created == []
    assert dialogs.state == CreateOpen()
    assert dialogs.field_errors == {
        "address": "Address is required and must be at least 5 characters."
    }


def test_failed_submit_keeps_dialog_open_without_refresh() -> None:
    gateway = InProcessHotelGateway()
    gateway.fail_next = StoreUnavailable()

    async def scenario() -> DialogOrchestrator:
        dialogs, _ = _orchestrator(gateway)
        dialogs.open_create()
        assert await dialogs.submit(VALID) is None
        return dialogs

    dialogs = asyncio.run(scenario())

    assert dialogs.state == CreateOpen()
    assert dialogs.error == "Something went wrong!"
    assert gateway.list_calls == []


def test_server_field_errors_are_shown_on_the_form() -> None:
    gateway = InProcessHotelGateway()
    gateway.fail_next = InvalidInput(["pricePerNight"])

    async def scenario() -> DialogOrchestrator:
        dialogs, _ = _orchestrator(gateway)
        dialogs.open_create()
        await dialogs.submit(VALID)
        return dialogs

    dialogs = asyncio.run(scenario())

    assert dialogs.field_errors == {
        "price_per_night": "Price must be a positive number."
    }


class GatedGateway(InProcessHotelGateway):
    """Holds create requests until the test opens the gate."""

    gate: asyncio.Event | None = None

    async def create_hotel(self, fields):  # type: ignore[no-untyped-def]
        if self.gate is not None:
            await self.gate.wait()
        return await super().create_hotel(fields)


def test_double_submit_is_ignored_while_in_flight() -> None:
    gateway = GatedGateway()

    async def scenario() -> None:
        gateway.gate = asyncio.Event()
        dialogs, _ = _orchestrator(gateway)
        dialogs.open_create()
        first = asyncio.create_task(dialogs.submit(VALID))
        await asyncio.sleep(0)
        assert dialogs.is_submitting
        second = await dialogs.submit(VALID)
        assert second is None
        gateway.gate.set()
        assert await first is not None
        assert not dialogs.is_submitting

    asyncio.run(scenario())

    assert len(gateway.created) == 1
