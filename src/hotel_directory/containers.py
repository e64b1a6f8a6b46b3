"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from hotel_directory.adapters.supabase_hotel_repository import SupabaseHotelRepository
from hotel_directory.client.api_client import HotelApiClient, HotelGateway
from hotel_directory.client.dialogs import DialogOrchestrator
from hotel_directory.client.list_state import ListStateController
from hotel_directory.config import ClientSettings, Settings
from hotel_directory.services.listing import HotelQueryService
from hotel_directory.services.mutations import HotelMutationService


@dataclass
class AppContainer:
    """Holds server-side dependencies."""

    settings: Settings
    hotel_query_service: HotelQueryService
    hotel_mutation_service: HotelMutationService


@dataclass
class ClientContainer:
    """Holds the hotel table client and its collaborators."""

    settings: ClientSettings
    gateway: HotelGateway
    list_controller: ListStateController
    dialogs: DialogOrchestrator
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default server container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    hotel_repository = SupabaseHotelRepository(
        supabase_client, table_name=resolved_settings.hotels_table
    )
    return AppContainer(
        settings=resolved_settings,
        hotel_query_service=HotelQueryService(hotel_repository),
        hotel_mutation_service=HotelMutationService(hotel_repository),
    )


def build_client(settings: ClientSettings | None = None) -> ClientContainer:
    """Create the default client container."""
    resolved_settings = settings or ClientSettings()
    api_client = HotelApiClient.create(
        base_url=resolved_settings.api_base_url,
        admin_token=resolved_settings.admin_token,
        timeout=resolved_settings.request_timeout_seconds,
    )
    list_controller = ListStateController(
        api_client, debounce_seconds=resolved_settings.search_debounce_seconds
    )
    dialogs = DialogOrchestrator(api_client, list_controller)

    async def close_resources() -> None:
        list_controller.close()
        await api_client.close()

    return ClientContainer(
        settings=resolved_settings,
        gateway=api_client,
        list_controller=list_controller,
        dialogs=dialogs,
        close_resources=close_resources,
    )
