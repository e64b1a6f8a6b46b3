"""List state for the hotel table: search text, page cursor and last result.

The state moves only through ``reduce``, a pure transition function that
returns the new state plus the fetch (if any) the transition calls for.
``ListStateController`` runs those fetches against the API and feeds the
responses back in as events.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from hotel_directory.client.api_client import HotelGateway
from hotel_directory.client.debounce import Debouncer
from hotel_directory.domain.errors import HotelError
from hotel_directory.domain.hotels import EMPTY_PAGE, HotelPage
from hotel_directory.services.filters import PAGE_SIZE, total_pages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListQuery:
    """Parameters of one list request."""

    search_text: str
    page: int


@dataclass(frozen=True)
class ListState:
    """Snapshot of the hotel table state."""

    search_text: str = ""
    page: int = 1
    last_result: HotelPage = EMPTY_PAGE
    error: str | None = None
    loading: bool = False
    page_size: int = PAGE_SIZE
    request_seq: int = 0

    @property
    def query(self) -> ListQuery:
        """Return the parameters a fetch would use right now."""
        return ListQuery(search_text=self.search_text, page=self.page)

    @property
    def total_pages(self) -> int:
        """Return the page count for the last result."""
        return total_pages(self.last_result.total_count, self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


@dataclass(frozen=True)
class SearchChanged:
    """The search box text changed."""

    text: str


@dataclass(frozen=True)
class SearchSettled:
    """The search box has been quiet for the debounce window."""

    text: str


@dataclass(frozen=True)
class PageChanged:
    """The user picked a page directly."""

    page: int


@dataclass(frozen=True)
class RefreshRequested:
    """Re-fetch the current parameters."""


@dataclass(frozen=True)
class MutationSucceeded:
    """A create or update was persisted."""

    created: bool


@dataclass(frozen=True)
class FetchResolved:
    """A list request returned a page."""

    query: ListQuery
    result: HotelPage
    seq: int | None = None


@dataclass(frozen=True)
class FetchFailed:
    """A list request failed."""

    query: ListQuery
    message: str
    seq: int | None = None


ListEvent = (
    SearchChanged
    | SearchSettled
    | PageChanged
    | RefreshRequested
    | MutationSucceeded
    | FetchResolved
    | FetchFailed
)


def _fetch(state: ListState) -> tuple[ListState, ListQuery]:
    loading = replace(state, loading=True, request_seq=state.request_seq + 1)
    return loading, loading.query


def _is_stale(state: ListState, query: ListQuery, seq: int | None) -> bool:
    # Responses without a sequence number are matched by parameters only.
    if query != state.query:
        return True
    return seq is not None and seq != state.request_seq


def reduce(  # noqa: PLR0911
    state: ListState, event: ListEvent
) -> tuple[ListState, ListQuery | None]:
    """Apply an event and return the new state and the fetch to issue."""
    if isinstance(event, SearchChanged):
        return replace(state, search_text=event.text), None
    if isinstance(event, SearchSettled):
        if event.text != state.search_text:
            return state, None
        return _fetch(replace(state, page=1))
    if isinstance(event, PageChanged):
        page = max(1, event.page)
        if page == state.page:
            return state, None
        return _fetch(replace(state, page=page))
    if isinstance(event, RefreshRequested):
        return _fetch(state)
    if isinstance(event, MutationSucceeded):
        if event.created and state.page != 1:
            # New hotels sort first, so show the first page.
            return _fetch(replace(state, page=1))
        return _fetch(state)
    if isinstance(event, FetchResolved):
        if _is_stale(state, event.query, event.seq):
            return state, None
        resolved = replace(state, last_result=event.result, error=None, loading=False)
        if resolved.page > resolved.total_pages:
            return _fetch(replace(resolved, page=resolved.total_pages))
        return resolved, None
    if isinstance(event, FetchFailed):
        if _is_stale(state, event.query, event.seq):
            return state, None
        return replace(state, error=event.message, loading=False), None
    raise TypeError(f"Unknown list event: {event!r}")


def replay(
    events: Iterable[ListEvent], state: ListState | None = None
) -> tuple[ListState, list[ListQuery]]:
    """Fold events through ``reduce``, collecting the fetches they request."""
    current = state or ListState()
    fetches: list[ListQuery] = []
    for event in events:
        current, fetch = reduce(current, event)
        if fetch is not None:
            fetches.append(fetch)
    return current, fetches


class ListStateController:
    """Owns the hotel list state and performs the fetches it asks for.

    Must be used from a running event loop. Responses are applied through the
    stale-response guard in ``reduce``, so a late reply for old parameters
    never overwrites newer state.
    """

    def __init__(
        self,
        gateway: HotelGateway,
        *,
        debounce_seconds: float = 0.5,
        page_size: int = PAGE_SIZE,
        on_change: Callable[[ListState], None] | None = None,
    ) -> None:
        self._gateway = gateway
        self._debouncer = Debouncer(debounce_seconds)
        self._state = ListState(page_size=page_size)
        self._on_change = on_change

    @property
    def state(self) -> ListState:
        return self._state

    async def load(self) -> None:
        """Fetch the first page with the current parameters."""
        await self.refresh()

    def set_search_text(self, text: str) -> None:
        """Record new search text and fetch once the input goes quiet."""
        self._transition(SearchChanged(text))
        self._debouncer.schedule(lambda: self.dispatch(SearchSettled(text)))

    async def set_page(self, page: int) -> None:
        """Jump to ``page`` and fetch it immediately."""
        await self.dispatch(PageChanged(page))

    async def next_page(self) -> None:
        if self._state.has_next:
            await self.set_page(self._state.page + 1)

    async def previous_page(self) -> None:
        if self._state.has_previous:
            await self.set_page(self._state.page - 1)

    async def refresh(self) -> None:
        """Re-issue a fetch with the current parameters."""
        await self.dispatch(RefreshRequested())

    async def mutation_succeeded(self, *, created: bool) -> None:
        """Refresh after a successful create or update."""
        await self.dispatch(MutationSucceeded(created=created))

    async def settle(self) -> None:
        """Wait for any debounced search to fire and finish."""
        await self._debouncer.drain()

    def close(self) -> None:
        """Drop any search that has not fired yet."""
        self._debouncer.cancel()

    async def dispatch(self, event: ListEvent) -> None:
        """Apply an event and run the fetch it requests, if any."""
        query = self._transition(event)
        if query is not None:
            await self._fetch(query, self._state.request_seq)

    def _transition(self, event: ListEvent) -> ListQuery | None:
        self._state, query = reduce(self._state, event)
        if self._on_change is not None:
            self._on_change(self._state)
        return query

    async def _fetch(self, query: ListQuery, seq: int) -> None:
        try:
            result = await self._gateway.list_hotels(
                name=query.search_text.strip() or None, page=query.page
            )
        except HotelError as exc:
            logger.warning("Failed to fetch hotels for %s: %s", query, exc)
            await self.dispatch(FetchFailed(query=query, message=str(exc), seq=seq))
            return
        await self.dispatch(FetchResolved(query=query, result=result, seq=seq))
