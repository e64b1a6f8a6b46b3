"""Column descriptors handed to the table renderer."""

from collections.abc import Callable
from dataclasses import dataclass

from hotel_directory.domain.hotels import Hotel

CELL_WIDTH = 40


@dataclass(frozen=True)
class Column:
    """A table column: accessor key, header text and cell formatter."""

    key: str
    header: str
    render: Callable[[Hotel], str]
    can_hide: bool = True


def truncate(text: str, width: int = CELL_WIDTH) -> str:
    """Shorten ``text`` to ``width`` characters, ending with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: width - 1].rstrip() + "…"


def format_price(value: float) -> str:
    """Format a nightly price as US dollars."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_rating(value: float) -> str:
    return f"{value:g}"


HOTEL_COLUMNS: tuple[Column, ...] = (
    Column("name", "Hotel Name", lambda hotel: hotel.name, can_hide=False),
    Column(
        "description",
        "Description",
        lambda hotel: truncate(hotel.description) if hotel.description else "-",
    ),
    Column("location", "Location", lambda hotel: hotel.location),
    Column("address", "Address", lambda hotel: truncate(hotel.address)),
    Column("rating", "Rating", lambda hotel: format_rating(hotel.rating)),
    Column(
        "pricePerNight",
        "Price Per Night",
        lambda hotel: format_price(hotel.price_per_night),
    ),
)


def render_row(
    hotel: Hotel, hidden: frozenset[str] = frozenset()
) -> dict[str, str]:
    """Return the display strings for a hotel's visible columns."""
    return {
        column.key: column.render(hotel)
        for column in HOTEL_COLUMNS
        if not (column.can_hide and column.key in hidden)
    }
