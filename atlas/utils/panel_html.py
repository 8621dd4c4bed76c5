"""HTML fragments for the info panel."""

import html
from decimal import ROUND_HALF_UP, Decimal

from atlas.core.config import THOUSANDS_SEPARATOR
from atlas.models.details import EntityDetails


def format_size(size: float, thousands_sep: str = THOUSANDS_SEPARATOR) -> str:
    """Format an area with thousands grouping and no fractional digits.

    Ties round away from zero (7500.5 -> "7,501").

    Args:
        size: Area value
        thousands_sep: Grouping separator for the display locale

    Returns:
        Formatted string, e.g. "7,500" for 7500.4
    """
    rounded = Decimal(str(size)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    grouped = f"{int(rounded):,}"
    if thousands_sep != ",":
        grouped = grouped.replace(",", thousands_sep)
    return grouped


def title_html(name: str) -> str:
    return f"<h1>{html.escape(name)}</h1>"


def size_html(size: float, thousands_sep: str = THOUSANDS_SEPARATOR) -> str:
    return f"<div>Size: {format_size(size, thousands_sep)} km^2 (estimate)</div>"


def castles_html(count: int) -> str:
    return f"<div>Castles: {int(count)}</div>"


def summary_html(details: EntityDetails) -> str:
    """Build the summary block with a "Read More" link.

    The link opens in a new browsing context and gets no reference back to
    the panel (noopener, noreferrer).
    """
    url = html.escape(details.url, quote=True)
    return (
        f"<div>{html.escape(details.summary_text)}  "
        f'<a href="{url}" target="_blank" rel="noopener noreferrer">Read More...</a></div>'
    )
