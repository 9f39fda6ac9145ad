"""Presentation metadata for computed gig statuses.

The styling policy is a pure function of :class:`GigStatus`.  It emits
semantic tokens (a colour name, a weight, attention flags) rather than
markup, so any front end can map them onto its own classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from gig_engine.models import GigStatus

if TYPE_CHECKING:
    from gig_engine.status import StatusInfo

_STATUS_COLORS: dict[GigStatus, str] = {
    GigStatus.CLOSED: "gray",
    GigStatus.CLOSING_SOON: "orange",
    GigStatus.URGENT: "red",
    GigStatus.NEW: "green",
    GigStatus.OPEN: "blue",
}

# Statuses that should draw the eye (pulse animation in the dashboard)
_ATTENTION_STATUSES: frozenset[GigStatus] = frozenset(
    {GigStatus.URGENT, GigStatus.CLOSING_SOON}
)


@dataclass(frozen=True)
class StatusStyling:
    """Display tokens for a status badge.

    Parameters
    ----------
    color:
        Semantic colour token (``"red"``, ``"orange"`` ...).
    weight:
        Font-weight token for the badge text.
    show_dot:
        Whether to render an indicator dot next to the badge.
    dot_color:
        Colour token for the dot.
    pulse:
        Whether the badge should animate to attract attention.
    """

    color: str
    weight: str = "bold"
    show_dot: bool = False
    dot_color: str = "orange"
    pulse: bool = False


def status_color(status: GigStatus) -> str:
    """Return the colour token for *status*."""
    return _STATUS_COLORS[status]


def get_status_styling(status: Union[GigStatus, "StatusInfo"]) -> StatusStyling:
    """Return the :class:`StatusStyling` for a status or a ``StatusInfo``."""
    if not isinstance(status, GigStatus):
        status = status.status

    is_urgent = status is GigStatus.URGENT
    return StatusStyling(
        color=_STATUS_COLORS[status],
        show_dot=is_urgent,
        dot_color="red" if is_urgent else "orange",
        pulse=status in _ATTENTION_STATUSES,
    )
