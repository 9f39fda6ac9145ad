"""Core data models for the Gig Status Engine."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

from gig_engine.dates import parse_deadline, parse_posted_date


class StatusPriority(IntEnum):
    """Sort rank of a computed status.  Higher values are shown first."""

    OPEN = 1
    NEW = 2
    URGENT = 3
    CLOSING_SOON = 4
    CLOSED = 5


class GigStatus(str, Enum):
    """Computed urgency category of a gig at a given instant.

    NEW
        Posted within the "new" window and not otherwise flagged.
    URGENT
        Author-flagged as urgent with more than the closing-soon window left.
    CLOSING SOON
        Deadline is today or within the next few days.
    CLOSED
        Deadline has passed.
    OPEN
        Fallback state.
    """

    NEW = "NEW"
    URGENT = "URGENT"
    CLOSING_SOON = "CLOSING SOON"
    CLOSED = "CLOSED"
    OPEN = "OPEN"

    @property
    def priority(self) -> StatusPriority:
        return StatusPriority[self.name]

    @classmethod
    def by_priority(cls) -> list["GigStatus"]:
        """Return every status, highest priority first."""
        return sorted(cls, key=lambda s: s.priority, reverse=True)


class Gig(BaseModel):
    """Immutable representation of a single gig listing.

    Fields
    ------
    id:           Identifier supplied by the data source.
    title:        Display title.
    description:  Free-text description (optional).
    type:         Gig category label (e.g. "Delivery").
    status:       Author-supplied status label, compared case-insensitively.
    location:     Location string, matched exactly by filters.
    pay:          Pay as a display string (e.g. "R150").
    posted_by:    Author name.
    posted_date:  Posting timestamp, parsed from e.g. "23rd September 2025, 07:15".
    deadline:     Deadline date parsed from "YYYY-MM-DD"; None when absent.

    Both camelCase (``postedDate``) and snake_case keys are accepted.
    Unparseable dates become ``None`` unless validation runs with
    ``context={"strict_dates": True}``.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: Union[int, str]
    title: str = ""
    description: str = ""
    type: str = ""
    status: str = ""
    location: str = ""
    pay: str = ""
    posted_by: str = ""
    posted_date: Optional[datetime] = None
    deadline: Optional[date] = None

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("title", "status", "location", "posted_by", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("posted_date", mode="before")
    @classmethod
    def _parse_posted(cls, v, info: ValidationInfo):
        if isinstance(v, str):
            return parse_posted_date(v, strict=_strict(info))
        return v

    @field_validator("deadline", mode="before")
    @classmethod
    def _parse_deadline(cls, v, info: ValidationInfo):
        if isinstance(v, str):
            return parse_deadline(v, strict=_strict(info))
        return v


def _strict(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get("strict_dates"))
