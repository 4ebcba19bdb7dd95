# -*- coding: utf-8 -*-
"""Participation interest intake."""

from datetime import datetime, UTC
from zoneinfo import ZoneInfo

INVOLVEMENT_TYPES = ("Entrepreneur", "Mentor", "Volunteer", "Judge/Investor", "Sponsor", "Audience")

EVENT_TIMEZONE = ZoneInfo("America/Chicago")


def central_timestamp(now: datetime | None = None) -> str:
    """Event-local time as ``MM/DD/YYYY, hh:mm:ss AM``."""
    now = now or datetime.now(UTC)
    return now.astimezone(EVENT_TIMEZONE).strftime("%m/%d/%Y, %I:%M:%S %p")

