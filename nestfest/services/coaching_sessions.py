# -*- coding: utf-8 -*-
"""AI coaching sessions stored in the AI_Coaching tab."""

import json
import secrets
import string
import time
from datetime import datetime, UTC
from typing import Any

from nestfest.services.submissions import parse_timestamp

SESSION_TYPE = "AI Coaching Session"

# Column order of the AI_Coaching tab
COACHING_FIELDS = (
    "timestamp",
    "studentName",
    "studentEmail",
    "studentMajor",
    "businessIdea",
    "problemDescription",
    "solutionDescription",
    "fundingNeeds",
    "aiGenerated",
    "generatedContent",
    "sessionType",
    "sessionId",
)

_BASE36 = string.digits + string.ascii_lowercase


def new_session_id(now_ms: int | None = None) -> str:
    """``coach_<epoch ms>_<9 random base36 chars>``."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"coach_{now_ms}_{suffix}"


def build_row(data: dict[str, Any], session_id: str, timestamp: str) -> list[str]:
    """Spreadsheet row for one coaching session."""
    return [
        timestamp,
        data.get("studentName") or "",
        data.get("studentEmail") or "",
        data.get("studentMajor") or "",
        data.get("businessIdea") or "",
        data.get("problemDescription") or "",
        data.get("solutionDescription") or "",
        data.get("fundingNeeds") or "",
        "Yes" if data.get("aiGenerated") else "No",
        json.dumps(data.get("generatedContent") or {}),
        SESSION_TYPE,
        session_id,
    ]


def _parse_content(raw: str) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return {"raw": raw}


def format_timestamp(value: str) -> str:
    """``October 19, 2026 at 3:05 PM`` style, or the raw value if unparseable."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    hour = parsed.hour % 12 or 12
    return f"{parsed:%B} {parsed.day}, {parsed.year} at {hour}:{parsed:%M %p}"


def rows_to_sessions(rows: list[list[Any]]) -> list[dict[str, Any]]:
    """Convert AI_Coaching rows (header row included) to session records."""
    sessions = []
    for row in rows[1:]:
        cells = [str(c) if c is not None else "" for c in row]
        cells += [""] * (len(COACHING_FIELDS) - len(cells))
        sessions.append(dict(zip(COACHING_FIELDS, cells)))
    return sessions


def search_sessions(
    sessions: list[dict[str, Any]],
    session_id: str | None = None,
    email: str | None = None,
    name: str | None = None,
) -> list[dict[str, Any]]:
    """Filter by case-insensitive substring matches, newest first."""
    filters = [("sessionId", session_id), ("studentEmail", email), ("studentName", name)]
    matches = [
        session
        for session in sessions
        if all(not wanted or wanted.lower() in session[field].lower() for field, wanted in filters)
    ]

    oldest = datetime.min.replace(tzinfo=UTC)
    matches.sort(key=lambda s: parse_timestamp(s["timestamp"]) or oldest, reverse=True)

    return [
        {
            **session,
            "generatedContent": _parse_content(session["generatedContent"]),
            "formattedTimestamp": format_timestamp(session["timestamp"]),
        }
        for session in matches
    ]
