# -*- coding: utf-8 -*-
"""Registration submissions: sheet rows to admin view with statistics."""

from collections import Counter
from datetime import datetime, timedelta, UTC
from typing import Any

SUBMISSION_STATUSES = ("new", "reviewed", "approved", "rejected")


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp cell. Naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).strip())
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def determine_status(stored: str, timestamp: Any, now: datetime) -> str:
    """Review status of a submission.

    A valid status in the sheet's status column wins. Otherwise a submission
    without a timestamp, or less than a day old, is "new". Older ones and
    ones whose timestamp cannot be read are "reviewed".

    Args:
        stored: The status column cell.
        timestamp: The timestamp cell, or an already parsed datetime.
        now: Reference time.
    """
    stored = (stored or "").strip().lower()
    if stored in SUBMISSION_STATUSES:
        return stored
    if timestamp is None or not str(timestamp).strip():
        return "new"
    submitted_at = timestamp if isinstance(timestamp, datetime) else parse_timestamp(timestamp)
    if submitted_at is not None and now - submitted_at < timedelta(days=1):
        return "new"
    return "reviewed"


def rows_to_submissions(rows: list[list[Any]], now: datetime | None = None) -> list[dict[str, Any]]:
    """Convert Submissions rows to records, newest first.

    Rows without a name or email are dropped. Ids are 1-based sheet row
    positions below the header.
    """
    now = now or datetime.now(UTC)
    submissions = []
    for index, row in enumerate(rows, start=1):
        cells = [str(c) if c is not None else "" for c in row] + [""] * 7
        full_name, email, major, business_name, description, timestamp, status = cells[:7]
        if not full_name.strip() or not email.strip():
            continue

        submitted_at = parse_timestamp(timestamp)
        submissions.append({
            "id": index,
            "fullName": full_name.strip(),
            "email": email.strip().lower(),
            "major": major.strip(),
            "businessName": business_name.strip(),
            "businessDescription": description.strip(),
            "timestamp": timestamp.strip(),
            "status": determine_status(status, timestamp, now),
            "_submitted_at": submitted_at,
        })

    oldest = datetime.min.replace(tzinfo=UTC)
    submissions.sort(key=lambda s: s["_submitted_at"] or oldest, reverse=True)
    return submissions


def paginate(items: list, page: int, limit: int) -> tuple[list, dict[str, int]]:
    """Slice one page. ``page`` is 1-based."""
    start = (page - 1) * limit
    total = len(items)
    return items[start:start + limit], {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": -(-total // limit),
    }


def compute_stats(submissions: list[dict[str, Any]], now: datetime | None = None) -> dict[str, Any]:
    """Counts by status, recent period and major."""
    now = now or datetime.now(UTC)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = today - timedelta(days=7)
    month_start = today.replace(day=1)

    dates = [s["_submitted_at"] for s in submissions if s["_submitted_at"]]
    statuses = Counter(s["status"] for s in submissions)
    majors = Counter(s["major"] or "Unknown" for s in submissions)

    return {
        "total": len(submissions),
        "statusCounts": {status: statuses.get(status, 0) for status in SUBMISSION_STATUSES},
        "timePeriods": {
            "today": sum(1 for d in dates if d >= today),
            "thisWeek": sum(1 for d in dates if d >= week_start),
            "thisMonth": sum(1 for d in dates if d >= month_start),
        },
        "majorDistribution": dict(majors),
        "lastUpdated": now.isoformat(),
    }


def public(submission: dict[str, Any]) -> dict[str, Any]:
    """Drop internal keys before returning a record."""
    return {k: v for k, v in submission.items() if not k.startswith("_")}
