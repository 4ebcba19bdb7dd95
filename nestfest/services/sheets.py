# -*- coding: utf-8 -*-
"""Google Sheets storage.

The event spreadsheet is the system's database. Each tab holds one kind of
record; rows are appended and read back by A1 range.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, UTC
from functools import lru_cache
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build

from nestfest.core.config import get_settings
from nestfest.core.errors import UpstreamUnavailableError
from nestfest.core.logging import get_logger

logger = get_logger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

SUBMISSIONS_RANGE = "Submissions!A:F"
SUBMISSIONS_READ_RANGE = "Submissions!A2:G"
PARTICIPANTS_RANGE = "Participants!A:E"
PARTICIPANTS_HEADER_RANGE = "Participants!A1:E1"
COACHING_RANGE = "AI_Coaching!A:L"
AI_USAGE_RANGE = "AI_Usage!A:F"
USERS_RANGE = "Users!A2:G"

PARTICIPANTS_HEADER = ["Timestamp", "Full Name", "Email", "Involvement Type", "Question/Notes"]


class SheetsError(UpstreamUnavailableError):
    """A spreadsheet call failed."""

    code = "SHEETS_ERROR"
    message = "Spreadsheet request failed"


@dataclass
class AdminUser:
    """A row of the Users tab."""

    email: str
    password_hash: str
    role: str = "user"
    status: str = "active"
    invite_token: str = ""
    created_at: str = ""
    name: str = ""

    @classmethod
    def from_row(cls, row: list[Any]) -> "AdminUser":
        cells = [str(c) if c is not None else "" for c in row] + [""] * 7
        return cls(
            email=cells[0].strip(),
            password_hash=cells[1],
            role=cells[2] or "user",
            status=cells[3] or "active",
            invite_token=cells[4],
            created_at=cells[5],
            name=cells[6],
        )

    @property
    def is_active(self) -> bool:
        return self.status == "active"


class SheetsService:
    """Reads and writes the event spreadsheet with a service account."""

    def __init__(self, client=None):
        settings = get_settings()
        self.spreadsheet_id = settings.google_sheet_id
        self._client = client
        self._credentials = None
        self._lock = threading.Lock()
        # httplib2 transports are not thread-safe; one API client per thread.
        self._local = threading.local()

    @property
    def configured(self) -> bool:
        return bool(self.spreadsheet_id)

    def _get_credentials(self) -> service_account.Credentials:
        with self._lock:
            if self._credentials is None:
                settings = get_settings()
                if not settings.sheets_configured:
                    raise SheetsError("Google Sheets credentials not configured", code="SHEETS_NOT_CONFIGURED")
                try:
                    self._credentials = service_account.Credentials.from_service_account_info(
                        {
                            "type": "service_account",
                            "client_email": settings.google_client_email,
                            "private_key": settings.google_private_key_pem,
                            "token_uri": "https://oauth2.googleapis.com/token",
                        },
                        scopes=SCOPES,
                    )
                except Exception as e:
                    logger.error("Sheets credentials invalid", error=str(e))
                    raise SheetsError("Invalid Google service account credentials") from e
            return self._credentials

    def _get_client(self):
        if self._client is not None:
            return self._client
        client = getattr(self._local, "client", None)
        if client is None:
            credentials = self._get_credentials()
            try:
                client = build("sheets", "v4", credentials=credentials, cache_discovery=False)
            except Exception as e:
                logger.error("Sheets client setup failed", error=str(e))
                raise SheetsError("Failed to create Google Sheets client") from e
            self._local.client = client
        return client

    def _values(self):
        return self._get_client().spreadsheets().values()

    def _execute(self, request, action: str, range_: str) -> dict[str, Any]:
        try:
            return request.execute()
        except Exception as e:
            logger.error("Sheet request failed", action=action, range=range_, error=str(e))
            raise SheetsError(f"Failed to {action} {range_}") from e

    def read_range(self, range_: str) -> list[list[Any]]:
        """Read a range. Empty ranges return an empty list."""
        request = self._values().get(spreadsheetId=self.spreadsheet_id, range=range_)
        return self._execute(request, "read", range_).get("values", [])

    def append_row(
        self,
        range_: str,
        values: list[Any],
        value_input_option: str = "USER_ENTERED",
    ) -> dict[str, Any]:
        """Append one row after the last row of ``range_``."""
        request = self._values().append(
            spreadsheetId=self.spreadsheet_id,
            range=range_,
            valueInputOption=value_input_option,
            insertDataOption="INSERT_ROWS",
            body={"values": [values]},
        )
        result = self._execute(request, "append to", range_)
        logger.debug("Row appended", range=range_)
        return result

    def update_range(self, range_: str, rows: list[list[Any]]) -> dict[str, Any]:
        """Overwrite ``range_`` with ``rows``."""
        request = self._values().update(
            spreadsheetId=self.spreadsheet_id,
            range=range_,
            valueInputOption="RAW",
            body={"values": rows},
        )
        return self._execute(request, "update", range_)

    def ensure_header(self, range_: str, header: list[str]) -> bool:
        """Write ``header`` into the first row when the tab is empty.

        Returns:
            True if the header was written.
        """
        if self.read_range(range_):
            return False
        self.update_range(range_, [header])
        logger.info("Header row written", range=range_)
        return True

    def find_user_by_email(self, email: str) -> AdminUser | None:
        """Look up an admin user, case-insensitively by email."""
        wanted = email.strip().lower()
        for row in self.read_range(USERS_RANGE):
            if row and str(row[0]).strip().lower() == wanted:
                return AdminUser.from_row(row)
        return None

    def update_user_last_login(self, email: str) -> None:
        """Note a successful login. The Users tab has no column for it yet."""
        logger.info("User logged in", email=email, at=datetime.now(UTC).isoformat())


@lru_cache
def get_sheets_service() -> SheetsService:
    """Get cached SheetsService instance."""
    return SheetsService()
