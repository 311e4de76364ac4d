"""
Google Sheets puzzle backend.

Reads the puzzle table from a spreadsheet with a service account.

Setup:
    1. Create a service account and share the sheet with its email
    2. Base64-encode the service account JSON key into
       GOOGLE_SERVICE_ACCOUNT_KEY_BASE64
    3. Set GOOGLE_SHEETS_ID (and optionally GOOGLE_SHEETS_TAB) in .env
"""

import base64
import binascii
import json
import logging
import os
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import DEFAULT_TAB, DEFAULT_TIMEZONE
from ..errors import ProviderConfigError, PuzzleProviderError
from .provider import PuzzleProvider, Row


logger = logging.getLogger("kiwi_connect.puzzles.sheets")

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


class SheetsPuzzleProvider(PuzzleProvider):
    """Puzzle provider backed by a Google Sheets tab."""

    def __init__(
        self,
        sheet_id: Optional[str] = None,
        tab: Optional[str] = None,
        credentials_b64: Optional[str] = None,
        timezone: str = DEFAULT_TIMEZONE,
        clock: Optional[Callable[[], datetime]] = None,
        service: Any = None,
    ):
        """Initialize the Sheets provider.

        Args:
            sheet_id: Spreadsheet id (default: GOOGLE_SHEETS_ID)
            tab: Tab holding the puzzle table (default: GOOGLE_SHEETS_TAB or "Puzzles")
            credentials_b64: Base64 service account JSON
                (default: GOOGLE_SERVICE_ACCOUNT_KEY_BASE64)
            timezone: Timezone that defines "today"
            clock: Override for the current time
            service: Prebuilt Sheets API resource
        """
        super().__init__(timezone=timezone, clock=clock)
        self.sheet_id = sheet_id or os.environ.get("GOOGLE_SHEETS_ID")
        self.tab = tab or os.environ.get("GOOGLE_SHEETS_TAB") or DEFAULT_TAB
        self.credentials_b64 = credentials_b64 or os.environ.get("GOOGLE_SERVICE_ACCOUNT_KEY_BASE64")
        self._service = service

    @property
    def range(self) -> str:
        return f"{self.tab}!A1:G"

    def _get_credentials(self) -> service_account.Credentials:
        """Decode the service account key and build read-only credentials."""
        if not self.credentials_b64:
            raise ProviderConfigError("Missing GOOGLE_SERVICE_ACCOUNT_KEY_BASE64")

        try:
            info: Dict[str, Any] = json.loads(base64.b64decode(self.credentials_b64).decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ProviderConfigError(f"Service account key is not valid base64 JSON: {e}") from e

        if "private_key" not in info or "client_email" not in info:
            raise ProviderConfigError("Service account key is missing client_email or private_key")

        # Keys pasted through env files often carry literal "\n"
        info["private_key"] = info["private_key"].replace("\\n", "\n")

        try:
            return service_account.Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)
        except ValueError as e:
            raise ProviderConfigError(f"Service account key rejected: {e}") from e

    def _get_service(self) -> Any:
        if self._service is None:
            credentials = self._get_credentials()
            self._service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
            logger.info(f"Sheets API connected as {credentials.service_account_email}")
        return self._service

    def fetch_rows(self) -> List[Row]:
        if not self.sheet_id:
            raise ProviderConfigError("Missing sheet ID")

        service = self._get_service()
        try:
            response = service.spreadsheets().values().get(
                spreadsheetId=self.sheet_id,
                range=self.range,
            ).execute()
        except HttpError as e:
            logger.error(f"Sheets request failed for {self.range}: {e}")
            raise PuzzleProviderError(f"Could not read puzzle sheet: {e}") from e

        rows = response.get("values", [])
        logger.debug(f"Fetched {len(rows)} rows from {self.range}")
        return rows
