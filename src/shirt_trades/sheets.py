"""Google Sheets client, the only code that talks to the network."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google.oauth2.service_account import Credentials as ServiceAccountCredentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiClientError
from httplib2 import HttpLib2Error

from shirt_trades.errors import FetchError

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


class RangeFetcher(Protocol):
    def fetch_range(self, sheet_id: str, range_spec: str) -> list[list[Any]]: ...


def _load_credentials(credentials_path: Path, token_path: Path) -> Any:
    if not credentials_path.exists():
        raise FetchError(f"Google credentials not found: {credentials_path}")
    try:
        info = json.loads(credentials_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FetchError(f"Cannot read Google credentials {credentials_path}") from exc

    if isinstance(info, dict) and info.get("type") == "service_account":
        return ServiceAccountCredentials.from_service_account_info(info, scopes=SCOPES)

    creds = None
    if token_path.exists():
        creds = Credentials.from_authorized_user_file(str(token_path), SCOPES)
    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            creds.refresh(Request())
        else:
            flow = InstalledAppFlow.from_client_secrets_file(str(credentials_path), SCOPES)
            creds = flow.run_local_server(port=0)
        token_path.write_text(creds.to_json(), encoding="utf-8")
    return creds


class GoogleSheetsClient:
    """Fetch cell values through the Sheets v4 ``values.get`` endpoint."""

    def __init__(self, service: Any) -> None:
        self._service = service

    @classmethod
    def from_files(
        cls,
        credentials_path: Path = Path("credentials.json"),
        token_path: Path = Path("token.json"),
    ) -> GoogleSheetsClient:
        """Authenticate with a service account or a cached OAuth token."""
        try:
            creds = _load_credentials(Path(credentials_path), Path(token_path))
            service = build("sheets", "v4", credentials=creds, cache_discovery=False)
        except (GoogleAuthError, OSError, ValueError) as exc:
            raise FetchError(f"Could not authenticate with Google Sheets: {exc}") from exc
        return cls(service)

    def fetch_range(self, sheet_id: str, range_spec: str) -> list[list[Any]]:
        try:
            resp = (
                self._service.spreadsheets()
                .values()
                .get(spreadsheetId=sheet_id, range=range_spec)
                .execute()
            )
        except (GoogleApiClientError, HttpLib2Error, GoogleAuthError, OSError) as exc:
            raise FetchError(f"Cannot retrieve data for {sheet_id}: {exc}") from exc
        return list(resp.get("values", []))
