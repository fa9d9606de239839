"""HTTP journal backend.

Talks to the journal API with a bearer token:

    GET  {api_url}/journal          -> {"entries": [...]}
    GET  {api_url}/journal/{date}   -> {"entry": {...}} or 404
    POST {api_url}/journal          <- {"date", "text", "notes", "analysis"}
"""

import logging
from datetime import date
from typing import Callable, Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from moodmirror.errors import AuthenticationError, ConnectivityError, ValidationError
from moodmirror.journal.base import JournalBackend
from moodmirror.models import JournalEntry

logger = logging.getLogger(__name__)

# Default request timeout in seconds
DEFAULT_TIMEOUT = 30


class RemoteJournalBackend(JournalBackend):
    """Journal backend for the hosted journal API.

    The API identifies the user from the bearer token, so ``user_id`` is
    only used for logging here. Calls are never retried.
    """

    def __init__(
        self,
        api_url: str,
        token_provider: Callable[[], Optional[str]],
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the backend.

        Args:
            api_url: Base URL of the API (e.g. "http://localhost:3001/api").
            token_provider: Returns the current bearer token, or None when
                the user is signed out.
            timeout: Request timeout in seconds.
            session: Optional requests session to reuse.
        """
        self._api_url = api_url.rstrip("/")
        self._token_provider = token_provider
        self._timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        token = self._token_provider()
        if not token:
            raise AuthenticationError("Not signed in: no journal token available")
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self._api_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                headers=self._headers(),
                timeout=self._timeout,
                **kwargs,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise ConnectivityError(f"Could not reach journal API: {e}") from e
        except requests.RequestException as e:
            raise ConnectivityError(f"Journal API request failed: {e}") from e
        return response

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        status = response.status_code
        if status < 400:
            return
        message = _error_message(response)
        if status in (401, 403):
            raise AuthenticationError(message)
        if status == 400:
            raise ValidationError(message)
        raise ConnectivityError(message)

    def list_entries(self, user_id: str) -> list[JournalEntry]:
        response = self._request("GET", "/journal")
        self._raise_for_status(response)
        payload = _json(response)
        entries = [_parse_entry(item) for item in payload.get("entries") or []]
        logger.debug("Fetched %d journal entries for %s", len(entries), user_id)
        return entries

    def get_entry(self, user_id: str, entry_date: date) -> Optional[JournalEntry]:
        response = self._request("GET", f"/journal/{entry_date.isoformat()}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        payload = _json(response)
        if not payload.get("entry"):
            return None
        return _parse_entry(payload["entry"])

    def put_entry(self, user_id: str, entry: JournalEntry) -> None:
        body = {
            "date": entry.date.isoformat(),
            "text": entry.text,
            "notes": entry.notes,
            "analysis": entry.analysis.to_json_dict() if entry.analysis else None,
        }
        response = self._request("POST", "/journal", json=body)
        self._raise_for_status(response)
        logger.debug("Saved journal entry %s for %s", entry.date, user_id)


def _json(response: requests.Response) -> dict:
    try:
        payload = response.json()
    except ValueError as e:
        raise ConnectivityError(f"Journal API returned invalid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ConnectivityError("Journal API returned an unexpected payload")
    return payload


def _parse_entry(item: dict) -> JournalEntry:
    try:
        return JournalEntry.model_validate(item)
    except PydanticValidationError as e:
        raise ConnectivityError(f"Journal API returned a malformed entry: {e}") from e


def _error_message(response: requests.Response) -> str:
    try:
        error = response.json().get("error")
    except (ValueError, AttributeError):
        error = None
    return error or f"Server error: {response.status_code}"
