"""HTTP collaborators for the tournament backend REST API."""

# Kumite Scoring
# Copyright (C) 2025  Kumite Scoring developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import os
from contextlib import AbstractContextManager
from typing import Any, Dict, Optional

import httpx

from kumitescoring.constants import (
    API_TOKEN_ENV,
    API_URL_ENV,
    DEFAULT_API_TIMEOUT,
    DEFAULT_API_URL,
)
from kumitescoring.exceptions import APIException, NetworkException
from kumitescoring.type_hints import Record, Records
from kumitescoring.utils import setup_logger

logger = setup_logger(__name__)


def default_base_url() -> str:
    return os.environ.get(API_URL_ENV) or DEFAULT_API_URL


def default_token() -> Optional[str]:
    return os.environ.get(API_TOKEN_ENV) or None


class BackendClient(AbstractContextManager):
    """Small synchronous client for the tournament backend.

    The backend wraps every response body as ``{"success": ..., "data": ...}``;
    :meth:`request` returns the ``data`` member.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = DEFAULT_API_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = (base_url or default_base_url()).rstrip("/")
        token = token if token is not None else default_token()
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        if client is None:
            client = httpx.Client(base_url=self.base_url, timeout=timeout)
        client.headers.update(headers)
        self._client = client

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the unwrapped ``data`` member.

        Raises:
            NetworkException: If the backend cannot be reached
            APIException: If the backend answers with an error
        """
        url = f"{self.base_url}{path}"
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise NetworkException(f"Failed to {method} {url}: {exc}") from exc

        if response.is_error:
            raise APIException(
                f"{method} {url} failed with {response.status_code}: "
                f"{self._error_message(response)}",
                response.status_code,
            )

        body = self._decode_json(response, f"{method} {path}")
        if isinstance(body, dict) and body.get("success") is False:
            raise APIException(
                f"{method} {url} was rejected: {body.get('message', 'unknown error')}",
                response.status_code,
            )
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    @staticmethod
    def _decode_json(response: httpx.Response, op: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise APIException(
                f"Failed to decode JSON from {op} response: {exc}",
                response.status_code,
            ) from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.reason_phrase


class HttpScoreStorage:
    """Score storage backed by ``/scores``."""

    def __init__(self, client: BackendClient):
        self.client = client

    def get_match_scores(self, match_id: str) -> Records:
        data = self.client.request("GET", "/scores", params={"match_id": match_id})
        if not isinstance(data, list):
            raise APIException(f"Malformed /scores response for match {match_id}")
        logger.debug("Fetched %d score records for match %s", len(data), match_id)
        return data

    def submit_score(self, payload: Record) -> Record:
        data = self.client.request("POST", "/scores", json=payload)
        if not isinstance(data, dict):
            raise APIException("Malformed POST /scores response")
        return data


class HttpMatchService:
    """Match service backed by ``/matches``."""

    def __init__(self, client: BackendClient):
        self.client = client

    def get_match(self, match_id: str) -> Record:
        data = self.client.request("GET", f"/matches/{match_id}")
        if not isinstance(data, dict):
            raise APIException(f"Malformed /matches/{match_id} response")
        return data

    def update_match(self, match_id: str, data: Record) -> Record:
        result = self.client.request("PUT", f"/matches/{match_id}", json=data)
        if not isinstance(result, dict):
            raise APIException(f"Malformed PUT /matches/{match_id} response")
        return result


def create_http_services(
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    timeout: float = DEFAULT_API_TIMEOUT,
) -> Dict[str, Any]:
    """Build a client plus both HTTP collaborators sharing it."""
    client = BackendClient(base_url=base_url, token=token, timeout=timeout)
    return {
        "client": client,
        "score_storage": HttpScoreStorage(client),
        "match_service": HttpMatchService(client),
    }
