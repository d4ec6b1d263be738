"""Biwenger API client with GET/POST JSON support."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from ..errors import RemoteFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteResponse:
    status_code: int
    payload: Any

    def data(self) -> Any:
        if isinstance(self.payload, Mapping):
            return self.payload.get("data")
        return None


def context_headers(
    token: Optional[str],
    league_id: Any = None,
    user_id: Any = None,
) -> dict[str, str]:
    """Bearer token plus the league/user context headers Biwenger expects."""
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if league_id is not None:
        headers["x-league"] = str(league_id)
    if league_id is not None or user_id is not None:
        headers["x-user"] = "" if user_id is None else str(user_id)
    return headers


@dataclass(frozen=True)
class BiwengerClient:
    base_url: str = "https://biwenger.as.com/api/v2/"
    connect_timeout_seconds: int = 10

    def get_json(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RemoteResponse:
        return self._request("GET", path, params=params, headers=headers)

    def post_json(
        self,
        path: str,
        body: Any,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RemoteResponse:
        return self._request("POST", path, body=body, headers=headers)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RemoteResponse:
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        try:
            response = requests.request(
                method,
                url,
                params=params,
                json=body,
                headers={"User-Agent": "promanager", **(headers or {})},
                # connect timeout only; reads are not bounded
                timeout=(self.connect_timeout_seconds, None),
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise RemoteFailure(f"Request failed for {url}: {exc}") from exc

        # callers judge a bodiless response by its status code
        if not response.text:
            logger.warning("%s %s returned an empty body", method, url)
            return RemoteResponse(status_code=response.status_code, payload=None)

        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            logger.warning("%s %s returned a non-JSON body", method, url)
            payload = None

        return RemoteResponse(status_code=response.status_code, payload=payload)
