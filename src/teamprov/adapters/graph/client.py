"""Authenticated access to the Microsoft Graph API."""

from __future__ import annotations

import json
from collections.abc import Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from teamprov.adapters.http_resilience import ResilientClient

from .schema import GraphErrorResponse

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping

    from teamprov.config.graph import GraphConfig
    from teamprov.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

JsonObject = dict[str, Any]
ClientFactory = Callable[["ResilienceConfig"], ResilientClient]


class GraphAPIError(RuntimeError):
    """Raised when Microsoft Graph answers with a non-success status.

    ``detail`` holds the nested ``error.message`` text when the body is a Graph
    error envelope and the raw body otherwise; conflict detection searches it.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        body: str = "",
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body
        self.method = method
        self.url = url

    @classmethod
    def from_response(cls, response: httpx.Response) -> GraphAPIError:
        body = response.text
        request = response.request
        return cls(
            f"Graph API error ({response.status_code}): {parse_error_message(body)}",
            status=response.status_code,
            body=body,
            method=request.method,
            url=str(request.url),
        )

    @property
    def detail(self) -> str:
        return parse_error_message(self.body) if self.body else self.message


def parse_error_message(body: str) -> str:
    """Return the nested ``error.message`` of a Graph error body, else the body itself."""

    try:
        envelope = GraphErrorResponse.model_validate_json(body)
    except ValidationError:
        return body
    return envelope.error.message or body


def path_segment(value: str) -> str:
    """Percent-encode ``value`` for use as one URL path segment."""

    return quote(value, safe="")


def extract_location_id(location: str | None) -> str | None:
    """Return the first single-quoted segment of a ``Location`` header value.

    Graph answers long-running creates with headers such as
    ``/teams('57fb72d0-d811-46f4-8947-305e6072eaa5')/operations('...')``; the
    identifier is the text between the first pair of apostrophes.
    """

    if not location:
        return None
    parts = location.split("'")
    if len(parts) < 3:
        return None
    return parts[1] or None


def extract_resource_id(response: httpx.Response) -> str | None:
    """Return the created resource id from the JSON body, else from ``Location``."""

    if response.content:
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            payload = None
        if isinstance(payload, dict):
            identifier = payload.get("id")  # pyright: ignore[reportUnknownMemberType,reportUnknownVariableType]
            if isinstance(identifier, str) and identifier:
                return identifier
    return extract_location_id(response.headers.get("Location"))


@dataclass(slots=True)
class GraphSession:
    """A Graph client bound to the bearer token of one provisioning run."""

    client: ResilientClient
    access_token: str
    base_url: str

    async def request(
        self,
        method: str,
        path: str,
        *,
        payload: object | None = None,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.access_token}"}
        if payload is not None:
            response = await self.client.request(
                method, path, json=payload, params=params, headers=headers
            )
        else:
            response = await self.client.request(method, path, params=params, headers=headers)
        if response.is_error:
            error = GraphAPIError.from_response(response)
            log.debug("%s %s failed: %s", method, path, error)
            raise error
        return response

    async def get_json(self, path: str, *, params: Mapping[str, str] | None = None) -> JsonObject:
        response = await self.request("GET", path, params=params)
        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise GraphAPIError(f"Invalid JSON in Graph response for {path}") from exc
        if not isinstance(payload, dict):
            raise GraphAPIError(f"Unexpected Graph response payload for {path}")
        return payload  # pyright: ignore[reportUnknownVariableType]

    def resource_url(self, path: str) -> str:
        """Absolute URL for ``path``, as used in ``@odata.id``/``@odata.bind`` values."""

        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


@asynccontextmanager
async def open_session(
    config: GraphConfig,
    *,
    client_factory: ClientFactory = ResilientClient,
) -> AsyncIterator[GraphSession]:
    async with client_factory(config.resilience) as client:
        yield GraphSession(
            client=client,
            access_token=config.access_token,
            base_url=config.base_url,
        )
