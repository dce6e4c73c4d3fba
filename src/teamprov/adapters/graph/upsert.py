"""Create-or-update on top of Graph's plain create/replace verbs.

Graph has no upsert verb and reports "already exists" only through the free
text of an error body. ``upsert`` centralises that detection: the primary write
is attempted, and when it fails with a recognised conflict the existing
resource is located with an OData filter and optionally patched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

import httpx
from pydantic import ValidationError

from .client import GraphAPIError, extract_resource_id, parse_error_message, path_segment
from .schema import GraphObjectPage

if TYPE_CHECKING:
    from .client import GraphSession

log = getLogger(__name__)


class UpsertMethod(StrEnum):
    POST = "POST"
    PUT = "PUT"


class ConflictClassifier(Protocol):
    """Decide whether a failed write means the resource already exists."""

    def __call__(self, status: int | None, body: str) -> bool: ...


@dataclass(slots=True, frozen=True)
class MarkerClassifier:
    """Matches a marker substring inside the nested Graph error message."""

    marker: str

    def __call__(self, status: int | None, body: str) -> bool:
        del status
        return self.marker in parse_error_message(body)


@dataclass(slots=True, frozen=True)
class StatusClassifier:
    """Treats the given HTTP status codes as conflicts, e.g. ``{409}``."""

    statuses: frozenset[int]

    def __call__(self, status: int | None, body: str) -> bool:
        del body
        return status in self.statuses


@dataclass(slots=True, frozen=True, kw_only=True)
class OnConflict:
    """How to recover when the primary write reports an existing resource."""

    marker: str
    lookup_field: str
    lookup_value: str
    patch: bool = False
    classifier: ConflictClassifier | None = None

    def matches(self, error: GraphAPIError) -> bool:
        classifier = self.classifier or MarkerClassifier(self.marker)
        return classifier(error.status, error.body or error.message)


@dataclass(slots=True, frozen=True, kw_only=True)
class UpsertRequest:
    """One write against a collection; without ``on_conflict`` it is a plain add."""

    path: str
    payload: object
    error_message: str
    method: UpsertMethod = UpsertMethod.POST
    on_conflict: OnConflict | None = None


def filter_path(path: str, field: str, value: str) -> str:
    # OData string literals escape a single quote by doubling it.
    literal = value.replace("'", "''")
    return f"{path}?$filter={field} eq '{path_segment(literal)}'"


async def upsert(session: GraphSession, request: UpsertRequest) -> str | None:
    """Run ``request`` and return the resource id, or ``None`` on failure.

    Errors are logged, never raised.
    """

    try:
        response = await session.request(
            request.method.value, request.path, payload=request.payload
        )
    except GraphAPIError as exc:
        return await _recover(session, request, exc)
    except httpx.HTTPError as exc:
        log.error("%s: %s", request.error_message, exc)
        return None

    identifier = extract_resource_id(response)
    if identifier is None:
        log.error("%s: no identifier returned by %s", request.error_message, request.path)
    return identifier


async def _recover(
    session: GraphSession,
    request: UpsertRequest,
    error: GraphAPIError,
) -> str | None:
    policy = request.on_conflict
    if policy is None or not policy.matches(error):
        log.error("%s: %s", request.error_message, error)
        return None

    log.warning(
        "Object with %s %r already exists at %s",
        policy.lookup_field,
        policy.lookup_value,
        request.path,
    )
    if request.method is not UpsertMethod.POST:
        log.error("%s: %s", request.error_message, error)
        return None

    try:
        identifier = await find_existing_id(
            session, request.path, policy.lookup_field, policy.lookup_value
        )
        if identifier is not None and policy.patch:
            await session.request(
                "PATCH",
                f"{request.path}/{path_segment(identifier)}",
                payload=request.payload,
            )
    except (GraphAPIError, httpx.HTTPError) as exc:
        log.error("%s: %s (lookup failed: %s)", request.error_message, error, exc)
        return None

    if identifier is None:
        log.error("%s: %s (no match for lookup)", request.error_message, error)
    return identifier


async def find_existing_id(
    session: GraphSession,
    path: str,
    field: str,
    value: str,
) -> str | None:
    """Return the id of the first object in ``path`` whose ``field`` equals ``value``."""

    payload = await session.get_json(filter_path(path, field, value))
    try:
        page = GraphObjectPage.model_validate(payload)
    except ValidationError as exc:
        raise GraphAPIError(f"Unexpected lookup payload from {path}") from exc
    if not page.value:
        return None
    return page.value[0].id
