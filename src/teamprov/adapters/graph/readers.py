"""Read helpers that collect the current remote state used as reconciliation input."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from teamprov.domain.model import SecurityRole

from .client import GraphAPIError, path_segment
from .schema import (
    GraphObject,
    GraphObjectPage,
    GraphPage,
    NamedGraphObject,
    NamedGraphObjectPage,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .client import GraphSession

_SELECT_ID = {"$select": "id"}


async def _iter_pages[PageT: GraphPage](
    session: GraphSession,
    path: str,
    page_type: type[PageT],
    *,
    params: Mapping[str, str] | None,
    max_pages: int | None,
) -> list[PageT]:
    pages: list[PageT] = []
    next_path: str | None = path
    next_params = params
    while next_path is not None:
        payload = await session.get_json(next_path, params=next_params)
        try:
            page = page_type.model_validate(payload)
        except ValidationError as exc:
            raise GraphAPIError(f"Unexpected collection payload from {path}") from exc
        pages.append(page)
        if max_pages is not None and len(pages) >= max_pages:
            break
        # nextLink already carries the original query options.
        next_path = page.next_link
        next_params = None
    return pages


async def list_ids(
    session: GraphSession,
    path: str,
    *,
    params: Mapping[str, str] | None = None,
    max_pages: int | None = None,
) -> tuple[str, ...]:
    """Return the ``id`` of every object in the collection at ``path``.

    ``@odata.nextLink`` is followed until exhausted or ``max_pages`` is reached.
    """

    pages = await _iter_pages(session, path, GraphObjectPage, params=params, max_pages=max_pages)
    objects: list[GraphObject] = [item for page in pages for item in page.value]
    return tuple(item.id for item in objects)


async def list_group_link_ids(
    session: GraphSession,
    group_id: str,
    role: SecurityRole,
    *,
    max_pages: int | None = None,
) -> tuple[str, ...]:
    return await list_ids(
        session,
        f"/groups/{path_segment(group_id)}/{role.value}",
        params=_SELECT_ID,
        max_pages=max_pages,
    )


async def list_owner_ids(session: GraphSession, group_id: str) -> tuple[str, ...]:
    return await list_group_link_ids(session, group_id, SecurityRole.OWNERS)


async def list_member_ids(session: GraphSession, group_id: str) -> tuple[str, ...]:
    return await list_group_link_ids(session, group_id, SecurityRole.MEMBERS)


async def list_channels(session: GraphSession, team_id: str) -> list[NamedGraphObject]:
    pages = await _iter_pages(
        session,
        f"/teams/{path_segment(team_id)}/channels",
        NamedGraphObjectPage,
        params={"$select": "id,displayName"},
        max_pages=None,
    )
    return [item for page in pages for item in page.value]


async def resolve_user_id(session: GraphSession, user_principal_name: str) -> str:
    """Return the directory object id of ``user_principal_name``.

    Raises :class:`GraphAPIError` when the user cannot be read.
    """

    payload = await session.get_json(
        f"/users/{path_segment(user_principal_name)}",
        params=_SELECT_ID,
    )
    try:
        return GraphObject.model_validate(payload).id
    except ValidationError as exc:
        raise GraphAPIError(f"No id returned for user {user_principal_name}") from exc
