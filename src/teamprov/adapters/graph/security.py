"""Converge the owners and members of a group to a desired :class:`Security`."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from teamprov.domain.model import SecurityRole
from teamprov.domain.reconciliation import ReconciliationDelta, compute_delta

from .client import GraphAPIError, path_segment
from .readers import list_group_link_ids, resolve_user_id

if TYPE_CHECKING:
    from teamprov.domain.model import Security

    from .client import GraphSession

log = getLogger(__name__)


async def resolve_principals(session: GraphSession, security: Security) -> dict[str, str] | None:
    """Map every distinct principal name (casefolded) to its directory id.

    Returns ``None`` as soon as one name cannot be resolved.
    """

    resolved: dict[str, str] = {}
    for name in security.distinct_principals():
        try:
            resolved[name.casefold()] = await resolve_user_id(session, name)
        except (GraphAPIError, httpx.HTTPError) as exc:
            log.error("Cannot resolve team principal %r: %s", name, exc)
            return None
    return resolved


async def apply_delta(
    session: GraphSession,
    group_id: str,
    role: SecurityRole,
    delta: ReconciliationDelta,
) -> None:
    """Add then remove links one call at a time; the first failure propagates."""

    for user_id in delta.to_add:
        log.info("Adding %s %s to group %s", role.value, user_id, group_id)
        await session.request(
            "POST",
            f"/groups/{path_segment(group_id)}/{role.value}/$ref",
            payload={"@odata.id": session.resource_url(f"/users/{user_id}")},
        )
    for user_id in delta.to_remove:
        log.info("Removing %s %s from group %s", role.value, user_id, group_id)
        await session.request(
            "DELETE",
            f"/groups/{path_segment(group_id)}/{role.value}/{path_segment(user_id)}/$ref",
        )


async def reconcile_security(
    session: GraphSession,
    group_id: str,
    security: Security,
    *,
    max_pages: int | None = None,
) -> bool:
    """Reconcile owners, then members, of ``group_id``.

    Links already applied before a failure are left in place.
    """

    resolved = await resolve_principals(session, security)
    if resolved is None:
        return False

    for role in (SecurityRole.OWNERS, SecurityRole.MEMBERS):
        desired = [resolved[name.casefold()] for name in security.principals(role)]
        try:
            current = await list_group_link_ids(session, group_id, role, max_pages=max_pages)
            delta = compute_delta(
                desired,
                current,
                clear_existing=security.clear_existing(role),
            )
            await apply_delta(session, group_id, role, delta)
        except (GraphAPIError, httpx.HTTPError) as exc:
            log.error("Failed to reconcile %s of group %s: %s", role.value, group_id, exc)
            return False
    return True
