"""Provision one team: group, team settings, security, channels, apps.

Each step needs the identifiers produced by the previous one, so a failing step
stops the remaining steps of that team. Nothing already created is rolled back.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from teamprov.domain.model import RemoteTeamHandle
from teamprov.domain.ports import identity_resolver

from .client import GraphAPIError, path_segment
from .security import reconcile_security
from .translator import (
    channel_payload,
    group_payload,
    install_app_payload,
    mail_nickname_for,
    message_payload,
    tab_payload,
    team_payload,
    template_payload,
)
from .upsert import OnConflict, UpsertMethod, UpsertRequest, upsert

if TYPE_CHECKING:
    from teamprov.domain.model import Channel, TeamSpec, TeamTemplate
    from teamprov.domain.ports import TextResolver

    from .client import GraphSession, JsonObject

log = getLogger(__name__)

GROUP_CONFLICT_MARKER = "Another object with the same value for property mailNickname already exists"
CHANNEL_CONFLICT_MARKER = "Channel name already existed"
TAB_CONFLICT_MARKER = "already exists"


async def ensure_group(session: GraphSession, team: TeamSpec) -> str | None:
    """Return the group backing ``team``, creating a unified group if none is given."""

    if team.group_id:
        return team.group_id
    mail_nickname = mail_nickname_for(team)
    return await upsert(
        session,
        UpsertRequest(
            path="/groups",
            payload=group_payload(team),
            error_message=f"Failed to create group for team {team.display_name!r}",
            on_conflict=OnConflict(
                marker=GROUP_CONFLICT_MARKER,
                lookup_field="mailNickname",
                lookup_value=mail_nickname,
                patch=True,
            ),
        ),
    )


async def ensure_team(session: GraphSession, team: TeamSpec, group_id: str) -> str | None:
    return await upsert(
        session,
        UpsertRequest(
            path=f"/groups/{path_segment(group_id)}/team",
            payload=team_payload(team),
            error_message=f"Failed to provision team {team.display_name!r}",
            method=UpsertMethod.PUT,
        ),
    )


async def provision_channel(
    session: GraphSession,
    team_id: str,
    channel: Channel,
    resolve_text: TextResolver,
) -> bool:
    channels_path = f"/teams/{path_segment(team_id)}/channels"
    channel_id = await upsert(
        session,
        UpsertRequest(
            path=channels_path,
            payload=channel_payload(channel),
            error_message=f"Failed to create channel {channel.display_name!r}",
            on_conflict=OnConflict(
                marker=CHANNEL_CONFLICT_MARKER,
                lookup_field="displayName",
                lookup_value=channel.display_name,
            ),
        ),
    )
    if channel_id is None:
        return False

    channel_path = f"{channels_path}/{path_segment(channel_id)}"
    for tab in channel.tabs:
        tab_id = await upsert(
            session,
            UpsertRequest(
                path=f"{channel_path}/tabs",
                payload=tab_payload(tab),
                error_message=(
                    f"Failed to create tab {tab.display_name!r} "
                    f"in channel {channel.display_name!r}"
                ),
                on_conflict=OnConflict(
                    marker=TAB_CONFLICT_MARKER,
                    lookup_field="displayName",
                    lookup_value=tab.display_name,
                ),
            ),
        )
        if tab_id is None:
            return False

    for message in channel.messages:
        # Messages are always created anew; re-running a template posts them again.
        try:
            payload = message_payload(message.message, resolve_text)
            await session.request("POST", f"{channel_path}/messages", payload=payload)
        except ValueError as exc:
            log.error("Invalid message JSON for channel %r: %s", channel.display_name, exc)
            return False
        except (GraphAPIError, httpx.HTTPError) as exc:
            log.error("Failed to post message in channel %r: %s", channel.display_name, exc)
            return False

    log.info("Provisioned channel %r (%s)", channel.display_name, channel_id)
    return True


async def provision_channels(
    session: GraphSession,
    team: TeamSpec,
    team_id: str,
    resolve_text: TextResolver,
) -> bool:
    for channel in team.channels:
        if not await provision_channel(session, team_id, channel, resolve_text):
            return False
    return True


async def install_apps(session: GraphSession, team: TeamSpec, team_id: str) -> bool:
    app_catalog_url = session.resource_url("/appCatalogs/teamsApps")
    for app in team.apps:
        # TODO: detect "already installed" once Graph exposes a stable error code for it.
        try:
            await session.request(
                "POST",
                f"/teams/{path_segment(team_id)}/installedApps",
                payload=install_app_payload(app, app_catalog_url=app_catalog_url),
            )
        except (GraphAPIError, httpx.HTTPError) as exc:
            log.error("Failed to install app %s in team %s: %s", app.app_id, team_id, exc)
            return False
    return True


async def fetch_json(session: GraphSession, path: str, *, what: str) -> JsonObject | None:
    try:
        return await session.get_json(path)
    except (GraphAPIError, httpx.HTTPError) as exc:
        log.error("Failed to fetch %s: %s", what, exc)
        return None


async def create_by_team(
    session: GraphSession,
    team: TeamSpec,
    resolve_text: TextResolver = identity_resolver,
) -> JsonObject | None:
    """Provision ``team`` and return the resulting team resource, or ``None``."""

    if team.clone_from and team.clone_from.strip():
        log.error("Cloning team %r from %r is not supported", team.display_name, team.clone_from)
        return None

    log.info("Provisioning team %r", team.display_name)
    handle = RemoteTeamHandle()

    handle.group_id = await ensure_group(session, team)
    if handle.group_id is None:
        return None

    handle.team_id = await ensure_team(session, team, handle.group_id)
    if handle.team_id is None:
        return None

    if team.security is not None and not await reconcile_security(
        session, handle.group_id, team.security
    ):
        return None

    if not await provision_channels(session, team, handle.team_id, resolve_text):
        return None

    if not await install_apps(session, team, handle.team_id):
        return None

    return await fetch_json(
        session,
        f"/teams/{path_segment(handle.team_id)}",
        what=f"team {team.display_name!r}",
    )


async def create_by_team_template(
    session: GraphSession,
    template: TeamTemplate,
    resolve_text: TextResolver = identity_resolver,
) -> JsonObject | None:
    """Create a team from an opaque team-creation JSON and return its group."""

    try:
        payload = template_payload(template, resolve_text)
    except ValueError as exc:
        log.error("Invalid team template JSON: %s", exc)
        return None

    team_id = await upsert(
        session,
        UpsertRequest(
            path="/teams",
            payload=payload,
            error_message="Failed to create team from team template",
        ),
    )
    if team_id is None:
        return None

    log.info("Created team %s from team template", team_id)
    return await fetch_json(
        session,
        f"/groups/{path_segment(team_id)}",
        what=f"group of templated team {team_id}",
    )
