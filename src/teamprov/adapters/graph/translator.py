"""Translate domain objects into Microsoft Graph request bodies."""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from teamprov.domain.model import Channel, Tab, TeamApp, TeamSpec, TeamTemplate
    from teamprov.domain.ports import TextResolver

JsonObject = dict[str, Any]

_NICKNAME_DISALLOWED = re.compile(r"[^A-Za-z0-9]")


def _without_none(values: JsonObject) -> JsonObject:
    return {key: value for key, value in values.items() if value is not None}


def mail_nickname_for(team: TeamSpec) -> str:
    """Return the configured mail nickname, else one derived from the display name."""

    if team.mail_nickname:
        return team.mail_nickname
    return _NICKNAME_DISALLOWED.sub("", team.display_name) or "team"


def group_payload(team: TeamSpec) -> JsonObject:
    return {
        "displayName": team.display_name,
        "mailEnabled": True,
        "groupTypes": ["Unified"],
        "mailNickname": mail_nickname_for(team),
        "securityEnabled": False,
    }


def team_payload(team: TeamSpec) -> JsonObject:
    fun = team.fun_settings
    guest = team.guest_settings
    member = team.member_settings
    messaging = team.messaging_settings
    payload = _without_none(
        {
            "displayName": team.display_name,
            "description": team.description,
            "classification": team.classification,
            "specialization": team.specialization.value if team.specialization else None,
            "visibility": team.visibility.value if team.visibility else None,
        }
    )
    payload.update(
        {
            "isArchived": team.archived,
            "funSettings": {
                "allowGiphy": fun.allow_giphy,
                "giphyContentRating": fun.giphy_content_rating.value,
                "allowStickersAndMemes": fun.allow_stickers_and_memes,
                "allowCustomMemes": fun.allow_custom_memes,
            },
            "guestSettings": {
                "allowCreateUpdateChannels": guest.allow_create_update_channels,
                "allowDeleteChannels": guest.allow_delete_channels,
            },
            "memberSettings": {
                "allowCreateUpdateChannels": member.allow_create_update_channels,
                "allowDeleteChannels": member.allow_delete_channels,
                "allowAddRemoveApps": member.allow_add_remove_apps,
                "allowCreateUpdateRemoveTabs": member.allow_create_update_remove_tabs,
                "allowCreateUpdateRemoveConnectors": member.allow_create_update_remove_connectors,
            },
            "messagingSettings": {
                "allowUserEditMessages": messaging.allow_user_edit_messages,
                "allowUserDeleteMessages": messaging.allow_user_delete_messages,
                "allowOwnerDeleteMessages": messaging.allow_owner_delete_messages,
                "allowTeamMentions": messaging.allow_team_mentions,
                "allowChannelMentions": messaging.allow_channel_mentions,
            },
        }
    )
    return payload


def channel_payload(channel: Channel) -> JsonObject:
    return _without_none(
        {
            "description": channel.description,
            "displayName": channel.display_name,
            "isFavoriteByDefault": channel.is_favorite_by_default,
        }
    )


def tab_payload(tab: Tab) -> JsonObject:
    payload: JsonObject = {
        "displayName": tab.display_name,
        "teamsAppId": tab.teams_app_id,
    }
    if tab.configuration is not None:
        configuration = tab.configuration
        payload["configuration"] = {
            "entityId": configuration.entity_id,
            "contentUrl": configuration.content_url,
            "removeUrl": configuration.remove_url,
            "websiteUrl": configuration.website_url,
        }
    return payload


def install_app_payload(app: TeamApp, *, app_catalog_url: str) -> JsonObject:
    return {"teamsApp@odata.bind": f"{app_catalog_url.rstrip('/')}/{app.app_id}"}


def message_payload(raw_message: str, resolve_text: TextResolver) -> object:
    """Resolve placeholders in ``raw_message`` and parse the result as JSON.

    Raises ``ValueError`` when the resolved text is not valid JSON.
    """

    return json.loads(resolve_text(raw_message))


def template_payload(template: TeamTemplate, resolve_text: TextResolver) -> JsonObject:
    """Resolve and parse the template JSON, then overlay the template's overrides.

    Raises ``ValueError`` when the resolved text is not a JSON object.
    """

    document = json.loads(resolve_text(template.json_template))
    if not isinstance(document, dict):
        raise ValueError("Team template JSON must be an object")
    team = cast(JsonObject, document)
    if template.display_name is not None:
        team["displayName"] = template.display_name
    if template.description is not None:
        team["description"] = template.description
    if template.classification is not None:
        team["classification"] = template.classification
    if template.visibility is not None:
        team["visibility"] = template.visibility.value
    return team
