"""Translate validated template file models into domain objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from teamprov.domain.model import (
    Channel,
    FunSettings,
    GuestSettings,
    MemberSettings,
    Message,
    MessagingSettings,
    Security,
    Tab,
    TabConfiguration,
    TeamApp,
    TeamsSection,
    TeamSpec,
    TeamTemplate,
)

if TYPE_CHECKING:
    from .schema import (
        ChannelModel,
        SecurityModel,
        TabModel,
        TeamModel,
        TeamTemplateModel,
        TemplateDocument,
    )


def _security(model: SecurityModel) -> Security:
    return Security(
        owners=list(model.owners),
        members=list(model.members),
        clear_existing_owners=model.clear_existing_owners,
        clear_existing_members=model.clear_existing_members,
    )


def _tab(model: TabModel) -> Tab:
    configuration = None
    if model.configuration is not None:
        configuration = TabConfiguration(
            entity_id=model.configuration.entity_id,
            content_url=model.configuration.content_url,
            remove_url=model.configuration.remove_url,
            website_url=model.configuration.website_url,
        )
    return Tab(
        display_name=model.display_name,
        teams_app_id=model.teams_app_id,
        configuration=configuration,
    )


def _channel(model: ChannelModel) -> Channel:
    return Channel(
        display_name=model.display_name,
        description=model.description,
        is_favorite_by_default=model.is_favorite_by_default,
        tabs=[_tab(tab) for tab in model.tabs],
        messages=[Message(text) for text in model.messages],
    )


def parse_team(model: TeamModel) -> TeamSpec:
    return TeamSpec(
        display_name=model.display_name,
        description=model.description,
        classification=model.classification,
        specialization=model.specialization,
        visibility=model.visibility,
        archived=model.archived,
        fun_settings=FunSettings(**model.fun_settings.model_dump()),
        guest_settings=GuestSettings(**model.guest_settings.model_dump()),
        member_settings=MemberSettings(**model.member_settings.model_dump()),
        messaging_settings=MessagingSettings(**model.messaging_settings.model_dump()),
        group_id=model.group_id,
        mail_nickname=model.mail_nickname,
        clone_from=model.clone_from,
        security=_security(model.security) if model.security is not None else None,
        channels=[_channel(channel) for channel in model.channels],
        apps=[TeamApp(app.app_id) for app in model.apps],
    )


def parse_team_template(model: TeamTemplateModel) -> TeamTemplate:
    return TeamTemplate(
        json_template=model.json_template,
        display_name=model.display_name,
        description=model.description,
        classification=model.classification,
        visibility=model.visibility,
    )


def parse_teams_section(document: TemplateDocument) -> TeamsSection:
    return TeamsSection(
        team_templates=[parse_team_template(item) for item in document.team_templates],
        teams=[parse_team(item) for item in document.teams],
    )
