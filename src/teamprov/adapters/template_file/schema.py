"""Pydantic models describing the JSON provisioning template file.

Keys are camelCase, mirroring the Graph resources they describe. Message bodies
and team templates may be given either as JSON strings or as inline objects.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from teamprov.domain.model import GiphyContentRating, TeamSpecialization, TeamVisibility


def _json_text(value: object) -> object:
    if isinstance(value, dict | list):
        return json.dumps(value)
    return value


class TemplateBaseModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class FunSettingsModel(TemplateBaseModel):
    allow_giphy: bool = True
    giphy_content_rating: GiphyContentRating = GiphyContentRating.MODERATE
    allow_stickers_and_memes: bool = True
    allow_custom_memes: bool = True


class GuestSettingsModel(TemplateBaseModel):
    allow_create_update_channels: bool = False
    allow_delete_channels: bool = False


class MemberSettingsModel(TemplateBaseModel):
    allow_create_update_channels: bool = True
    allow_delete_channels: bool = True
    allow_add_remove_apps: bool = True
    allow_create_update_remove_tabs: bool = True
    allow_create_update_remove_connectors: bool = True


class MessagingSettingsModel(TemplateBaseModel):
    allow_user_edit_messages: bool = True
    allow_user_delete_messages: bool = True
    allow_owner_delete_messages: bool = True
    allow_team_mentions: bool = True
    allow_channel_mentions: bool = True


class SecurityModel(TemplateBaseModel):
    owners: list[str] = Field(default_factory=list[str])
    members: list[str] = Field(default_factory=list[str])
    clear_existing_owners: bool = False
    clear_existing_members: bool = False


class TabConfigurationModel(TemplateBaseModel):
    entity_id: str | None = None
    content_url: str | None = None
    remove_url: str | None = None
    website_url: str | None = None


class TabModel(TemplateBaseModel):
    display_name: str
    teams_app_id: str
    configuration: TabConfigurationModel | None = None


class ChannelModel(TemplateBaseModel):
    display_name: str
    description: str | None = None
    is_favorite_by_default: bool = False
    tabs: list[TabModel] = Field(default_factory=list[TabModel])
    messages: list[str] = Field(default_factory=list[str])

    @field_validator("messages", mode="before")
    @classmethod
    def _serialize_inline_messages(cls, value: object) -> object:
        if isinstance(value, list):
            return [_json_text(item) for item in value]  # pyright: ignore[reportUnknownVariableType]
        return value


class TeamAppModel(TemplateBaseModel):
    app_id: str


class TeamModel(TemplateBaseModel):
    display_name: str
    description: str | None = None
    classification: str | None = None
    specialization: TeamSpecialization | None = None
    visibility: TeamVisibility | None = None
    archived: bool = False
    fun_settings: FunSettingsModel = Field(default_factory=FunSettingsModel)
    guest_settings: GuestSettingsModel = Field(default_factory=GuestSettingsModel)
    member_settings: MemberSettingsModel = Field(default_factory=MemberSettingsModel)
    messaging_settings: MessagingSettingsModel = Field(default_factory=MessagingSettingsModel)
    group_id: str | None = None
    mail_nickname: str | None = None
    clone_from: str | None = None
    security: SecurityModel | None = None
    channels: list[ChannelModel] = Field(default_factory=list[ChannelModel])
    apps: list[TeamAppModel] = Field(default_factory=list[TeamAppModel])


class TeamTemplateModel(TemplateBaseModel):
    json_template: str
    display_name: str | None = None
    description: str | None = None
    classification: str | None = None
    visibility: TeamVisibility | None = None

    _serialize_inline_template = field_validator("json_template", mode="before")(_json_text)


class TemplateDocument(TemplateBaseModel):
    parameters: dict[str, str] = Field(default_factory=dict[str, str])
    team_templates: list[TeamTemplateModel] = Field(default_factory=list[TeamTemplateModel])
    teams: list[TeamModel] = Field(default_factory=list[TeamModel])

    @field_validator("parameters", mode="before")
    @classmethod
    def _stringify_parameters(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(key): str(item) for key, item in value.items()}  # pyright: ignore[reportUnknownVariableType,reportUnknownArgumentType]
        return value
