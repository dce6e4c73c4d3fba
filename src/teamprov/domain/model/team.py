"""Desired state of a team and its child resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import GiphyContentRating, TeamSpecialization, TeamVisibility

if TYPE_CHECKING:
    from .security import Security


@dataclass(slots=True, frozen=True, kw_only=True)
class FunSettings:
    allow_giphy: bool = True
    giphy_content_rating: GiphyContentRating = GiphyContentRating.MODERATE
    allow_stickers_and_memes: bool = True
    allow_custom_memes: bool = True


@dataclass(slots=True, frozen=True, kw_only=True)
class GuestSettings:
    allow_create_update_channels: bool = False
    allow_delete_channels: bool = False


@dataclass(slots=True, frozen=True, kw_only=True)
class MemberSettings:
    allow_create_update_channels: bool = True
    allow_delete_channels: bool = True
    allow_add_remove_apps: bool = True
    allow_create_update_remove_tabs: bool = True
    allow_create_update_remove_connectors: bool = True


@dataclass(slots=True, frozen=True, kw_only=True)
class MessagingSettings:
    allow_user_edit_messages: bool = True
    allow_user_delete_messages: bool = True
    allow_owner_delete_messages: bool = True
    allow_team_mentions: bool = True
    allow_channel_mentions: bool = True


@dataclass(slots=True, frozen=True, kw_only=True)
class TabConfiguration:
    entity_id: str | None = None
    content_url: str | None = None
    remove_url: str | None = None
    website_url: str | None = None


@dataclass(slots=True, kw_only=True)
class Tab:
    display_name: str
    teams_app_id: str
    configuration: TabConfiguration | None = None


@dataclass(slots=True)
class Message:
    """Raw JSON message body; placeholders are resolved right before posting."""

    message: str


@dataclass(slots=True, kw_only=True)
class Channel:
    display_name: str
    description: str | None = None
    is_favorite_by_default: bool = False
    tabs: list[Tab] = field(default_factory=list[Tab])
    messages: list[Message] = field(default_factory=list[Message])


@dataclass(slots=True, frozen=True)
class TeamApp:
    """Reference to an app in the tenant app catalog."""

    app_id: str


@dataclass(slots=True, kw_only=True)
class TeamSpec:
    """Declarative description of one team.

    ``group_id`` selects an existing Microsoft 365 group to attach the team to;
    when it is absent a unified group is created from ``display_name`` and
    ``mail_nickname``. ``clone_from`` is accepted by the model but rejected by the
    provisioner.
    """

    display_name: str
    description: str | None = None
    classification: str | None = None
    specialization: TeamSpecialization | None = None
    visibility: TeamVisibility | None = None
    archived: bool = False
    fun_settings: FunSettings = field(default_factory=FunSettings)
    guest_settings: GuestSettings = field(default_factory=GuestSettings)
    member_settings: MemberSettings = field(default_factory=MemberSettings)
    messaging_settings: MessagingSettings = field(default_factory=MessagingSettings)
    group_id: str | None = None
    mail_nickname: str | None = None
    clone_from: str | None = None
    security: Security | None = None
    channels: list[Channel] = field(default_factory=list[Channel])
    apps: list[TeamApp] = field(default_factory=list[TeamApp])


@dataclass(slots=True, kw_only=True)
class TeamTemplate:
    """Opaque team-creation JSON with a few optional overrides."""

    json_template: str
    display_name: str | None = None
    description: str | None = None
    classification: str | None = None
    visibility: TeamVisibility | None = None


@dataclass(slots=True, kw_only=True)
class TeamsSection:
    """Everything one template application asks the teams provisioner to build."""

    team_templates: list[TeamTemplate] = field(default_factory=list[TeamTemplate])
    teams: list[TeamSpec] = field(default_factory=list[TeamSpec])

    @property
    def will_provision(self) -> bool:
        return bool(self.team_templates) or bool(self.teams)


@dataclass(slots=True)
class RemoteTeamHandle:
    """Identifiers collected while one team is provisioned."""

    group_id: str | None = None
    team_id: str | None = None
