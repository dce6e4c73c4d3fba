"""Public domain model surface."""

from __future__ import annotations

from teamprov.domain.model.enums import (
    GiphyContentRating,
    SecurityRole,
    TeamSpecialization,
    TeamVisibility,
)
from teamprov.domain.model.security import Security
from teamprov.domain.model.team import (
    Channel,
    FunSettings,
    GuestSettings,
    MemberSettings,
    Message,
    MessagingSettings,
    RemoteTeamHandle,
    Tab,
    TabConfiguration,
    TeamApp,
    TeamsSection,
    TeamSpec,
    TeamTemplate,
)

__all__ = [
    "Channel",
    "FunSettings",
    "GiphyContentRating",
    "GuestSettings",
    "MemberSettings",
    "Message",
    "MessagingSettings",
    "RemoteTeamHandle",
    "Security",
    "SecurityRole",
    "Tab",
    "TabConfiguration",
    "TeamApp",
    "TeamSpec",
    "TeamSpecialization",
    "TeamTemplate",
    "TeamVisibility",
    "TeamsSection",
]
