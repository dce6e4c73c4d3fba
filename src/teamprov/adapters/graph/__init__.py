"""Public interface for the Microsoft Graph teams adapter."""

from __future__ import annotations

from .client import GraphAPIError, GraphSession, extract_location_id, open_session
from .provisioner import (
    ProvisioningKind,
    ProvisioningReport,
    ProvisioningResult,
    TeamsProvisioner,
    provision_section,
)
from .readers import list_channels, list_member_ids, list_owner_ids, resolve_user_id
from .security import reconcile_security
from .teams import create_by_team, create_by_team_template
from .upsert import OnConflict, UpsertMethod, UpsertRequest, upsert

__all__ = [
    "GraphAPIError",
    "GraphSession",
    "OnConflict",
    "ProvisioningKind",
    "ProvisioningReport",
    "ProvisioningResult",
    "TeamsProvisioner",
    "UpsertMethod",
    "UpsertRequest",
    "create_by_team",
    "create_by_team_template",
    "extract_location_id",
    "list_channels",
    "list_member_ids",
    "list_owner_ids",
    "open_session",
    "provision_section",
    "reconcile_security",
    "resolve_user_id",
    "upsert",
]
