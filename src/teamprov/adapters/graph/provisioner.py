"""Synchronous entry points that provision a whole teams section."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from teamprov.adapters.http_resilience import ResilientClient
from teamprov.config.graph import get_graph_config
from teamprov.domain.ports import identity_resolver

from .client import open_session
from .teams import create_by_team, create_by_team_template

if TYPE_CHECKING:
    from teamprov.config.graph import GraphConfig
    from teamprov.domain.model import TeamSpec, TeamsSection, TeamTemplate
    from teamprov.domain.ports import TextResolver

    from .client import ClientFactory, GraphSession, JsonObject

log = getLogger(__name__)


class ProvisioningKind(StrEnum):
    TEAM_TEMPLATE = "team_template"
    TEAM = "team"


@dataclass(slots=True, kw_only=True)
class ProvisioningResult:
    kind: ProvisioningKind
    name: str
    resource: JsonObject | None = None

    @property
    def succeeded(self) -> bool:
        return self.resource is not None


@dataclass(slots=True)
class ProvisioningReport:
    results: list[ProvisioningResult] = field(default_factory=list[ProvisioningResult])

    @property
    def succeeded(self) -> list[ProvisioningResult]:
        return [result for result in self.results if result.succeeded]

    @property
    def failed(self) -> list[ProvisioningResult]:
        return [result for result in self.results if not result.succeeded]


def _template_name(template: TeamTemplate, index: int) -> str:
    return template.display_name or f"team template #{index + 1}"


async def provision_section(
    session: GraphSession,
    section: TeamsSection,
    resolve_text: TextResolver = identity_resolver,
) -> ProvisioningReport:
    """Provision team templates first, then teams; one failure never stops the batch."""

    report = ProvisioningReport()
    for index, template in enumerate(section.team_templates):
        resource = await create_by_team_template(session, template, resolve_text)
        report.results.append(
            ProvisioningResult(
                kind=ProvisioningKind.TEAM_TEMPLATE,
                name=_template_name(template, index),
                resource=resource,
            )
        )
    for team in section.teams:
        resource = await create_by_team(session, team, resolve_text)
        report.results.append(
            ProvisioningResult(kind=ProvisioningKind.TEAM, name=team.display_name, resource=resource)
        )
    return report


@dataclass(slots=True)
class TeamsProvisioner:
    config: GraphConfig = field(default_factory=get_graph_config)
    client_factory: ClientFactory = field(default=ResilientClient)

    def __call__(
        self,
        section: TeamsSection,
        *,
        resolve_text: TextResolver = identity_resolver,
    ) -> ProvisioningReport:
        if not section.will_provision:
            log.info("Nothing to provision: no teams or team templates")
            return ProvisioningReport()
        return asyncio.run(self._provision_section_async(section, resolve_text))

    def provision_team(
        self,
        team: TeamSpec,
        *,
        resolve_text: TextResolver = identity_resolver,
    ) -> JsonObject | None:
        return asyncio.run(self._provision_team_async(team, resolve_text))

    def provision_team_template(
        self,
        template: TeamTemplate,
        *,
        resolve_text: TextResolver = identity_resolver,
    ) -> JsonObject | None:
        return asyncio.run(self._provision_team_template_async(template, resolve_text))

    async def _provision_section_async(
        self,
        section: TeamsSection,
        resolve_text: TextResolver,
    ) -> ProvisioningReport:
        async with open_session(self.config, client_factory=self.client_factory) as session:
            return await provision_section(session, section, resolve_text)

    async def _provision_team_async(
        self,
        team: TeamSpec,
        resolve_text: TextResolver,
    ) -> JsonObject | None:
        async with open_session(self.config, client_factory=self.client_factory) as session:
            return await create_by_team(session, team, resolve_text)

    async def _provision_team_template_async(
        self,
        template: TeamTemplate,
        resolve_text: TextResolver,
    ) -> JsonObject | None:
        async with open_session(self.config, client_factory=self.client_factory) as session:
            return await create_by_team_template(session, template, resolve_text)
