"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from teamprov.adapters.graph import TeamsProvisioner
from teamprov.adapters.template_file import ParameterTokenResolver, load_template_file
from teamprov.config.graph import get_graph_config

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from teamprov.adapters.graph import ProvisioningReport
    from teamprov.config.graph import GraphConfig


log = getLogger(__name__)


def provision_from_file(
    path: str | Path,
    *,
    parameters: Mapping[str, str] | None = None,
    config: GraphConfig | None = None,
    provisioner: TeamsProvisioner | None = None,
) -> ProvisioningReport:
    """Provision every team template and team declared in the template file at ``path``.

    ``parameters`` override the defaults declared in the file.
    """

    template = load_template_file(path)
    effective_parameters = {**template.parameters, **(parameters or {})}
    effective_provisioner = provisioner or TeamsProvisioner(config or get_graph_config())
    log.info(
        "Starting provisioning from %s: team_templates=%s, teams=%s, parameters=%s",
        path,
        len(template.section.team_templates),
        len(template.section.teams),
        sorted(effective_parameters),
    )

    report = effective_provisioner(
        template.section,
        resolve_text=ParameterTokenResolver(effective_parameters),
    )

    log.info(
        f"Finished provisioning from {path}: succeeded={len(report.succeeded)}, "
        f"failed={len(report.failed)}"
    )
    for result in report.failed:
        log.error("Provisioning failed for %s %r", result.kind.value, result.name)
    return report
