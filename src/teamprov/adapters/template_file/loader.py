"""Read a provisioning template file from disk."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .schema import TemplateDocument
from .translator import parse_teams_section

if TYPE_CHECKING:
    from teamprov.domain.model import TeamsSection

log = getLogger(__name__)


class TemplateFileError(ValueError):
    """Raised when a template file cannot be read or does not validate."""


@dataclass(slots=True)
class TemplateFile:
    section: TeamsSection
    parameters: dict[str, str] = field(default_factory=dict[str, str])


def load_template_file(path: str | Path) -> TemplateFile:
    """Load ``path`` and return its teams section with its default parameters."""

    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateFileError(f"Cannot read template file {source}: {exc}") from exc

    try:
        document = TemplateDocument.model_validate_json(text)
    except ValidationError as exc:
        raise TemplateFileError(f"Invalid template file {source}: {exc}") from exc

    section = parse_teams_section(document)
    log.debug(
        "Loaded %s: %d team templates, %d teams",
        source,
        len(section.team_templates),
        len(section.teams),
    )
    return TemplateFile(section=section, parameters=dict(document.parameters))


def load_teams_section(path: str | Path) -> TeamsSection:
    return load_template_file(path).section
