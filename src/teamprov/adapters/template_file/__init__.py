"""Public interface for the JSON template file adapter."""

from __future__ import annotations

from .loader import TemplateFile, TemplateFileError, load_teams_section, load_template_file
from .schema import TemplateDocument
from .tokens import ParameterTokenResolver
from .translator import parse_team, parse_team_template, parse_teams_section

__all__ = [
    "ParameterTokenResolver",
    "TemplateDocument",
    "TemplateFile",
    "TemplateFileError",
    "load_teams_section",
    "load_template_file",
    "parse_team",
    "parse_team_template",
    "parse_teams_section",
]
