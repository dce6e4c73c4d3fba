from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from teamprov.adapters.template_file import (
    TemplateFileError,
    load_teams_section,
    load_template_file,
)
from teamprov.domain.model import (
    GiphyContentRating,
    Message,
    Security,
    TeamSpecialization,
    TeamVisibility,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_load_template_file_parses_teams(template_path: Path) -> None:
    template = load_template_file(template_path)
    section = template.section

    assert template.parameters == {"Department": "Sales", "Region": "EMEA"}
    assert [team.display_name for team in section.teams] == ["Sales Team", "Attached Team"]
    team = section.teams[0]
    assert team.mail_nickname == "salesteam"
    assert team.visibility is TeamVisibility.PRIVATE
    assert team.specialization is TeamSpecialization.EDUCATION_STANDARD
    assert team.fun_settings.allow_giphy is False
    assert team.fun_settings.giphy_content_rating is GiphyContentRating.STRICT
    assert team.fun_settings.allow_custom_memes is True
    assert team.member_settings.allow_delete_channels is False
    assert team.security == Security(
        owners=["alice@contoso.com"],
        members=["carol@contoso.com", "bob@contoso.com"],
    )
    assert team.security is not None
    assert team.security.clear_existing_members is True
    assert team.security.clear_existing_owners is False
    assert [app.app_id for app in team.apps] == ["12345678-9abc-def0-1234-56789abcdef0"]
    assert section.teams[1].group_id == "0f2b1a7e-1111-2222-3333-444455556666"
    assert section.teams[1].security is None


def test_load_template_file_parses_channels(template_path: Path) -> None:
    channel = load_teams_section(template_path).teams[0].channels[0]

    assert channel.display_name == "General"
    assert channel.is_favorite_by_default is True
    assert [tab.display_name for tab in channel.tabs] == ["Wiki", "Portal"]
    assert channel.tabs[0].configuration is None
    configuration = channel.tabs[1].configuration
    assert configuration is not None
    assert configuration.content_url == "https://contoso.com/{parameter:Department}"
    assert configuration.entity_id is None
    assert json.loads(channel.messages[0].message) == {
        "body": {"content": "Welcome to {parameter:Department}"}
    }
    assert channel.messages[1] == Message('{"body": {"content": "Second message"}}')


def test_inline_team_template_is_serialised(template_path: Path) -> None:
    template = load_teams_section(template_path).team_templates[0]

    assert json.loads(template.json_template)["displayName"] == (
        "{parameter:Department} {parameter:Region}"
    )
    assert template.description == "Regional team"
    assert template.visibility is TeamVisibility.PUBLIC
    assert template.display_name is None


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(TemplateFileError, match="Cannot read"):
        load_template_file(tmp_path / "missing.json")


def test_invalid_document_raises(tmp_path: Path) -> None:
    path = tmp_path / "invalid.json"
    path.write_text(json.dumps({"teams": [{"description": "no display name"}]}))

    with pytest.raises(TemplateFileError, match="Invalid template file"):
        load_template_file(path)


def test_unknown_enum_value_raises(tmp_path: Path) -> None:
    path = tmp_path / "invalid.json"
    path.write_text(json.dumps({"teams": [{"displayName": "x", "visibility": "hidden"}]}))

    with pytest.raises(TemplateFileError):
        load_template_file(path)


def test_empty_document_has_nothing_to_provision(tmp_path: Path) -> None:
    path = tmp_path / "empty.json"
    path.write_text("{}")

    assert not load_teams_section(path).will_provision
