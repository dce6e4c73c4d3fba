from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from teamprov.adapters.graph import GraphAPIError
from teamprov.adapters.graph.readers import (
    list_channels,
    list_group_link_ids,
    list_member_ids,
    list_owner_ids,
    resolve_user_id,
)
from teamprov.domain.model import SecurityRole

if TYPE_CHECKING:
    from tests.support.graph import FakeGraph, GraphRunner

NEXT_LINK = "https://graph.test/beta/groups/g-1/owners?$skiptoken=page-2"


def test_list_owner_ids_selects_ids(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on("GET", "/groups/g-1/owners", json={"value": [{"id": "u-1"}, {"id": "u-2"}]})

    result = run_graph(lambda session: list_owner_ids(session, "g-1"))

    assert result == ("u-1", "u-2")
    assert fake_graph.requests[0].params == {"$select": "id"}


def test_list_member_ids_of_empty_group(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on("GET", "/groups/g-1/members", json={"value": []})

    assert run_graph(lambda session: list_member_ids(session, "g-1")) == ()


def test_next_link_is_followed(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on(
        "GET",
        "/groups/g-1/owners",
        json={"value": [{"id": "u-1"}], "@odata.nextLink": NEXT_LINK},
    )
    fake_graph.on("GET", "/groups/g-1/owners", json={"value": [{"id": "u-2"}]})

    result = run_graph(lambda session: list_owner_ids(session, "g-1"))

    assert result == ("u-1", "u-2")
    assert [request.params for request in fake_graph.requests] == [
        {"$select": "id"},
        {"$skiptoken": "page-2"},
    ]


def test_max_pages_stops_paging(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on(
        "GET",
        "/groups/g-1/owners",
        json={"value": [{"id": "u-1"}], "@odata.nextLink": NEXT_LINK},
    )

    result = run_graph(
        lambda session: list_group_link_ids(session, "g-1", SecurityRole.OWNERS, max_pages=1)
    )

    assert result == ("u-1",)
    assert len(fake_graph.requests) == 1


def test_malformed_collection_raises(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on("GET", "/groups/g-1/owners", json={"value": [{"displayName": "no id"}]})

    with pytest.raises(GraphAPIError):
        run_graph(lambda session: list_owner_ids(session, "g-1"))


def test_list_channels_returns_names(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on(
        "GET",
        "/teams/t-1/channels",
        json={"value": [{"id": "c-1", "displayName": "General", "description": "x"}]},
    )

    channels = run_graph(lambda session: list_channels(session, "t-1"))

    assert [(channel.id, channel.display_name) for channel in channels] == [("c-1", "General")]
    assert fake_graph.requests[0].params == {"$select": "id,displayName"}


def test_resolve_user_id(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on("GET", "/users/alice@contoso.com", json={"id": "u-alice"})

    assert run_graph(lambda session: resolve_user_id(session, "alice@contoso.com")) == "u-alice"


def test_resolve_unknown_user_raises(run_graph: GraphRunner) -> None:
    with pytest.raises(GraphAPIError) as excinfo:
        run_graph(lambda session: resolve_user_id(session, "ghost@contoso.com"))

    assert excinfo.value.status == 404
