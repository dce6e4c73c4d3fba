from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from teamprov.adapters.graph.upsert import (
    OnConflict,
    StatusClassifier,
    UpsertMethod,
    UpsertRequest,
    filter_path,
    upsert,
)
from tests.support.graph import graph_error

if TYPE_CHECKING:
    from tests.support.graph import FakeGraph, GraphRunner

GROUP_CONFLICT = "Another object with the same value for property mailNickname already exists."


def _group_request(*, patch: bool = True) -> UpsertRequest:
    return UpsertRequest(
        path="/groups",
        payload={"displayName": "Sales", "mailNickname": "sales"},
        error_message="Failed to create group",
        on_conflict=OnConflict(
            marker="Another object with the same value for property mailNickname already exists",
            lookup_field="mailNickname",
            lookup_value="sales",
            patch=patch,
        ),
    )


def test_returns_id_from_response_body(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on("POST", "/groups", status=201, json={"id": "g-1"})

    result = run_graph(lambda session: upsert(session, _group_request()))

    assert result == "g-1"
    assert fake_graph.calls == [("POST", "/groups")]
    assert fake_graph.requests[0].body == {"displayName": "Sales", "mailNickname": "sales"}


def test_returns_id_from_location_header(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on(
        "POST",
        "/teams",
        status=202,
        headers={"Location": "/teams('t-42')/operations('op-1')"},
    )
    request = UpsertRequest(path="/teams", payload={}, error_message="Failed to create team")

    assert run_graph(lambda session: upsert(session, request)) == "t-42"


def test_conflict_looks_up_and_patches_existing(
    fake_graph: FakeGraph, run_graph: GraphRunner
) -> None:
    fake_graph.on("POST", "/groups", status=400, json=graph_error(GROUP_CONFLICT))
    fake_graph.on("GET", "/groups", json={"value": [{"id": "g-9"}]})
    fake_graph.on("PATCH", "/groups/g-9", status=204)

    result = run_graph(lambda session: upsert(session, _group_request()))

    assert result == "g-9"
    assert fake_graph.calls == [("POST", "/groups"), ("GET", "/groups"), ("PATCH", "/groups/g-9")]
    assert fake_graph.requests[1].params == {"$filter": "mailNickname eq 'sales'"}
    assert fake_graph.requests[2].body == {"displayName": "Sales", "mailNickname": "sales"}


def test_conflict_without_patch_only_looks_up(
    fake_graph: FakeGraph, run_graph: GraphRunner
) -> None:
    fake_graph.on("POST", "/groups", status=400, json=graph_error(GROUP_CONFLICT))
    fake_graph.on("GET", "/groups", json={"value": [{"id": "g-9"}, {"id": "g-10"}]})

    result = run_graph(lambda session: upsert(session, _group_request(patch=False)))

    assert result == "g-9"
    assert fake_graph.calls == [("POST", "/groups"), ("GET", "/groups")]


def test_conflict_on_put_is_not_recovered(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on("PUT", "/groups/g-1/team", status=409, json=graph_error("Team already exists"))
    request = UpsertRequest(
        path="/groups/g-1/team",
        payload={},
        error_message="Failed to provision team",
        method=UpsertMethod.PUT,
        on_conflict=OnConflict(marker="already exists", lookup_field="id", lookup_value="g-1"),
    )

    assert run_graph(lambda session: upsert(session, request)) is None
    assert fake_graph.calls == [("PUT", "/groups/g-1/team")]


def test_unrecognised_error_returns_none_without_lookup(
    fake_graph: FakeGraph, run_graph: GraphRunner, caplog: pytest.LogCaptureFixture
) -> None:
    fake_graph.on("POST", "/groups", status=403, json=graph_error("Insufficient privileges"))

    result = run_graph(lambda session: upsert(session, _group_request()))

    assert result is None
    assert fake_graph.calls == [("POST", "/groups")]
    assert "Failed to create group" in caplog.text
    assert "Insufficient privileges" in caplog.text


def test_marker_is_matched_in_nested_message_only(
    fake_graph: FakeGraph, run_graph: GraphRunner
) -> None:
    fake_graph.on(
        "POST",
        "/groups",
        status=400,
        json={"error": {"code": GROUP_CONFLICT, "message": "Something else went wrong"}},
    )

    assert run_graph(lambda session: upsert(session, _group_request())) is None
    assert fake_graph.calls == [("POST", "/groups")]


def test_conflict_without_match_returns_none(
    fake_graph: FakeGraph, run_graph: GraphRunner
) -> None:
    fake_graph.on("POST", "/groups", status=400, json=graph_error(GROUP_CONFLICT))
    fake_graph.on("GET", "/groups", json={"value": []})

    assert run_graph(lambda session: upsert(session, _group_request())) is None
    assert fake_graph.calls == [("POST", "/groups"), ("GET", "/groups")]


def test_failed_lookup_returns_none(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on("POST", "/groups", status=400, json=graph_error(GROUP_CONFLICT))
    fake_graph.on("GET", "/groups", status=500, json=graph_error("Service unavailable"))

    assert run_graph(lambda session: upsert(session, _group_request())) is None
    assert fake_graph.calls == [("POST", "/groups"), ("GET", "/groups")]


def test_status_classifier_detects_conflict_by_status(
    fake_graph: FakeGraph, run_graph: GraphRunner
) -> None:
    fake_graph.on("POST", "/teams/t-1/channels", status=409, json=graph_error("Conflict"))
    fake_graph.on("GET", "/teams/t-1/channels", json={"value": [{"id": "c-1"}]})
    request = UpsertRequest(
        path="/teams/t-1/channels",
        payload={"displayName": "General"},
        error_message="Failed to create channel",
        on_conflict=OnConflict(
            marker="",
            lookup_field="displayName",
            lookup_value="General",
            classifier=StatusClassifier(frozenset({409})),
        ),
    )

    assert run_graph(lambda session: upsert(session, request)) == "c-1"


def test_second_run_converges_on_same_id(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on("POST", "/groups", status=201, json={"id": "g-1"})
    fake_graph.on("POST", "/groups", status=400, json=graph_error(GROUP_CONFLICT))
    fake_graph.on("GET", "/groups", json={"value": [{"id": "g-1"}]})
    fake_graph.on("PATCH", "/groups/g-1", status=204)

    first = run_graph(lambda session: upsert(session, _group_request()))
    second = run_graph(lambda session: upsert(session, _group_request()))

    assert first == second == "g-1"
    assert fake_graph.calls.count(("POST", "/groups")) == 2


def test_filter_path_escapes_value() -> None:
    path = filter_path("/groups", "mailNickname", "a b")

    assert path == "/groups?$filter=mailNickname eq 'a%20b'"


def test_filter_path_doubles_single_quotes() -> None:
    path = filter_path("/teams/t-1/channels", "displayName", "Bob's channel")

    assert path == "/teams/t-1/channels?$filter=displayName eq 'Bob%27%27s%20channel'"


def test_conflict_lookup_quotes_apostrophes(fake_graph: FakeGraph, run_graph: GraphRunner) -> None:
    fake_graph.on(
        "POST",
        "/teams/t-1/channels",
        status=400,
        json=graph_error("Channel name already existed"),
    )
    fake_graph.on("GET", "/teams/t-1/channels", json={"value": [{"id": "c-7"}]})
    request = UpsertRequest(
        path="/teams/t-1/channels",
        payload={"displayName": "Bob's channel"},
        error_message="Failed to create channel",
        on_conflict=OnConflict(
            marker="Channel name already existed",
            lookup_field="displayName",
            lookup_value="Bob's channel",
        ),
    )

    assert run_graph(lambda session: upsert(session, request)) == "c-7"
    assert fake_graph.requests[1].params == {"$filter": "displayName eq 'Bob''s channel'"}
