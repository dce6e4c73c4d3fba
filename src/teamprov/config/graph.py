"""Microsoft Graph configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .env import optional_env_float, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    import httpx

log = getLogger(__name__)

# Tab creation with ``teamsAppId`` and the ``/teams`` template endpoint are
# only exposed on the beta surface.
GRAPH_BASE_URL = "https://graph.microsoft.com/beta"
GRAPH_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """Holds the bearer token and transport settings for one provisioning run."""

    access_token: str
    resilience: ResilienceConfig

    @property
    def base_url(self) -> str:
        return self.resilience.base_url or GRAPH_BASE_URL


async def log_failed_response(response: httpx.Response) -> None:
    """Response hook: note every non-2xx Graph answer at DEBUG level."""

    if response.is_error:
        request = response.request
        log.debug("Graph answered %s to %s %s", response.status_code, request.method, request.url)


def build_graph_resilience(
    *,
    base_url: str = GRAPH_BASE_URL,
    timeout_seconds: float = GRAPH_TIMEOUT_SECONDS,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="graph",
        base_url=base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        retry=RetryPolicy(total=3),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        response_hooks=(log_failed_response,),
        default_headers={"Accept": "application/json"},
    )


def get_graph_config(
    *,
    access_token: str | None = None,
    resilience: ResilienceConfig | None = None,
) -> GraphConfig:
    """Build a :class:`GraphConfig` from arguments, falling back to the environment.

    ``GRAPH_ACCESS_TOKEN`` is required unless ``access_token`` is passed.
    ``GRAPH_BASE_URL`` and ``GRAPH_TIMEOUT_SECONDS`` are optional.
    """

    token = access_token or require_env_vars(("GRAPH_ACCESS_TOKEN",))["GRAPH_ACCESS_TOKEN"]
    if resilience is None:
        base_url = os.getenv("GRAPH_BASE_URL", "").strip() or GRAPH_BASE_URL
        resilience = build_graph_resilience(
            base_url=base_url,
            timeout_seconds=optional_env_float("GRAPH_TIMEOUT_SECONDS", GRAPH_TIMEOUT_SECONDS),
        )
    return GraphConfig(access_token=token, resilience=resilience)
