"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_float, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .graph import GRAPH_BASE_URL, GraphConfig, build_graph_resilience, get_graph_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "GRAPH_BASE_URL",
    "ConfigurationError",
    "GraphConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "build_graph_resilience",
    "configure_logging",
    "get_graph_config",
    "optional_env_float",
    "require_env_var",
    "require_env_vars",
]
