"""Ports (interfaces) the provisioning core depends on."""

from __future__ import annotations

from .text import TextResolver, identity_resolver

__all__ = ["TextResolver", "identity_resolver"]
