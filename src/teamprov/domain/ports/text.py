"""Port for placeholder substitution applied to outgoing text payloads."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextResolver(Protocol):
    """Callable that replaces template placeholders inside ``value``."""

    def __call__(self, value: str) -> str: ...


def identity_resolver(value: str) -> str:
    return value


__all__ = ["TextResolver", "identity_resolver"]
