"""Add/remove deltas between a desired and a current set of principal ids.

The Graph API has no set-replace operation for group links, so convergence is
expressed as a minimal edit script: link what is desired but missing and, only
when the collection's clear flag is set, unlink what is present but undesired.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(slots=True, frozen=True)
class ReconciliationDelta:
    """Disjoint link edits for one collection; computed per run and never cached."""

    to_add: tuple[str, ...] = ()
    to_remove: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove

    def apply_to(self, current: Iterable[str]) -> set[str]:
        """Return the set ``current`` converges to once the delta is applied."""

        removed = {_key(value) for value in self.to_remove}
        result = {value for value in current if _key(value) not in removed}
        result.update(self.to_add)
        return result


def _key(value: str) -> str:
    return value.casefold()


def _unique(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        key = _key(value)
        if key in seen:
            continue
        seen.add(key)
        ordered.append(value)
    return ordered


def compute_delta(
    desired: Iterable[str],
    current: Iterable[str],
    *,
    clear_existing: bool,
) -> ReconciliationDelta:
    """Compute ``desired - current`` and, if ``clear_existing``, ``current - desired``.

    Identifiers compare case-insensitively. ``to_add`` keeps the order of
    ``desired`` and ``to_remove`` the order of ``current``.
    """

    desired_ids = _unique(desired)
    current_ids = _unique(current)
    desired_keys = {_key(value) for value in desired_ids}
    current_keys = {_key(value) for value in current_ids}

    to_add = tuple(value for value in desired_ids if _key(value) not in current_keys)
    to_remove: tuple[str, ...] = ()
    if clear_existing:
        to_remove = tuple(value for value in current_ids if _key(value) not in desired_keys)
    return ReconciliationDelta(to_add=to_add, to_remove=to_remove)
