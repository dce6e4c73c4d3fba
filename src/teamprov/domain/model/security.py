"""Team security: owners and members of the backing group."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .enums import SecurityRole


@dataclass(slots=True, eq=False, kw_only=True)
class Security:
    """Desired owners and members, identified by user principal name.

    Two values compare equal when both collections hold the same principals,
    regardless of order. The clear flags are policy for the reconciler and do not
    take part in equality.

    Equality compares names exactly, so ``Alice@contoso.com`` and
    ``alice@contoso.com`` make two values unequal even though
    :meth:`distinct_principals` and the reconciler treat them as one principal.
    Equality describes the declared value; matching against the directory is
    case-insensitive.
    """

    owners: list[str] = field(default_factory=list[str])
    members: list[str] = field(default_factory=list[str])
    clear_existing_owners: bool = False
    clear_existing_members: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Security):
            return NotImplemented
        return Counter(self.owners) == Counter(other.owners) and Counter(
            self.members
        ) == Counter(other.members)

    def __hash__(self) -> int:
        return hash((frozenset(self.owners), frozenset(self.members)))

    def principals(self, role: SecurityRole) -> list[str]:
        return self.owners if role is SecurityRole.OWNERS else self.members

    def clear_existing(self, role: SecurityRole) -> bool:
        if role is SecurityRole.OWNERS:
            return self.clear_existing_owners
        return self.clear_existing_members

    def distinct_principals(self) -> list[str]:
        """Owners then members, de-duplicated case-insensitively, first spelling wins."""

        seen: set[str] = set()
        distinct: list[str] = []
        for name in [*self.owners, *self.members]:
            key = name.casefold()
            if key in seen:
                continue
            seen.add(key)
            distinct.append(name)
        return distinct
