"""``{parameter:Name}`` placeholder substitution for outgoing text payloads."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)

_PARAMETER_TOKEN = re.compile(r"\{parameter:(?P<name>[^{}]+)\}", re.IGNORECASE)


@dataclass(slots=True)
class ParameterTokenResolver:
    """Replace ``{parameter:Name}`` tokens with the matching parameter value.

    Parameter names match case-insensitively. Tokens naming an unknown
    parameter are left in place.
    """

    parameters: Mapping[str, str]
    _values: dict[str, str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._values = {name.casefold(): value for name, value in self.parameters.items()}

    def __call__(self, value: str) -> str:
        return _PARAMETER_TOKEN.sub(self._replace, value)

    def _replace(self, match: re.Match[str]) -> str:
        name = match.group("name").strip()
        replacement = self._values.get(name.casefold())
        if replacement is None:
            log.warning("No value for template parameter %r", name)
            return match.group(0)
        return replacement
