"""
Named optional parameters and the per-operation groups that permit them.

Every catalog operation declares a ParamGroup. The keyword arguments a
caller passes are checked against that group as the first step of the call,
so a parameter the operation does not understand is rejected before any URL
is built or any request is sent:

    GET_PARAMS.check({"consistency": Consistency.STALE})  # accepted
    GET_PARAMS.check({"tag": "prod"})  # raises ParameterContractError
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from consulcat.core.errors import ParameterContractError
from consulcat.datastructures.type_aliases import (
    ConsulIndex,
    DurationMilliseconds,
    DurationSeconds,
)


class Consistency(Enum):
    """Read consistency mode requested from the catalog servers."""

    DEFAULT = "default"
    STALE = "stale"
    CONSISTENT = "consistent"


@dataclass(frozen=True, slots=True)
class BlockFor:
    """Blocking query: wait up to ``wait`` seconds for data past ``index``."""

    wait: DurationSeconds
    index: ConsulIndex

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise ValueError(f"index must be an integer, got {self.index!r}")
        if self.index < 0:
            raise ValueError(f"index must be non-negative, got {self.index}")
        if self.wait < 0:
            raise ValueError(f"wait must be non-negative, got {self.wait}")
        object.__setattr__(self, "wait", float(self.wait))

    @property
    def wait_ms(self) -> DurationMilliseconds:
        return int(round(self.wait * 1000))


T = TypeVar("T")

_MISSING: Any = object()


@dataclass(frozen=True, slots=True)
class Param(Generic[T]):
    """A named, typed optional parameter with a default."""

    name: str
    value_type: type[T]
    default: T | None = None

    def validate(self, value: object) -> T:
        if not isinstance(value, self.value_type):
            raise ParameterContractError(
                f"Parameter '{self.name}' expects {self.value_type.__name__}, "
                f"got {type(value).__name__}"
            )
        return value

    def __call__(self, value: T) -> tuple[str, T]:
        """Build a ``(name, value)`` pair for the pair form of ``check``."""
        return self.name, self.validate(value)


@dataclass(frozen=True, slots=True)
class ParamGroup:
    """A closed list of parameters one operation family accepts."""

    name: str
    params: tuple[Param[Any], ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for param in self.params:
            if param.name in seen:
                raise ValueError(
                    f"Parameter '{param.name}' listed twice in group '{self.name}'"
                )
            seen.add(param.name)

    @property
    def names(self) -> frozenset[str]:
        return frozenset(param.name for param in self.params)

    def extend(self, name: str, *params: Param[Any]) -> ParamGroup:
        return ParamGroup(name=name, params=self.params + params)

    def lookup(self, name: str) -> Param[Any] | None:
        for param in self.params:
            if param.name == name:
                return param
        return None

    def check(
        self,
        supplied: Mapping[str, object] | Iterable[tuple[str, object]] = (),
    ) -> dict[str, Any]:
        """Validate supplied parameters against this group.

        Args:
            supplied: Keyword arguments as a mapping, or ``(name, value)``
                pairs such as those built by calling a ``Param``.

        Returns:
            A new dict of validated values keyed by parameter name.

        Raises:
            ParameterContractError: If a parameter is not in this group, is
                given twice, or has a value of the wrong type.
        """
        pairs = supplied.items() if isinstance(supplied, Mapping) else supplied
        checked: dict[str, Any] = {}
        for name, value in pairs:
            param = self.lookup(name)
            if param is None:
                allowed = ", ".join(sorted(self.names)) or "none"
                raise ParameterContractError(
                    f"Parameter '{name}' is not accepted by '{self.name}' "
                    f"(allowed: {allowed})"
                )
            if name in checked:
                raise ParameterContractError(
                    f"Parameter '{name}' supplied more than once to '{self.name}'"
                )
            checked[name] = param.validate(value)
        return checked


def get_param(
    params: Mapping[str, Any], descriptor: Param[T], default: Any = _MISSING
) -> T | None:
    """Return the supplied value for ``descriptor``, else its default."""
    if descriptor.name in params:
        return params[descriptor.name]
    if default is _MISSING:
        return descriptor.default
    return default


consistency: Param[Consistency] = Param(
    "consistency", Consistency, Consistency.DEFAULT
)
block_for: Param[BlockFor] = Param("block_for", BlockFor)
tag: Param[str] = Param("tag", str)

NO_PARAMS = ParamGroup("none")
CATALOG_PARAMS = ParamGroup("catalog", (consistency,))
GET_PARAMS = ParamGroup("get", (consistency, block_for))
SERVICE_TAG_PARAMS = GET_PARAMS.extend("get_by_tag", tag)
