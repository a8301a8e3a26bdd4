from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class Metadata:
    """Value object for free-form key/value data attached to a payment.

    The input is deep-copied and exposed through a read-only mapping, so
    neither the caller nor a reader can change it after construction.
    Equality is structural and the hash is taken over a frozen copy of the
    data, so equal Metadata hash equal. Missing metadata is an empty
    Metadata, never None.
    """

    props: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "props", MappingProxyType(copy.deepcopy(dict(self.props))))

    @classmethod
    def create(cls, props: Mapping[str, Any] | None = None) -> Metadata:
        """Build Metadata from an arbitrary mapping; None yields empty metadata."""
        return cls(props=props or {})

    @property
    def is_empty(self) -> bool:
        return not self.props

    def get(self, key: str, default: Any = None) -> Any:
        return self.props.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Return a detached copy of the data for export or persistence."""
        return copy.deepcopy(dict(self.props))

    def __len__(self) -> int:
        return len(self.props)

    def __contains__(self, key: object) -> bool:
        return key in self.props

    def __hash__(self) -> int:
        return hash(_freeze(self.props))

    def __copy__(self) -> Metadata:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Metadata:
        # mappingproxy cannot be deep-copied; the instance is immutable anyway
        return self


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return frozenset((key, _freeze(item)) for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(item) for item in value)
    return value
