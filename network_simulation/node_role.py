from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping


class NodeRole(Enum):
    INFRASTRUCTURE = 1  # base stations / core nodes
    LEAF = 2  # user devices
    OTHER = 3

    @staticmethod
    def parse(raw: Any, *, path: str) -> "NodeRole":
        if not isinstance(raw, str):
            raise ValueError(f"Expected string at '{path}', got {type(raw).__name__}")
        v = raw.strip().lower()
        if v in {"infrastructure", "infra", "core"}:
            return NodeRole.INFRASTRUCTURE
        if v in {"leaf", "user"}:
            return NodeRole.LEAF
        if v == "other":
            return NodeRole.OTHER
        raise ValueError(f"Invalid node role at '{path}': {raw!r}. Valid: infrastructure | leaf | other")


DEFAULT_GROUP_ROLES: Dict[str, NodeRole] = {
    "core": NodeRole.INFRASTRUCTURE,
    "bs": NodeRole.INFRASTRUCTURE,
    "user": NodeRole.LEAF,
}


class RoleMap:
    """Resolves free-form simulation group tags to node roles.

    Unknown tags resolve to NodeRole.OTHER.
    """

    def __init__(self, group_roles: Mapping[str, NodeRole] | None = None):
        self._group_roles: Dict[str, NodeRole] = dict(DEFAULT_GROUP_ROLES if group_roles is None else group_roles)

    @staticmethod
    def from_mapping(d: Mapping[str, Any] | None) -> "RoleMap":
        if d is None:
            return RoleMap()
        if not isinstance(d, Mapping):
            raise ValueError("Expected mapping for report.roles")
        return RoleMap({str(tag): NodeRole.parse(role, path=f"report.roles.{tag}") for tag, role in d.items()})

    def role_of(self, group: str) -> NodeRole:
        return self._group_roles.get(group, NodeRole.OTHER)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RoleMap) and self._group_roles == other._group_roles

    def __hash__(self) -> int:
        return hash(frozenset(self._group_roles.items()))

    def __repr__(self) -> str:
        return f"RoleMap({ {k: v.name.lower() for k, v in self._group_roles.items()} })"
