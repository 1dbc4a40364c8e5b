"""
Capability predicates for the records domain.

A user is a mapping shaped like a ``users`` row: ``id``, ``is_admin`` and
``roles`` (or the serialized ``roles_json``). Roles may be plain role ids
or role objects carrying an ``id``. Role ids for LEO and judge are passed
in by the caller; they come from configuration.

Every predicate is false for an absent user.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, FrozenSet, Mapping, Optional

from app.core.config import get_judge_role_id, get_leo_role_id

User = Mapping[str, Any]


def role_ids(user: Optional[User]) -> FrozenSet[str]:
    if not user:
        return frozenset()

    raw = user.get("roles")
    if raw is None:
        raw = user.get("roles_json")
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw or "[]")
        except ValueError:
            return frozenset()
    if not isinstance(raw, (list, tuple, set, frozenset)):
        return frozenset()

    out = set()
    for r in raw:
        if isinstance(r, Mapping):
            rid = r.get("id")
            if rid is not None:
                out.add(str(rid))
        elif r is not None:
            out.add(str(r))
    return frozenset(out)


def is_admin(user: Optional[User]) -> bool:
    if not user:
        return False
    return bool(user.get("is_admin"))


def _has_role(user: Optional[User], role_id: Optional[str]) -> bool:
    if not user:
        return False
    if is_admin(user):
        return True
    # an unconfigured role id grants nothing
    if not role_id:
        return False
    return str(role_id) in role_ids(user)


def has_leo_access(user: Optional[User], leo_role_id: Optional[str]) -> bool:
    return _has_role(user, leo_role_id)


def has_judge_access(user: Optional[User], judge_role_id: Optional[str]) -> bool:
    return _has_role(user, judge_role_id)


def is_owner(user: Optional[User], entity: Optional[Mapping[str, Any]]) -> bool:
    if not user or not entity:
        return False
    owner = entity.get("user_id")
    if owner is None or user.get("id") is None:
        return False
    return str(owner) == str(user.get("id"))


@dataclass(frozen=True)
class Principal:
    """Capabilities of the calling user, computed once per request."""

    user_id: str
    username: Optional[str]
    is_admin: bool
    has_leo: bool
    has_judge: bool

    @classmethod
    def from_user(
        cls,
        user: User,
        leo_role_id: Optional[str] = None,
        judge_role_id: Optional[str] = None,
    ) -> "Principal":
        if leo_role_id is None:
            leo_role_id = get_leo_role_id()
        if judge_role_id is None:
            judge_role_id = get_judge_role_id()
        return cls(
            user_id=str(user["id"]),
            username=user.get("username"),
            is_admin=is_admin(user),
            has_leo=has_leo_access(user, leo_role_id),
            has_judge=has_judge_access(user, judge_role_id),
        )

    def is_owner(self, entity: Optional[Mapping[str, Any]]) -> bool:
        return is_owner({"id": self.user_id}, entity)

    @property
    def is_law_enforcement(self) -> bool:
        return self.has_leo or self.has_judge

    def can_view(self, character: Mapping[str, Any]) -> bool:
        return self.is_owner(character) or self.is_law_enforcement

    def can_edit(self, character: Mapping[str, Any]) -> bool:
        return self.is_owner(character) or self.has_judge
