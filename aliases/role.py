# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Role composition.

Roles are composed by prepending them to a consumer's bases, so the
consumer body wins over its roles and roles win over superclasses. This
module selects the roles to prepend, checks them for conflicts, and
re-applies their alias declarations and deferred modifiers against the
consumer's namespace.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from ._errors import RoleConflictError
from .member import Member
from .modifiers import Modifier, apply_modifier
from .registrar import register_alias

if TYPE_CHECKING:
    from .namespace import ClassBuilder

__all__ = (
    "is_role",
    "does_role",
    "select_roles",
    "role_chain",
    "role_members",
    "role_aliases",
    "role_modifiers",
    "find_conflicts",
    "compose_roles",
)

logger = logging.getLogger(__name__)


def is_role(obj: Any) -> bool:
    return isinstance(obj, type) and bool(obj.__dict__.get("__is_role__"))


def does_role(obj: Any, role: type) -> bool:
    """Whether ``role`` was composed into ``obj`` (a class or an instance)."""
    cls = obj if isinstance(obj, type) else type(obj)
    return is_role(role) and role in cls.__mro__


def select_roles(
    roles: type | Iterable[type], bases: tuple[type, ...]
) -> tuple[type, ...]:
    """Validate ``roles`` and drop those already reachable another way.

    A role is dropped when a base already composed it, or when another
    selected role composed it; keeping either would make the MRO
    inconsistent.
    """
    if isinstance(roles, type):
        roles = (roles,)
    roles = tuple(dict.fromkeys(roles))
    for role in roles:
        if not is_role(role):
            raise TypeError(f"{role!r} is not a role")

    inherited = {klass for base in bases for klass in base.__mro__}
    return tuple(
        role
        for role in roles
        if role not in inherited
        and not any(other is not role and role in other.__mro__ for other in roles)
    )


def role_chain(role: type) -> Iterator[type]:
    """Yield ``role`` and the roles it is built from, in MRO order."""
    for klass in role.__mro__:
        if is_role(klass):
            yield klass


def _is_framework_name(name: str) -> bool:
    return name.startswith("__") or hasattr(BaseModel, name)


def _declaring_role(chain: list[type], name: str) -> type:
    for klass in chain:
        if name in inspect.get_annotations(klass):
            return klass
    return chain[0]


def role_members(role: type) -> dict[str, Any]:
    """Map each name a role provides to what identifies its definition.

    Methods and accessors are identified by object identity, aliases by
    their source name, fields by the role that declares them.
    """
    chain = list(role_chain(role))
    provided: dict[str, Any] = {}
    for klass in chain:
        for name, value in klass.__dict__.items():
            if name in provided or _is_framework_name(name):
                continue
            member = Member.from_value(name, value, owner=klass.__qualname__)
            if member is None:
                continue
            if member.is_alias:
                provided[name] = ("alias", member.aliased_from)
            else:
                provided[name] = ("object", id(value))
    for name in role.__dict__.get("__pydantic_fields__") or {}:
        if name not in provided:
            provided[name] = ("attribute", _declaring_role(chain, name))
    return provided


def role_aliases(role: type) -> dict[str, str]:
    declared: dict[str, str] = {}
    for klass in reversed(list(role_chain(role))):
        declared.update(klass.__dict__.get("__alias_declarations__", {}))
    return declared


def role_modifiers(roles: Iterable[type]) -> list[Modifier]:
    seen: list[Modifier] = []
    for role in roles:
        for klass in reversed(list(role_chain(role))):
            for modifier in klass.__dict__.get("__role_modifiers__", ()):
                if modifier not in seen:
                    seen.append(modifier)
    return seen


def find_conflicts(
    roles: tuple[type, ...], defined: Iterable[str] = ()
) -> dict[str, tuple[type, ...]]:
    """Return names provided differently by two or more of ``roles``.

    Names in ``defined`` are resolved by the consumer and never conflict.
    """
    defined = set(defined)
    providers: dict[str, dict[Any, list[type]]] = {}
    for role in roles:
        for name, key in role_members(role).items():
            providers.setdefault(name, {}).setdefault(key, []).append(role)

    conflicts = {}
    for name, by_key in providers.items():
        if len(by_key) > 1 and name not in defined:
            conflicts[name] = tuple(r for rs in by_key.values() for r in rs)
    return conflicts


def compose_roles(namespace: ClassBuilder) -> None:
    """Apply the namespace's roles once the consumer body has run."""
    roles = namespace.roles
    if not roles:
        return

    conflicts = find_conflicts(roles, namespace.defined_names())
    if conflicts:
        name, culprits = next(iter(conflicts.items()))
        raise RoleConflictError.for_name(
            name, (r.__qualname__ for r in culprits), namespace.qualname
        )

    for role in roles:
        for alias_name, source_name in role_aliases(role).items():
            if alias_name in namespace:
                continue
            register_alias(namespace, alias_name, source_name)

    if not namespace.is_role:
        for modifier in role_modifiers(roles):
            apply_modifier(namespace, modifier)

    logger.debug(
        "Composed %s into %s",
        ", ".join(r.__qualname__ for r in roles),
        namespace.qualname,
    )
