# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Members: the named methods, accessors and fields of a class or role.

A :class:`Member` is a read-only view over whatever object is bound to a
name. Alias members are ordinary functions or properties tagged with the
name they forward to, so ``aliased_from`` is available on every member
without a dedicated method type.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic.fields import FieldInfo

__all__ = (
    "ALIASED_FROM",
    "MemberKind",
    "Member",
    "AliasAccessor",
    "make_forwarder",
    "lookup_member",
    "get_member",
    "aliased_from",
    "aliases_of",
)

ALIASED_FROM = "__aliased_from__"


class MemberKind(str, Enum):
    """What a member name is bound to."""

    METHOD = "method"
    ACCESSOR = "accessor"
    ATTRIBUTE = "attribute"


@dataclass(frozen=True, slots=True)
class Member:
    name: str
    kind: MemberKind
    body: Any = None
    owner: str | None = None
    aliased_from: str | None = None

    @property
    def is_alias(self) -> bool:
        return self.aliased_from is not None

    @classmethod
    def from_value(
        cls, name: str, value: Any, owner: str | None = None
    ) -> Member | None:
        """Describe ``value`` as a member, or return None for plain data."""
        from .attribute import AttributeSpec

        if isinstance(value, AliasAccessor):
            return cls(
                name, MemberKind.ACCESSOR, value, owner, value.aliased_from
            )
        if isinstance(value, property):
            return cls(name, MemberKind.ACCESSOR, value, owner)
        if isinstance(value, (FieldInfo, AttributeSpec)):
            return cls(name, MemberKind.ATTRIBUTE, value, owner)
        if isinstance(value, (classmethod, staticmethod)):
            source = getattr(value.__func__, ALIASED_FROM, None)
            return cls(name, MemberKind.METHOD, value, owner, source)
        if callable(value) and not isinstance(value, type):
            source = getattr(value, ALIASED_FROM, None)
            return cls(name, MemberKind.METHOD, value, owner, source)
        return None


class AliasAccessor(property):
    """Property forwarding reads, writes and deletes to another attribute."""

    def __init__(self, source_name: str, doc: str | None = None):
        def fget(obj):
            return getattr(obj, source_name)

        def fset(obj, value):
            setattr(obj, source_name, value)

        def fdel(obj):
            delattr(obj, source_name)

        super().__init__(fget, fset, fdel, doc or f"Alias of `{source_name}`.")
        self.aliased_from = source_name


def make_forwarder(
    alias_name: str, source_name: str, owner: str | None = None
) -> Callable[..., Any]:
    """Build a method that dispatches to ``source_name`` on its receiver.

    The target is looked up on every call, so subclasses overriding
    ``source_name`` are honoured through the alias as well.
    """

    def forwarder(self, *args, **kwargs):
        return getattr(self, source_name)(*args, **kwargs)

    forwarder.__name__ = alias_name
    forwarder.__qualname__ = f"{owner}.{alias_name}" if owner else alias_name
    forwarder.__doc__ = f"Alias of `{source_name}`."
    setattr(forwarder, ALIASED_FROM, source_name)
    return forwarder


def lookup_member(mro: Iterable[type], name: str) -> Member | None:
    """Find ``name`` along ``mro``: class dictionaries first, then fields."""
    mro = tuple(mro)
    for klass in mro:
        if name in klass.__dict__:
            member = Member.from_value(
                name, klass.__dict__[name], owner=klass.__qualname__
            )
            if member is not None:
                return member
    for klass in mro:
        fields = klass.__dict__.get("__pydantic_fields__") or {}
        if name in fields:
            return Member(
                name, MemberKind.ATTRIBUTE, fields[name], klass.__qualname__
            )
    return None


def get_member(cls: type, name: str) -> Member | None:
    return lookup_member(cls.__mro__, name)


def aliased_from(obj: Any, name: str) -> str | None:
    """Return the source name of alias ``name`` on a class or instance."""
    cls = obj if isinstance(obj, type) else type(obj)
    member = get_member(cls, name)
    return member.aliased_from if member is not None else None


def aliases_of(cls: type) -> dict[str, str]:
    declared: dict[str, str] = {}
    for klass in reversed(cls.__mro__):
        declared.update(klass.__dict__.get("__alias_declarations__", {}))
    return {
        name: source
        for name, source in declared.items()
        if aliased_from(cls, name) == source
    }
