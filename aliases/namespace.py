# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""The class body namespace used while a model or role is being defined.

``AliasModelMeta.__prepare__`` returns a :class:`ClassBuilder`. The body
runs against it, so ``alias``, ``before``, ``after`` and ``around`` are
available as plain names and resolve members declared earlier in the body,
in composed roles, or in base classes. When the metaclass builds the class
the builder composes roles, is finalized, and hands a plain ``dict`` to
pydantic.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable
from typing import Any

from typing_extensions import override

from ._errors import NamespaceFinalizedError
from .attribute import AttributeSpec, expand_attribute
from .member import Member, MemberKind, lookup_member
from .modifiers import Modifier, ModifierKind, apply_modifier
from .registrar import register_alias
from .role import compose_roles, is_role, select_roles

__all__ = ("ClassBuilder", "linearize")

logger = logging.getLogger(__name__)


def linearize(bases: tuple[type, ...]) -> list[type]:
    """C3-merge the MROs of ``bases``, as ``type`` would for a new class."""
    seqs = [list(base.__mro__) for base in bases] + [list(bases)]
    result: list[type] = []
    while True:
        seqs = [seq for seq in seqs if seq]
        if not seqs:
            return result
        for seq in seqs:
            head = seq[0]
            if not any(head in other[1:] for other in seqs):
                break
        else:
            raise TypeError(
                "Cannot create a consistent method resolution order (MRO) "
                f"for bases {', '.join(b.__name__ for b in bases)}"
            )
        result.append(head)
        for seq in seqs:
            if seq[0] is head:
                del seq[0]


class ClassBuilder(dict):
    """Mutable member table for one class statement.

    Attributes:
        aliases: Alias declarations made in this namespace, alias -> source.
        attribute_aliases: Alias names of attributes declared here.
        modifiers: Modifiers deferred until composition (roles only).
    """

    def __init__(
        self,
        name: str,
        bases: tuple[type, ...] = (),
        roles: type | Iterable[type] = (),
        *,
        is_role: bool = False,
    ):
        super().__init__()
        self.name = name
        self.qualname = name
        self.bases = tuple(bases)
        self.roles = select_roles(roles, self.bases)
        self.is_role = is_role
        self.finalized = False
        self.aliases: dict[str, str] = {}
        self.attribute_aliases: dict[str, tuple[str, ...]] = {}
        self.modifiers: list[Modifier] = []
        self._mro = linearize(self.effective_bases)
        self._dsl: dict[str, Callable[..., Any]] = {
            "alias": functools.partial(register_alias, self),
            "before": self._modifier(ModifierKind.BEFORE),
            "after": self._modifier(ModifierKind.AFTER),
            "around": self._modifier(ModifierKind.AROUND),
        }
        for key, value in self._dsl.items():
            value.__builder__ = self
            dict.__setitem__(self, key, value)

    @classmethod
    def for_bases(
        cls, name: str, bases: tuple[type, ...], roles=()
    ) -> ClassBuilder:
        return cls(
            name, bases, roles, is_role=any(is_role(base) for base in bases)
        )

    @property
    def effective_bases(self) -> tuple[type, ...]:
        return (*self.roles, *self.bases)

    @override
    def __setitem__(self, key: str, value: Any) -> None:
        self._check_open(key)
        if key == "__qualname__":
            self.qualname = value
        if isinstance(value, Modifier):
            # already applied or recorded when the decorator ran
            return
        if isinstance(value, AttributeSpec):
            expand_attribute(self, key, value)
            return
        self.aliases.pop(key, None)
        super().__setitem__(key, value)

    def update_from(self, namespace: dict[str, Any]) -> None:
        """Copy a namespace prepared elsewhere, minus another builder's helpers.

        ``pydantic.create_model`` merges the result of ``__prepare__`` into a
        plain dict before calling the metaclass.
        """
        for key, value in namespace.items():
            if isinstance(getattr(value, "__builder__", None), ClassBuilder):
                continue
            self[key] = value

    def install(self, key: str, value: Any) -> None:
        """Bind ``key`` without the body-assignment hooks."""
        self._check_open(key)
        super().__setitem__(key, value)

    def _check_open(self, key: str) -> None:
        if self.finalized:
            raise NamespaceFinalizedError(
                f"Cannot set {key!r} on {self.qualname}: class is already built",
                details={"namespace": self.qualname, "name": key},
            )

    def _is_dsl(self, key: str) -> bool:
        return key in self._dsl and dict.get(self, key) is self._dsl[key]

    def _modifier(self, kind: ModifierKind):
        def declare(*names: str):
            if not names:
                raise TypeError(f"{kind.value}() needs at least one method name")

            def decorator(func):
                modifier = Modifier(kind, names, func)
                if self.is_role:
                    self.modifiers.append(modifier)
                else:
                    apply_modifier(self, modifier)
                return modifier

            return decorator

        declare.__name__ = kind.value
        return declare

    def defined_names(self) -> set[str]:
        """Names bound directly by the body, including bare annotations."""
        names = {key for key in self if not self._is_dsl(key)}
        annotations = dict.get(self, "__annotations__")
        if isinstance(annotations, dict):
            names.update(annotations)
        return names

    def find_member(self, name: str) -> Member | None:
        """Resolve ``name`` as the finished class would, as of now."""
        annotations = dict.get(self, "__annotations__")
        if isinstance(annotations, dict) and name in annotations:
            # an annotated name is a field, whatever its default is
            return Member(
                name, MemberKind.ATTRIBUTE, dict.get(self, name), self.qualname
            )
        if name in self and not self._is_dsl(name):
            value = self[name]
            # plain values in a model body are field defaults
            return Member.from_value(
                name, value, owner=self.qualname
            ) or Member(name, MemberKind.ATTRIBUTE, value, self.qualname)
        return lookup_member(self._mro, name)

    def inherited_attribute_aliases(self) -> dict[str, tuple[str, ...]]:
        """Attribute aliases in effect for the class being built.

        A field redeclared in the body without ``attribute()`` loses the
        aliases it inherited, since its new ``FieldInfo`` no longer accepts
        them.
        """
        redeclared = self.defined_names()
        merged: dict[str, tuple[str, ...]] = {}
        for klass in reversed(self._mro):
            for name, aliases in klass.__dict__.get(
                "__attribute_aliases__", {}
            ).items():
                if name not in redeclared:
                    merged[name] = aliases
        merged.update(self.attribute_aliases)
        return merged

    def finalize(self) -> dict[str, Any]:
        """Compose roles, close the builder and return the class body."""
        compose_roles(self)
        body = {k: v for k, v in self.items() if not self._is_dsl(k)}
        body["__alias_declarations__"] = dict(self.aliases)
        body["__attribute_aliases__"] = self.inherited_attribute_aliases()
        body["__role_modifiers__"] = tuple(self.modifiers) if self.is_role else ()
        body["__roles__"] = self.roles
        body["__is_role__"] = self.is_role or body.get("__is_role__") is True
        self.finalized = True
        logger.debug(
            "Built %s with %d alias(es)", self.qualname, len(self.aliases)
        )
        return body
