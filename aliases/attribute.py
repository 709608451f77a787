# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Aliased attributes.

``attribute(alias=...)`` declares a pydantic field together with extra
accessor names. The field accepts every alias as a constructor key, and
each alias is installed as an accessor forwarding to the field.

Example:
    >>> class Host(Model):
    ...     ip_addr: str = attribute(alias=["ipAddr", "ip"])
    >>> Host(ip="1.2.3.4").ipAddr
    '1.2.3.4'
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import AliasChoices, Field
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined

from . import config
from ._errors import AmbiguousInitializer, InvalidAliasError
from .registrar import register_alias

if TYPE_CHECKING:
    from .namespace import ClassBuilder

__all__ = (
    "AttributeSpec",
    "attribute",
    "normalize_aliases",
    "expand_attribute",
    "check_initializers",
)


@dataclass(frozen=True, slots=True)
class AttributeSpec:
    """Field declaration carrying alias names, expanded by the class builder."""

    default: Any = PydanticUndefined
    aliases: tuple[str, ...] = ()
    field_kwargs: dict[str, Any] = field(default_factory=dict)

    def aliases_for(self, name: str) -> tuple[str, ...]:
        return tuple(a for a in self.aliases if a != name)

    def to_field(self, name: str) -> FieldInfo:
        return Field(
            self.default,
            validation_alias=AliasChoices(name, *self.aliases_for(name)),
            **self.field_kwargs,
        )


def normalize_aliases(alias: str | Sequence[str] | None) -> tuple[str, ...]:
    if alias is None:
        return ()
    names = [alias] if isinstance(alias, str) else list(alias)
    out: list[str] = []
    for name in names:
        if not isinstance(name, str) or not name.isidentifier():
            raise InvalidAliasError.for_name(name, "not an identifier")
        if name not in out:
            out.append(name)
    return tuple(out)


def attribute(
    default: Any = PydanticUndefined,
    *,
    alias: str | Sequence[str] | None = None,
    **field_kwargs: Any,
) -> Any:
    """Declare a model field reachable under additional names.

    Args:
        default: Field default; omit for a required field.
        alias: One alias name or a sequence of them.
        **field_kwargs: Passed through to ``pydantic.Field``.
    """
    if "validation_alias" in field_kwargs:
        raise TypeError(
            "attribute() builds validation_alias from 'alias'; "
            "do not pass both"
        )
    return AttributeSpec(default, normalize_aliases(alias), field_kwargs)


def expand_attribute(
    namespace: ClassBuilder, name: str, spec: AttributeSpec
) -> FieldInfo:
    info = spec.to_field(name)
    namespace.install(name, info)
    aliases = spec.aliases_for(name)
    namespace.attribute_aliases[name] = aliases
    for alias_name in aliases:
        register_alias(namespace, alias_name, name)
    return info


def check_initializers(cls: type, data: Any) -> Any:
    """Reject constructor input giving one attribute different values.

    Equal values under several equivalent keys are accepted; pydantic then
    binds the primary name first, then aliases in declaration order.
    """
    if not isinstance(data, dict) or not config.settings.rejects_conflicts:
        return data
    for name, aliases in getattr(cls, "__attribute_aliases__", {}).items():
        supplied = [key for key in (name, *aliases) if key in data]
        if len(supplied) < 2:
            continue
        first = data[supplied[0]]
        for key in supplied[1:]:
            value = data[key]
            if value is not first and value != first:
                raise AmbiguousInitializer.for_keys(
                    cls.__name__, name, supplied
                )
    return data
