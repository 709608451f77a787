# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING, Any

from . import config
from ._errors import (
    InvalidAliasError,
    NamespaceFinalizedError,
    UnresolvedAliasTarget,
)
from .member import AliasAccessor, Member, MemberKind, make_forwarder

if TYPE_CHECKING:
    from .namespace import ClassBuilder

__all__ = ("register_alias", "build_alias")

logger = logging.getLogger(__name__)


def build_alias(
    member: Member, alias_name: str, source_name: str, owner: str | None = None
) -> Any:
    """Create the forwarding object installed under ``alias_name``."""
    if member.kind is not MemberKind.METHOD:
        return AliasAccessor(source_name)
    forwarder = make_forwarder(alias_name, source_name, owner)
    # static and class sources are callable on the class itself
    if isinstance(member.body, (classmethod, staticmethod)):
        return classmethod(forwarder)
    return forwarder


def _warn_legacy_order(alias_name: str, source_name: str) -> None:
    warnings.warn(
        f"alias({alias_name!r}, {source_name!r}) is deprecated, "
        f"please use alias({source_name!r}, {alias_name!r})",
        DeprecationWarning,
        stacklevel=3,
    )


def register_alias(
    namespace: ClassBuilder, alias_name: str, source_name: str
) -> Member:
    """Install ``alias_name`` in ``namespace`` as a forwarder to ``source_name``.

    Args:
        namespace: The builder of a class or role whose body is running.
        alias_name: The new name.
        source_name: An existing method, accessor or field visible from
            ``namespace``.

    Returns:
        The installed alias member.

    Raises:
        UnresolvedAliasTarget: If neither name resolves.
        InvalidAliasError: If both names are the same.
        NamespaceFinalizedError: If the class has already been built.
    """
    if isinstance(namespace, type) or namespace.finalized:
        name = getattr(namespace, "__qualname__", None) or namespace.qualname
        raise NamespaceFinalizedError(
            f"Cannot alias {alias_name!r} on {name}: class is already built",
            details={"namespace": name, "alias_name": alias_name},
        )
    if alias_name == source_name:
        raise InvalidAliasError.for_name(alias_name, "an alias cannot name itself")

    member = namespace.find_member(source_name)
    if member is None:
        policy = config.settings.ALIASES_LEGACY_ORDER
        legacy = None if policy == "error" else namespace.find_member(alias_name)
        if legacy is not None:
            if policy == "warn":
                _warn_legacy_order(alias_name, source_name)
            alias_name, source_name, member = source_name, alias_name, legacy
    if member is None:
        raise UnresolvedAliasTarget.for_member(source_name, namespace.qualname)

    if alias_name in namespace:
        logger.debug(
            "Replacing %s.%s with an alias of %s",
            namespace.qualname,
            alias_name,
            source_name,
        )
    body = build_alias(member, alias_name, source_name, namespace.qualname)
    namespace.install(alias_name, body)
    namespace.aliases[alias_name] = source_name
    logger.debug(
        "Aliased %s.%s -> %s", namespace.qualname, alias_name, source_name
    )
    return Member.from_value(alias_name, body, owner=namespace.qualname)
