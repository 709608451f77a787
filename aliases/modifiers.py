# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from types import FunctionType
from typing import TYPE_CHECKING, Any

from ._errors import MemberNotFoundError

if TYPE_CHECKING:
    from .namespace import ClassBuilder

__all__ = ("ModifierKind", "Modifier", "wrap_method", "apply_modifier")

logger = logging.getLogger(__name__)


class ModifierKind(str, Enum):
    BEFORE = "before"
    AFTER = "after"
    AROUND = "around"


@dataclass(frozen=True, slots=True)
class Modifier:
    """A before/after/around hook declared against one or more names."""

    kind: ModifierKind
    names: tuple[str, ...]
    func: Callable[..., Any]


def wrap_method(
    kind: ModifierKind, original: FunctionType, func: Callable[..., Any]
) -> FunctionType:
    """Return ``original`` wrapped by ``func`` according to ``kind``.

    ``functools.wraps`` copies the original's ``__dict__``, so an alias
    keeps its ``__aliased_from__`` tag when it is wrapped.
    """
    if kind is ModifierKind.BEFORE:

        @functools.wraps(original)
        def wrapped(self, *args, **kwargs):
            func(self, *args, **kwargs)
            return original(self, *args, **kwargs)

    elif kind is ModifierKind.AFTER:

        @functools.wraps(original)
        def wrapped(self, *args, **kwargs):
            result = original(self, *args, **kwargs)
            func(self, *args, **kwargs)
            return result

    else:

        @functools.wraps(original)
        def wrapped(self, *args, **kwargs):
            return func(self, original.__get__(self, type(self)), *args, **kwargs)

    return wrapped


def apply_modifier(namespace: ClassBuilder, modifier: Modifier) -> None:
    """Wrap every target of ``modifier`` and install the result in ``namespace``.

    Targets resolve through the namespace's lookup view, so inherited and
    role-provided methods can be modified; the wrapper always lands in the
    namespace itself.
    """
    for name in modifier.names:
        member = namespace.find_member(name)
        if member is None:
            raise MemberNotFoundError.for_member(name, namespace.qualname)
        if not isinstance(member.body, FunctionType):
            raise TypeError(
                f"Cannot add a {modifier.kind.value} modifier to {name!r}: "
                f"{type(member.body).__name__} is not a plain method"
            )
        namespace.install(
            name, wrap_method(modifier.kind, member.body, modifier.func)
        )
        logger.debug(
            "Applied %s modifier to %s.%s",
            modifier.kind.value,
            namespace.qualname,
            name,
        )
