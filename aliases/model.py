# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic._internal._model_construction import (
    ModelMetaclass,
    build_lenient_weakvaluedict,
)
from pydantic._internal._typing_extra import parent_frame_namespace

from .attribute import check_initializers
from .namespace import ClassBuilder

__all__ = ("AliasModelMeta", "Model", "Role")

logger = logging.getLogger(__name__)


class AliasModelMeta(ModelMetaclass):
    """Pydantic model metaclass with a class body builder.

    Accepts a ``roles`` class keyword listing the roles to compose.
    """

    @classmethod
    def __prepare__(mcs, name, bases, /, roles=(), **kwargs):
        return ClassBuilder.for_bases(name, bases, roles)

    def __new__(
        mcs,
        name,
        bases,
        namespace,
        /,
        roles=(),
        __pydantic_reset_parent_namespace__: bool = True,
        **kwargs,
    ):
        if not isinstance(namespace, ClassBuilder):
            # created without a class statement, e.g. pydantic.create_model
            builder = ClassBuilder.for_bases(name, bases, roles)
            builder.update_from(namespace)
            namespace = builder
        body = namespace.finalize()
        if __pydantic_reset_parent_namespace__:
            # the defining scope is one frame further out than pydantic looks
            body["__pydantic_parent_namespace__"] = build_lenient_weakvaluedict(
                parent_frame_namespace(parent_depth=2)
            )
        cls = super().__new__(
            mcs,
            name,
            namespace.effective_bases,
            body,
            __pydantic_reset_parent_namespace__=False,
            **kwargs,
        )
        if namespace.roles:
            logger.debug(
                "%s does %s",
                cls.__qualname__,
                ", ".join(r.__qualname__ for r in namespace.roles),
            )
        return cls

    def __call__(cls, *args: Any, **kwargs: Any):
        if cls.__dict__.get("__is_role__"):
            raise TypeError(
                f"Role {cls.__qualname__} cannot be instantiated; compose it "
                "into a model with roles=[...]"
            )
        return super().__call__(*args, **kwargs)


class Model(BaseModel, metaclass=AliasModelMeta):
    """Base model whose body may declare aliases, modifiers and roles.

    Example:
        >>> class Parent(Model):
        ...     def method1(self):
        ...         return "A"
        ...
        ...     alias("method2", "method1")
        >>> Parent().method2()
        'A'
    """

    @model_validator(mode="before")
    @classmethod
    def validate_alias_initializers(cls, data: Any) -> Any:
        return check_initializers(cls, data)


class Role(Model):
    """Base class for roles: reusable members composed with ``roles=[...]``."""

    __is_role__ = True
