# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging

from ._errors import (
    AliasError,
    AmbiguousInitializer,
    InvalidAliasError,
    MemberNotFoundError,
    NamespaceFinalizedError,
    RoleConflictError,
    UnresolvedAliasTarget,
)
from .attribute import attribute
from .config import settings
from .member import Member, MemberKind, aliased_from, aliases_of, get_member
from .model import AliasModelMeta, Model, Role
from .namespace import ClassBuilder
from .registrar import register_alias
from .role import does_role
from .version import __version__

logger = logging.getLogger(__name__)
logger.setLevel(settings.ALIASES_LOG_LEVEL.upper())

__all__ = (
    "__version__",
    "Model",
    "Role",
    "AliasModelMeta",
    "ClassBuilder",
    "attribute",
    "register_alias",
    "does_role",
    "Member",
    "MemberKind",
    "get_member",
    "aliased_from",
    "aliases_of",
    "AliasError",
    "MemberNotFoundError",
    "UnresolvedAliasTarget",
    "AmbiguousInitializer",
    "RoleConflictError",
    "NamespaceFinalizedError",
    "InvalidAliasError",
)
