# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from collections.abc import Iterable
from typing import Any, ClassVar

__all__ = (
    "AliasError",
    "MemberNotFoundError",
    "UnresolvedAliasTarget",
    "AmbiguousInitializer",
    "RoleConflictError",
    "NamespaceFinalizedError",
    "InvalidAliasError",
)


class AliasError(Exception):
    default_message: ClassVar[str] = "Alias error"
    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause:
            self.__cause__ = cause  # preserves traceback
        self.message = message or self.default_message
        self.details = details or {}

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }
        if include_cause and (cause := self.get_cause()):
            data["cause"] = repr(cause)
        return data

    def get_cause(self) -> Exception | None:
        """Get the cause of this error, if any."""
        return self.__cause__ if hasattr(self, "__cause__") else None


class MemberNotFoundError(AliasError):
    """Raised when a named member cannot be found in a namespace."""

    default_message = "Member not found"
    __slots__ = ()

    @classmethod
    def for_member(cls, name: str, namespace: str | None = None):
        where = f" in {namespace}" if namespace else ""
        return cls(
            f"The method {name!r} was not found{where}",
            details={"name": name, "namespace": namespace},
        )


class UnresolvedAliasTarget(MemberNotFoundError):
    """Raised when the source of an alias declaration does not exist."""

    default_message = "Cannot find method to alias"
    __slots__ = ()

    @classmethod
    def for_member(cls, name: str, namespace: str | None = None):
        return cls(
            f"Cannot find method {name} to alias",
            details={"source_name": name, "namespace": namespace},
        )

    @property
    def source_name(self) -> str | None:
        return self.details.get("source_name")


class AmbiguousInitializer(AliasError):
    """Raised when equivalent constructor keys carry different values."""

    default_message = "Conflicting initial values for one attribute"
    __slots__ = ()

    @classmethod
    def for_keys(cls, model: str, attribute: str, keys: Iterable[str]):
        keys = tuple(keys)
        return cls(
            f"{model}.{attribute} was given conflicting values through "
            f"{', '.join(repr(k) for k in keys)}",
            details={"model": model, "attribute": attribute, "keys": keys},
        )


class RoleConflictError(AliasError):
    """Raised when composed roles provide the same name differently."""

    default_message = "Role composition conflict"
    __slots__ = ()

    @classmethod
    def for_name(cls, name: str, roles: Iterable[str], consumer: str):
        roles = tuple(roles)
        quoted = " and ".join(repr(r) for r in roles)
        return cls(
            f"Due to a conflict in roles {quoted}, {name!r} must be "
            f"implemented by {consumer!r}",
            details={"name": name, "roles": roles, "consumer": consumer},
        )


class NamespaceFinalizedError(AliasError):
    """Raised when a built class namespace is modified."""

    default_message = "Namespace is already finalized"
    __slots__ = ()


class InvalidAliasError(AliasError):
    """Raised when an alias declaration names an unusable alias."""

    default_message = "Invalid alias"
    __slots__ = ()

    @classmethod
    def for_name(cls, alias_name: Any, reason: str):
        return cls(
            f"Invalid alias {alias_name!r}: {reason}",
            details={"alias_name": alias_name, "reason": reason},
        )
