# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ("AliasSettings", "settings")


class AliasSettings(BaseSettings, frozen=True):
    """Settings for alias declaration, read from the environment."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ALIASES_LEGACY_ORDER: Literal["warn", "ignore", "error"] = Field(
        default="warn",
        description="How alias(existing, new) calls in the old argument "
        "order are handled",
    )

    ALIASES_INITIALIZER_CONFLICT: Literal["reject", "prefer_primary"] = Field(
        default="reject",
        description="Whether different values under a primary attribute "
        "name and its aliases are rejected at construction",
    )

    ALIASES_LOG_LEVEL: str = "INFO"

    # Class variable to store the singleton instance
    _instance: ClassVar[Any] = None

    @property
    def rejects_conflicts(self) -> bool:
        return self.ALIASES_INITIALIZER_CONFLICT == "reject"


# Create a singleton instance
settings = AliasSettings()
AliasSettings._instance = settings
