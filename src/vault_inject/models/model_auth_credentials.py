# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Authentication Credential Models.

One model per auth method, each carrying only what that method needs. The
``method`` field discriminates the union so a single ``authenticate`` entry
point can dispatch on it.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from vault_inject.enums import EnumAuthMethod


def _normalize_mount(mount: str | None, method: EnumAuthMethod) -> str:
    """Turn ``/auth/ldap-corp/`` or ``ldap-corp`` into ``ldap-corp``."""
    if not mount:
        return method.default_mount
    mount = mount.strip("/")
    if mount.startswith("auth/"):
        mount = mount[len("auth/") :]
    return mount.strip("/") or method.default_mount


class ModelUserPassCredentials(BaseModel):
    """Username/password login to the ``userpass`` auth backend."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: Literal[EnumAuthMethod.USERPASS] = EnumAuthMethod.USERPASS
    username: str = Field(min_length=1)
    password: SecretStr
    mount: str | None = Field(default=None, description="Auth mount path")

    @property
    def principal(self) -> str:
        return self.username

    @property
    def auth_mount(self) -> str:
        return _normalize_mount(self.mount, self.method)


class ModelLdapCredentials(BaseModel):
    """Username/password login to the ``ldap`` auth backend."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: Literal[EnumAuthMethod.LDAP] = EnumAuthMethod.LDAP
    username: str = Field(min_length=1)
    password: SecretStr
    mount: str | None = Field(default=None, description="Auth mount path")

    @property
    def principal(self) -> str:
        return self.username

    @property
    def auth_mount(self) -> str:
        return _normalize_mount(self.mount, self.method)


class ModelTokenCredentials(BaseModel):
    """A pre-issued Vault token; no login request is made."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: Literal[EnumAuthMethod.TOKEN] = EnumAuthMethod.TOKEN
    token: SecretStr

    @property
    def principal(self) -> str:
        return ""


AuthCredentials = Annotated[
    Union[ModelUserPassCredentials, ModelLdapCredentials, ModelTokenCredentials],
    Field(discriminator="method"),
]


__all__ = [
    "AuthCredentials",
    "ModelLdapCredentials",
    "ModelTokenCredentials",
    "ModelUserPassCredentials",
]
