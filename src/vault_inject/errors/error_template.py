# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Template and Secret Mapping Error Classes."""

from vault_inject.enums.enum_exit_code import EnumExitCode
from vault_inject.errors.error_inject import VaultInjectError


class TemplateError(VaultInjectError):
    """Base class for template and ``--secret`` mapping errors."""

    exit_code = EnumExitCode.TEMPLATE


class TemplateSyntaxError(TemplateError):
    """A template string is malformed (e.g. a parameter is used twice)."""


class SecretSpecParseError(TemplateError):
    """A ``--secret`` mapping does not follow ``ENV = path/key [| cmd]*``.

    Example:
        >>> raise SecretSpecParseError(
        ...     "Every '|' must forward to a command, but command 1 is missing",
        ...     secret_spec="FOO = /hello/lark |",
        ... )
    """


class TemplateUnboundPlaceholderError(TemplateError):
    """A template parameter has no value to substitute."""

    def __init__(self, message: str, placeholder: str, **extra_context: object):
        super().__init__(message, placeholder=placeholder, **extra_context)
        self.placeholder = placeholder


__all__ = [
    "SecretSpecParseError",
    "TemplateError",
    "TemplateSyntaxError",
    "TemplateUnboundPlaceholderError",
]
