# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Template matching and substitution."""

from vault_inject.template.template import Template, TemplatePiece

__all__: list[str] = ["Template", "TemplatePiece"]
