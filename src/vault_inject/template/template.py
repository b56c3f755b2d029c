# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Placeholder Templates for Secret Keys and Environment Names.

A template is literal text interleaved with named placeholders such as
``SECRET_{b}_{a}`` or ``foo_{a}_{b}``. Templates are used two ways:

- ``match``: test a literal candidate (a secret key) against the template and
  capture what each placeholder stands for.
- ``substitute``: build a string (an environment variable name) by replacing
  each placeholder with a captured value.

Matching Rules:
    - Literal text must match verbatim and the whole candidate must be covered
    - A placeholder captures at least one character
    - Placeholders prefer the shortest capture that lets the rest of the
      template match; on failure the search backtracks, growing the most
      recent placeholder one character at a time
    - A template without placeholders matches only the identical string

Example:
    >>> key = Template("foo_{a}_{b}")
    >>> bindings = key.match("foo_1_2")
    >>> bindings
    {'a': '1', 'b': '2'}
    >>> Template("SECRET_{b}_{a}").substitute(bindings)
    'SECRET_2_1'
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from vault_inject.errors import TemplateSyntaxError, TemplateUnboundPlaceholderError

PLACEHOLDER_PATTERN = re.compile(r"\{\s*([a-zA-Z][a-zA-Z0-9_-]*)\s*\}")


@dataclass(frozen=True)
class TemplatePiece:
    """One run of a template: literal text, or a placeholder name."""

    text: str
    is_placeholder: bool = False


class Template:
    """A parsed template string.

    Args:
        source: Template text, e.g. ``"foo {bar} wibble"``. Whitespace inside
            braces is ignored, so ``{ bar }`` and ``{bar}`` are the same.

    Raises:
        TemplateSyntaxError: If a placeholder name is used more than once.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pieces = self._parse(source)
        self._placeholders = tuple(
            piece.text for piece in self._pieces if piece.is_placeholder
        )

    @staticmethod
    def _parse(source: str) -> tuple[TemplatePiece, ...]:
        pieces: list[TemplatePiece] = []
        seen: set[str] = set()
        last_end = 0
        for found in PLACEHOLDER_PATTERN.finditer(source):
            name = found.group(1)
            if name in seen:
                raise TemplateSyntaxError(
                    f"The parameter '{name}' was used more than once",
                    template=source,
                )
            seen.add(name)
            literal = source[last_end : found.start()]
            if literal:
                pieces.append(TemplatePiece(literal))
            pieces.append(TemplatePiece(name, is_placeholder=True))
            last_end = found.end()
        if last_end < len(source):
            pieces.append(TemplatePiece(source[last_end:]))
        return tuple(pieces)

    @property
    def source(self) -> str:
        """The template text as written."""
        return self._source

    @property
    def pieces(self) -> tuple[TemplatePiece, ...]:
        return self._pieces

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Placeholder names in order of appearance."""
        return self._placeholders

    @property
    def has_placeholders(self) -> bool:
        return bool(self._placeholders)

    def literal(self) -> str:
        """The literal text of a template with no placeholders."""
        return "".join(piece.text for piece in self._pieces)

    def match(self, candidate: str) -> dict[str, str] | None:
        """Match a candidate string against this template.

        The search walks the pieces left to right, giving each placeholder a
        one character capture. When a literal does not fit, or the candidate
        is not fully consumed at the end, it backtracks to the nearest
        placeholder that can still grow, grows it by one character and
        resumes from the piece after it. Each placeholder's capture is bounded
        by the candidate length, so the search always terminates.

        Args:
            candidate: Literal string to test (e.g. a secret key).

        Returns:
            Mapping of placeholder name to captured text, or None if the
            candidate does not match.
        """
        if not self._placeholders:
            return {} if candidate == self.literal() else None

        pieces = self._pieces
        count = len(pieces)
        end = len(candidate)
        starts = [0] * count
        lengths = [0] * count
        index = 0
        position = 0

        while True:
            advanced = False
            if index == count:
                if position == end:
                    return {
                        piece.text: candidate[starts[i] : starts[i] + lengths[i]]
                        for i, piece in enumerate(pieces)
                        if piece.is_placeholder
                    }
            else:
                piece = pieces[index]
                if piece.is_placeholder:
                    if position < end:
                        starts[index] = position
                        lengths[index] = 1
                        advanced = True
                elif candidate.startswith(piece.text, position):
                    starts[index] = position
                    lengths[index] = len(piece.text)
                    advanced = True

            if advanced:
                position = starts[index] + lengths[index]
                index += 1
                continue

            # Backtrack: grow the nearest earlier placeholder that still can.
            grow = index - 1
            while grow >= 0:
                if pieces[grow].is_placeholder and starts[grow] + lengths[grow] < end:
                    break
                grow -= 1
            if grow < 0:
                return None
            lengths[grow] += 1
            position = starts[grow] + lengths[grow]
            index = grow + 1

    def substitute(self, bindings: Mapping[str, str]) -> str:
        """Replace every placeholder with its bound value.

        Raises:
            TemplateUnboundPlaceholderError: If a placeholder has no binding.
        """
        out: list[str] = []
        for piece in self._pieces:
            if not piece.is_placeholder:
                out.append(piece.text)
                continue
            try:
                out.append(bindings[piece.text])
            except KeyError:
                raise TemplateUnboundPlaceholderError(
                    f"No value for the parameter '{piece.text}' "
                    f"in the template '{self._source}'",
                    placeholder=piece.text,
                    template=self._source,
                ) from None
        return "".join(out)

    def missing_from(self, other: Template) -> list[str]:
        """Placeholders of this template that ``other`` does not provide."""
        provided = set(other.placeholders)
        return [name for name in self._placeholders if name not in provided]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Template):
            return NotImplemented
        return self._pieces == other._pieces

    def __hash__(self) -> int:
        return hash(self._pieces)

    def __repr__(self) -> str:
        return f"Template({self._source!r})"

    def __str__(self) -> str:
        return self._source


__all__ = ["PLACEHOLDER_PATTERN", "Template", "TemplatePiece"]
