"""``{{placeholder}}`` templates for notification titles, bodies and links.

A template is parsed once into literal text and placeholder nodes. Rendering
never fails: a placeholder whose name cannot be resolved is emitted exactly
as it appeared in the source, so partial payloads stay visible to readers.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Union

_PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][\w]*(?:\.[A-Za-z_][\w]*)*)\s*\}\}")

_MISSING = object()


@dataclass(frozen=True)
class Placeholder:
    name: str
    token: str

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self.name.split("."))


Node = Union[str, Placeholder]


@dataclass(frozen=True)
class Template:
    """Parsed template made of literal strings and :class:`Placeholder` nodes."""

    source: str
    nodes: tuple[Node, ...]

    @classmethod
    def parse(cls, source: str) -> "Template":
        return _parse_cached(source)

    @property
    def placeholders(self) -> frozenset[str]:
        return frozenset(node.name for node in self.nodes if isinstance(node, Placeholder))

    def missing(self, variables: Mapping[str, Any] | None) -> frozenset[str]:
        """Return placeholder names that ``variables`` cannot satisfy."""

        return frozenset(
            node.name
            for node in self.nodes
            if isinstance(node, Placeholder) and _lookup(variables or {}, node.path) is _MISSING
        )

    def render(self, variables: Mapping[str, Any] | None) -> str:
        if not variables:
            return self.source
        parts: list[str] = []
        for node in self.nodes:
            if isinstance(node, Placeholder):
                value = _lookup(variables, node.path)
                parts.append(node.token if value is _MISSING else _stringify(value))
            else:
                parts.append(node)
        return "".join(parts)


@lru_cache(maxsize=512)
def _parse_cached(source: str) -> Template:
    nodes: list[Node] = []
    position = 0
    for match in _PLACEHOLDER_PATTERN.finditer(source):
        if match.start() > position:
            nodes.append(source[position : match.start()])
        nodes.append(Placeholder(name=match.group(1), token=match.group(0)))
        position = match.end()
    if position < len(source):
        nodes.append(source[position:])
    return Template(source=source, nodes=tuple(nodes))


def _lookup(variables: Mapping[str, Any], path: tuple[str, ...]) -> Any:
    current: Any = variables
    for key in path:
        if not isinstance(current, Mapping) or key not in current:
            return _MISSING
        current = current[key]
    if current is None:
        return _MISSING
    return current


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render(template: str | None, variables: Mapping[str, Any] | None) -> str:
    """Substitute ``{{name}}`` tokens of ``template`` with ``variables``."""

    if not template:
        return template or ""
    return Template.parse(template).render(variables)


__all__ = ["Placeholder", "Template", "render"]
