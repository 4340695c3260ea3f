"""
dojo_contract.syntax.nodes — item-level syntax tree.

The tree only goes as deep as the expander needs: modules contain items;
enums, structs and free functions expose their inner pieces (variants,
members, parameters, statements) as verbatim source slices. Anything else is
an OtherNode carrying its text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple


class SyntaxKind(Enum):
    MODULE = "module"
    ENUM = "enum"
    STRUCT = "struct"
    FREE_FUNCTION = "free_function"
    OTHER = "other"


@dataclass(frozen=True)
class SyntaxNode:
    text: str
    line: int = 0

    kind = SyntaxKind.OTHER

    def children(self) -> Tuple["SyntaxNode", ...]:
        return ()

    def descendants(self) -> Iterator["SyntaxNode"]:
        """Yield every node below this one, depth-first, in source order."""
        for child in self.children():
            yield child
            yield from child.descendants()


@dataclass(frozen=True)
class ModuleNode(SyntaxNode):
    name: str = ""
    # None for `mod name;` declarations without a body
    items: Optional[Tuple[SyntaxNode, ...]] = None

    kind = SyntaxKind.MODULE

    def children(self) -> Tuple[SyntaxNode, ...]:
        return self.items or ()


@dataclass(frozen=True)
class EnumNode(SyntaxNode):
    name: str = ""
    variants: Tuple[str, ...] = field(default_factory=tuple)

    kind = SyntaxKind.ENUM


@dataclass(frozen=True)
class StructNode(SyntaxNode):
    name: str = ""
    members: Tuple[str, ...] = field(default_factory=tuple)

    kind = SyntaxKind.STRUCT


@dataclass(frozen=True)
class FreeFunctionNode(SyntaxNode):
    name: str = ""
    params: Tuple[str, ...] = field(default_factory=tuple)
    statements: Tuple[str, ...] = field(default_factory=tuple)

    kind = SyntaxKind.FREE_FUNCTION


@dataclass(frozen=True)
class OtherNode(SyntaxNode):
    # Leading keyword of the item (`use`, `impl`, `const`, ...), for logs only
    keyword: str = ""

    kind = SyntaxKind.OTHER


__all__ = [
    "SyntaxKind",
    "SyntaxNode",
    "ModuleNode",
    "EnumNode",
    "StructNode",
    "FreeFunctionNode",
    "OtherNode",
]
