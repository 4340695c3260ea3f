"""
dojo_contract.syntax — tokenizer, item-level syntax tree and parser.

  • lexer   — source → tokens (comments kept as leading trivia)
  • nodes   — ModuleNode / EnumNode / StructNode / FreeFunctionNode / OtherNode
  • parser  — tokens → nodes; `parse_item` for the single annotated item
"""

from __future__ import annotations

from .nodes import (
    EnumNode,
    FreeFunctionNode,
    ModuleNode,
    OtherNode,
    StructNode,
    SyntaxKind,
    SyntaxNode,
)
from .parser import parse_item, parse_items

__all__ = [
    "SyntaxKind",
    "SyntaxNode",
    "ModuleNode",
    "EnumNode",
    "StructNode",
    "FreeFunctionNode",
    "OtherNode",
    "parse_item",
    "parse_items",
]
