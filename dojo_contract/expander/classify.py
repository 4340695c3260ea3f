"""
Classifier: one ordered pass over the module's items.

Recognised items (enum `Event`, struct `Storage`, functions `constructor` and
`dojo_init`) are replaced by their augmented form; every other item is copied
verbatim. Output order is encounter order. A category seen twice is a
DuplicateDeclaration; all duplicates are collected before giving up.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence, Type, TypeVar, Union

from .. import diagnostics as diag
from ..errors import DojoContractError
from ..result import Failure
from ..syntax.nodes import (
    EnumNode,
    FreeFunctionNode,
    ModuleNode,
    OtherNode,
    StructNode,
    SyntaxKind,
    SyntaxNode,
)
from .augment import augment_constructor, augment_event, augment_init, augment_storage
from .state import (
    CONSTRUCTOR_FN,
    DOJO_INIT_FN,
    EVENT_ENUM,
    STORAGE_STRUCT,
    Category,
    ExpansionState,
)

log = logging.getLogger(__name__)

N = TypeVar("N", bound=SyntaxNode)


def _expect(node: SyntaxNode, cls: Type[N]) -> N:
    """Narrow `node` to the class its kind promises."""
    if not isinstance(node, cls):
        raise DojoContractError(
            f"Node of kind {node.kind!r} is a {type(node).__name__}, not a {cls.__name__}",
            code="unexpected_node",
            context={"kind": str(node.kind), "node": type(node).__name__},
        )
    return node


class Classifier:
    def __init__(self, module_name: str) -> None:
        self.module_name = module_name
        self.state = ExpansionState()
        self.duplicates: List[diag.Diagnostic] = []
        self._handlers: Dict[SyntaxKind, Callable[[SyntaxNode], None]] = {
            SyntaxKind.MODULE: self._module,
            SyntaxKind.ENUM: self._enum,
            SyntaxKind.STRUCT: self._struct,
            SyntaxKind.FREE_FUNCTION: self._function,
            SyntaxKind.OTHER: self._other,
        }

    def run(self, items: Sequence[SyntaxNode]) -> Union[ExpansionState, Failure]:
        for item in items:
            handler = self._handlers.get(item.kind)
            if handler is None:
                raise DojoContractError(
                    f"No classifier rule for syntax kind {item.kind!r}",
                    code="unhandled_kind",
                    context={"kind": str(item.kind)},
                )
            handler(item)
        if self.duplicates:
            return Failure(tuple(self.duplicates))
        return self.state

    def _claim(self, category: Category, node: SyntaxNode, name: str) -> bool:
        if self.state.has(category):
            log.debug("duplicate %s at line %d", category.value, node.line)
            self.duplicates.append(
                diag.duplicate_declaration(self.module_name, category.value, name, line=node.line)
            )
            return False
        self.state.mark(category)
        return True

    def _module(self, node: SyntaxNode) -> None:
        # Nested modules are rejected by validation before classification.
        node = _expect(node, ModuleNode)
        raise DojoContractError(
            f"Nested module '{node.name}' reached the classifier",
            code="unvalidated_module",
            context={"name": node.name},
        )

    def _enum(self, node: SyntaxNode) -> None:
        node = _expect(node, EnumNode)
        if node.name != EVENT_ENUM:
            self._other(node)
        elif self._claim(Category.EVENT, node, node.name):
            self.state.append(augment_event(node.variants))

    def _struct(self, node: SyntaxNode) -> None:
        node = _expect(node, StructNode)
        if node.name != STORAGE_STRUCT:
            self._other(node)
        elif self._claim(Category.STORAGE, node, node.name):
            self.state.append(augment_storage(node.members))

    def _function(self, node: SyntaxNode) -> None:
        node = _expect(node, FreeFunctionNode)
        if node.name == CONSTRUCTOR_FN:
            if self._claim(Category.CONSTRUCTOR, node, node.name):
                self.state.extend(augment_constructor(node.params, node.statements))
        elif node.name == DOJO_INIT_FN:
            if self._claim(Category.INIT, node, node.name):
                self.state.extend(augment_init(node.params, node.statements))
        else:
            self._other(node)

    def _other(self, node: SyntaxNode) -> None:
        if isinstance(node, OtherNode) and node.keyword:
            log.debug("copying %s item verbatim", node.keyword)
        self.state.append(node.text)


def classify(module_name: str, items: Sequence[SyntaxNode]) -> Union[ExpansionState, Failure]:
    return Classifier(module_name).run(items)


__all__ = ["Classifier", "classify"]
