"""
dojo_contract.validate — shape checks for the annotated item.

Checks, in order (the first failing check ends validation):
  1. the item is a module declaration
  2. the module contains no nested modules (every one is reported)
  3. the module name matches [A-Za-z0-9_]+

Public API
----------
validate_module(node) -> ValidatedModule | Failure
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Tuple, Union

from . import diagnostics as diag
from .result import Failure
from .syntax.nodes import ModuleNode, SyntaxKind, SyntaxNode

log = logging.getLogger(__name__)

CONTRACT_NAME_RE = re.compile(r"[A-Za-z0-9_]+")


@dataclass(frozen=True)
class ValidatedModule:
    name: str
    items: Tuple[SyntaxNode, ...]


def is_name_valid(name: str) -> bool:
    return CONTRACT_NAME_RE.fullmatch(name) is not None


def nested_modules(module: ModuleNode) -> List[ModuleNode]:
    return [n for n in module.descendants() if isinstance(n, ModuleNode)]


def validate_module(node: SyntaxNode) -> Union[ValidatedModule, Failure]:
    if node.kind is not SyntaxKind.MODULE or not isinstance(node, ModuleNode):
        log.debug("rejecting %s item: not a module", node.kind.value)
        return Failure((diag.invalid_target(),))

    nested = nested_modules(node)
    if nested:
        log.debug("module %s holds %d nested module(s)", node.name, len(nested))
        return Failure(
            tuple(diag.nested_module_not_allowed(node.name, n.name, line=n.line) for n in nested)
        )

    if not is_name_valid(node.name):
        return Failure((diag.invalid_contract_name(node.name),))

    return ValidatedModule(name=node.name, items=tuple(node.items or ()))


__all__ = ["ValidatedModule", "validate_module", "is_name_valid", "CONTRACT_NAME_RE"]
