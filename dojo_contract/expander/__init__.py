"""
dojo_contract.expander — the contract module rewrite pipeline.

    validate → classify/augment → defaults → assemble

  • state     — ExpansionState accumulator and the recognised categories
  • augment   — Event / Storage / constructor / dojo_init rewriters
  • classify  — ordered pass over items, duplicate detection
  • defaults  — canned fragments for undeclared categories
  • assemble  — fragment join + contract template substitution

`expand(node)` is a pure function of its input; the only shared data are the
read-only templates, so concurrent calls need no locking.
"""

from __future__ import annotations

import logging

from ..result import ExpansionResult, Failure
from ..syntax.nodes import SyntaxNode
from ..validate import validate_module
from .assemble import assemble
from .classify import classify
from .defaults import apply_defaults

log = logging.getLogger(__name__)


def expand(node: SyntaxNode) -> ExpansionResult:
    """
    Expand one annotated item into the full contract module text.

    Returns:
        Success(text) on success, Failure(diagnostics) otherwise. Never both,
        and no partial text on failure.
    """
    validated = validate_module(node)
    if isinstance(validated, Failure):
        log.info("contract expansion rejected: %d diagnostic(s)", len(validated.diagnostics))
        return validated

    state = classify(validated.name, validated.items)
    if isinstance(state, Failure):
        log.info(
            "contract %s rejected: %d diagnostic(s)", validated.name, len(state.diagnostics)
        )
        return state

    apply_defaults(state)
    result = assemble(validated.name, state)
    log.info("expanded contract %s (%d item(s))", validated.name, len(validated.items))
    return result


__all__ = ["expand"]
