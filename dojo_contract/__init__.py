"""
dojo_contract — expander for `#[dojo::contract]` modules.

A tiny, stable façade over the parser and the expander:

- version() -> str
- expand(node) -> Success | Failure
    Rewrite an already-parsed module node (validate, augment, default, assemble).
- expand_source(source: str) -> Success | Failure
    Parse one item from source text, then expand it.

Imports of the heavier submodules are lazy so importing the package stays
cheap for tools that only need the version.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from .version import __version__

if TYPE_CHECKING:
    from .result import ExpansionResult
    from .syntax.nodes import SyntaxNode


def version() -> str:
    """Return the dojo_contract semantic version string."""
    return __version__


def expand(node: SyntaxNode) -> ExpansionResult:
    """
    Expand one annotated syntax node.

    Parameters
    ----------
    node : dojo_contract.syntax.SyntaxNode
        The item the contract attribute is attached to.

    Returns
    -------
    Success | Failure
        Replacement module text, or a non-empty diagnostic tuple.
    """
    expander = importlib.import_module(".expander", __name__)
    return expander.expand(node)


def expand_source(source: str) -> ExpansionResult:
    """
    Parse `source` as a single item and expand it.

    Raises ParseError when the text is not a well-formed item; contract-level
    problems come back as a Failure instead.
    """
    parser = importlib.import_module(".syntax.parser", __name__)
    return expand(parser.parse_item(source))


__all__ = ["__version__", "version", "expand", "expand_source"]
