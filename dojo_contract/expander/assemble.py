"""Assembler: join fragments and place them into the contract template."""

from __future__ import annotations

from ..patches import CONTRACT_PATCH
from ..result import Success
from .state import ExpansionState


def assemble(name: str, state: ExpansionState) -> Success:
    body = "\n".join(state.consume())
    return Success(CONTRACT_PATCH.render({"name": name, "body": body}))


__all__ = ["assemble"]
