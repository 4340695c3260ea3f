"""ExpansionResult: `Success(text)` or `Failure(diagnostics)`, one per invocation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union

from .diagnostics import DiagnosticSet, to_dicts


@dataclass(frozen=True)
class Success:
    text: str

    ok = True

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": True, "text": self.text}


@dataclass(frozen=True)
class Failure:
    diagnostics: DiagnosticSet

    ok = False

    def __post_init__(self) -> None:
        if not self.diagnostics:
            raise ValueError("Failure requires at least one diagnostic")

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": False, "diagnostics": to_dicts(self.diagnostics)}


ExpansionResult = Union[Success, Failure]

__all__ = ["Success", "Failure", "ExpansionResult"]
