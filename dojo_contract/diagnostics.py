"""
dojo_contract.diagnostics — structured, ordered contract diagnostics.

Every rejection of a contract module is expressed as a Diagnostic. Builders
below keep the message wording in one place; `format_diagnostics` renders a
DiagnosticSet for terminals, `to_dicts` for JSON tooling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Tuple


class Severity(str, Enum):
    ERROR = "error"


class DiagnosticKind(str, Enum):
    INVALID_TARGET = "InvalidTarget"
    NESTED_MODULE_NOT_ALLOWED = "NestedModuleNotAllowed"
    INVALID_CONTRACT_NAME = "InvalidContractName"
    DUPLICATE_DECLARATION = "DuplicateDeclaration"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    severity: Severity = Severity.ERROR
    # Kind-specific fields: `name`, `category`, `module`, `line`
    context: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "kind": self.kind.value,
            "message": self.message,
            "context": dict(self.context),
        }


DiagnosticSet = Tuple[Diagnostic, ...]


def invalid_target() -> Diagnostic:
    return Diagnostic(
        DiagnosticKind.INVALID_TARGET,
        "Contract macro can only be applied to modules",
    )


def nested_module_not_allowed(module: str, name: str, *, line: int = 0) -> Diagnostic:
    return Diagnostic(
        DiagnosticKind.NESTED_MODULE_NOT_ALLOWED,
        f"The contract module '{module}' cannot contain nested modules (found '{name}').",
        context={"module": module, "name": name, "line": line},
    )


def invalid_contract_name(name: str) -> Diagnostic:
    return Diagnostic(
        DiagnosticKind.INVALID_CONTRACT_NAME,
        f"The contract name '{name}' can only contain characters (a-z/A-Z), "
        "digits (0-9) and underscore (_).",
        context={"name": name},
    )


def duplicate_declaration(module: str, category: str, name: str, *, line: int = 0) -> Diagnostic:
    return Diagnostic(
        DiagnosticKind.DUPLICATE_DECLARATION,
        f"The contract module '{module}' declares {category} '{name}' more than once.",
        context={"module": module, "category": category, "name": name, "line": line},
    )


def format_diagnostics(diagnostics: Iterable[Diagnostic], *, filename: str = "<contract>") -> str:
    """One `file:line: severity[kind]: message` row per diagnostic."""
    rows: List[str] = []
    for d in diagnostics:
        line = d.context.get("line") or 0
        where = f"{filename}:{line}" if line else filename
        rows.append(f"{where}: {d.severity.value}[{d.kind.value}]: {d.message}")
    return "\n".join(rows)


def to_dicts(diagnostics: Iterable[Diagnostic]) -> List[Dict[str, Any]]:
    return [d.to_dict() for d in diagnostics]


__all__ = [
    "Severity",
    "DiagnosticKind",
    "Diagnostic",
    "DiagnosticSet",
    "invalid_target",
    "nested_module_not_allowed",
    "invalid_contract_name",
    "duplicate_declaration",
    "format_diagnostics",
    "to_dicts",
]
