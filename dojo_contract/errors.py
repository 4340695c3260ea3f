"""
Exceptions raised by dojo_contract.

Contract-level problems (wrong target, nested modules, bad names, duplicate
declarations) are *not* exceptions: they are reported as diagnostics inside an
ExpansionResult. The types below cover everything else: malformed source,
broken templates and misuse of the expansion state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass
class DojoContractError(Exception):
    """
    Structured error with a short machine-readable code.

        DojoContractError("message")
        DojoContractError("message", code="some_code", context={...})

    Attributes:
        code: short machine-readable code string
        message: human-readable message
        context: optional extra fields for debugging / tooling
    """

    code: str
    message: str
    context: Dict[str, Any]

    default_code = "dojo_contract_error"

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        object.__setattr__(self, "code", code or self.default_code)
        object.__setattr__(self, "message", str(message))
        object.__setattr__(self, "context", dict(context or {}))

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": dict(self.context),
        }


class ParseError(DojoContractError):
    """Source text could not be split into items."""

    default_code = "parse_error"

    def __init__(self, message: str, *, line: int = 0, column: int = 0) -> None:
        super().__init__(
            f"{message} (line {line}, column {column})",
            context={"line": line, "column": column},
        )
        self.line = line
        self.column = column


class TemplateError(DojoContractError):
    """A template placeholder is missing or occurs more than once."""

    default_code = "template_error"


class StateError(DojoContractError):
    """An ExpansionState was used after it had been consumed."""

    default_code = "state_error"


__all__ = ["DojoContractError", "ParseError", "TemplateError", "StateError"]
