"""
dojo_contract.patches — the two source templates used by the expander.

  contract.patch.cairo       outer contract module; placeholders $name$, $body$
  default_init.patch.cairo   init entrypoint used when the module has none;
                             placeholder $init_name$

Both are read once at import time (packaged copies, or the directory named by
DOJO_CONTRACT_PATCH_DIR) and never change afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources as importlib_resources
from typing import Mapping, Tuple

from ..config import load_config
from ..errors import TemplateError

log = logging.getLogger(__name__)

CONTRACT_PATCH_FILE = "contract.patch.cairo"
DEFAULT_INIT_PATCH_FILE = "default_init.patch.cairo"


def placeholder(name: str) -> str:
    return f"${name}$"


@dataclass(frozen=True)
class PatchTemplate:
    name: str
    text: str
    placeholders: Tuple[str, ...]

    def __post_init__(self) -> None:
        for key in self.placeholders:
            count = self.text.count(placeholder(key))
            if count != 1:
                raise TemplateError(
                    f"Template {self.name!r} must contain {placeholder(key)} exactly once",
                    context={"template": self.name, "placeholder": key, "count": count},
                )

    def render(self, values: Mapping[str, str]) -> str:
        """
        Replace every placeholder with its value, in declaration order.

        Substitution is literal. A value that smuggles in a placeholder still
        to be substituted is rejected rather than substituted twice.
        """
        missing = [k for k in self.placeholders if k not in values]
        if missing:
            raise TemplateError(
                f"Missing values for template {self.name!r}: {', '.join(missing)}",
                context={"template": self.name, "missing": missing},
            )
        out = self.text
        for key in self.placeholders:
            token = placeholder(key)
            count = out.count(token)
            if count != 1:
                raise TemplateError(
                    f"Placeholder {token} occurs {count} times while rendering {self.name!r}",
                    context={"template": self.name, "placeholder": key, "count": count},
                )
            out = out.replace(token, values[key], 1)
        return out


def _read_patch(filename: str) -> str:
    patch_dir = load_config().patch_dir
    if patch_dir is not None and (patch_dir / filename).is_file():
        log.debug("using %s from %s", filename, patch_dir)
        return (patch_dir / filename).read_text(encoding="utf-8")
    return importlib_resources.files(__name__).joinpath(filename).read_text(encoding="utf-8")


def load_patch(filename: str, placeholders: Tuple[str, ...]) -> PatchTemplate:
    return PatchTemplate(name=filename, text=_read_patch(filename), placeholders=placeholders)


CONTRACT_PATCH: PatchTemplate = load_patch(CONTRACT_PATCH_FILE, ("name", "body"))
DEFAULT_INIT_PATCH: PatchTemplate = load_patch(DEFAULT_INIT_PATCH_FILE, ("init_name",))

__all__ = [
    "PatchTemplate",
    "CONTRACT_PATCH",
    "DEFAULT_INIT_PATCH",
    "load_patch",
    "CONTRACT_PATCH_FILE",
    "DEFAULT_INIT_PATCH_FILE",
    "placeholder",
]
