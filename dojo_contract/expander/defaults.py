"""
Defaulter: canned fragments for categories the module did not declare.

Appended after classification in the fixed order constructor, init, event,
storage. Each default is the matching augmentor's output with no user
content, except init which comes from the default-init template.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from ..patches import DEFAULT_INIT_PATCH
from .augment import augment_constructor, augment_event, augment_storage
from .state import DOJO_INIT_FN, Category, ExpansionState

log = logging.getLogger(__name__)

DEFAULT_CONSTRUCTOR_PARAMS = ("ref self: ContractState",)


def default_constructor() -> str:
    return "\n".join(augment_constructor(DEFAULT_CONSTRUCTOR_PARAMS, ()))


def default_init() -> str:
    return DEFAULT_INIT_PATCH.render({"init_name": DOJO_INIT_FN})


def default_event() -> str:
    return augment_event(())


def default_storage() -> str:
    return augment_storage(())


DEFAULTS: Dict[Category, Callable[[], str]] = {
    Category.CONSTRUCTOR: default_constructor,
    Category.INIT: default_init,
    Category.EVENT: default_event,
    Category.STORAGE: default_storage,
}


def apply_defaults(state: ExpansionState) -> None:
    for category in state.missing():
        log.debug("adding default %s", category.value)
        state.append(DEFAULTS[category]())
        state.mark(category)


__all__ = [
    "apply_defaults",
    "default_constructor",
    "default_init",
    "default_event",
    "default_storage",
    "DEFAULT_CONSTRUCTOR_PARAMS",
]
