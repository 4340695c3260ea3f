"""dojo_contract.version — version string reported by the CLI and the facade.

Resolution (first match wins):
  1) DOJO_CONTRACT_VERSION
  2) installed distribution metadata for `dojo-contract`
  3) BASE_VERSION (running from a source checkout)
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import metadata as importlib_metadata

# Bump whenever the generated contract text changes shape.
BASE_VERSION = "0.1.0"

DIST_NAME = "dojo-contract"
VERSION_ENV = "DOJO_CONTRACT_VERSION"


@lru_cache(maxsize=1)
def compute_version() -> str:
    override = os.getenv(VERSION_ENV)
    if override:
        return override.strip()
    try:
        return importlib_metadata.version(DIST_NAME)
    except importlib_metadata.PackageNotFoundError:
        return BASE_VERSION


__version__ = compute_version()

__all__ = ["__version__", "BASE_VERSION", "compute_version"]
