"""
dojo_contract.config — template overrides, size caps and logging level.

Configuration precedence:
  1) Environment variables (DOJO_CONTRACT_*)
  2) Hardcoded safe defaults below

Key env vars:
  - DOJO_CONTRACT_PATCH_DIR          (path)  default: packaged dojo_contract/patches
  - DOJO_CONTRACT_MAX_SOURCE_BYTES   (int)   default: 1_048_576 (1 MiB)
  - DOJO_CONTRACT_LOG_LEVEL          (str)   default: WARNING

Usage:
    from dojo_contract.config import load_config
    CFG = load_config()
    if CFG.patch_dir: ...
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

ENV_PREFIX = "DOJO_CONTRACT_"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if not raw:
        return None
    return Path(raw).expanduser().resolve()


def _env_log_level(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().upper()
    return raw if raw in _LOG_LEVELS else default


@dataclass(frozen=True)
class ExpanderConfig:
    # Directory whose *.patch.cairo files shadow the packaged templates
    patch_dir: Optional[Path]

    # Upper bound on source text handed to the parser
    max_source_bytes: int

    log_level: str

    @property
    def log_level_no(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "patch_dir": str(self.patch_dir) if self.patch_dir else None,
            "max_source_bytes": self.max_source_bytes,
            "log_level": self.log_level,
        }


@lru_cache(maxsize=1)
def load_config() -> ExpanderConfig:
    """
    Build and cache an ExpanderConfig from environment + safe defaults.
    """
    patch_dir = _env_path(ENV_PREFIX + "PATCH_DIR")
    if patch_dir is not None and not patch_dir.is_dir():
        patch_dir = None

    return ExpanderConfig(
        patch_dir=patch_dir,
        max_source_bytes=_env_int(
            ENV_PREFIX + "MAX_SOURCE_BYTES", 1_048_576, min_v=1_024, max_v=67_108_864
        ),
        log_level=_env_log_level(ENV_PREFIX + "LOG_LEVEL", "WARNING"),
    )


__all__ = ["ExpanderConfig", "load_config", "ENV_PREFIX"]
