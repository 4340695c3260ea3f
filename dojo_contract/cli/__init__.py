"""
dojo_contract.cli
-----------------

Console entrypoint `dojo-contract` -> dojo_contract.cli.main:main
(also runnable as `python -m dojo_contract.cli.main`).
"""

from __future__ import annotations

from .main import app, main

__all__ = ["app", "main"]
