"""Registry of reset hooks for module-level singletons.

Modules that keep process-wide state register a zero-argument reset
function here so tests can restore a clean slate between cases.
"""

from __future__ import annotations

from collections.abc import Callable

_RESET_HOOKS: list[Callable[[], None]] = []


def register_singleton(reset: Callable[[], None]) -> None:
    if reset not in _RESET_HOOKS:
        _RESET_HOOKS.append(reset)


def reset_all_singletons() -> None:
    for reset in list(_RESET_HOOKS):
        reset()
