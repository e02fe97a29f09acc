"""Interaction pipeline -- the command dispatcher and the Discord gateway adapter.

The adapter lives in :mod:`.bot` and is imported explicitly by the
entry points so the dispatcher can be used without a gateway client.
"""

from .dispatcher import CommandDispatcher, DispatchOutcome

__all__ = [
    "CommandDispatcher",
    "DispatchOutcome",
]
