"""Ambient caller identity for the duration of one command run.

The identity is held in a ``ContextVar`` so that two requests served by
different worker threads, or by tasks sharing a thread, never observe each
other's caller. ``impersonate`` is the only way to install an identity; it
always restores the previous value when the block exits.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager

from cli_commander.core.domain.identity import CallerIdentity

_current_identity: contextvars.ContextVar[CallerIdentity | None] = (
    contextvars.ContextVar("cli_commander_caller_identity", default=None)
)


def get_current_identity() -> CallerIdentity | None:
    """Return the identity bound to the current context, if any."""
    return _current_identity.get()


@contextmanager
def impersonate(identity: CallerIdentity) -> Iterator[CallerIdentity]:
    """Run the enclosed block as ``identity``."""
    token = _current_identity.set(identity)
    try:
        yield identity
    finally:
        _current_identity.reset(token)
