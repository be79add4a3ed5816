from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cli_commander.core.commands.base import BaseCommand


class ICommandRegistry(ABC):
    """Lookup boundary to the catalog of executable commands."""

    @abstractmethod
    def resolve(self, name: str) -> BaseCommand | None:
        """Return a fresh command instance for ``name``, or None if unknown.

        Every call must return a new instance; instances are never shared
        between requests.
        """

    @abstractmethod
    def list_names(self) -> list[str]:
        """Return the names of all known commands."""
