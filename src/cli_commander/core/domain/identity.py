"""Caller identity value objects.

A ``CallerIdentity`` is created once per request by the security middleware
and never mutated. It is either the anonymous identity or an authenticated
principal carrying its authorities and granted permissions.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from cli_commander.core.domain.permissions import Permission
from cli_commander.core.interfaces.model_bases import InternalDTO

ANONYMOUS_NAME = "anonymous"
ANONYMOUS_AUTHORITY = "anonymous"
AUTHENTICATED_AUTHORITY = "authenticated"


@dataclass(frozen=True)
class CallerIdentity(InternalDTO):
    name: str
    authenticated: bool
    authorities: tuple[str, ...] = ()
    permissions: frozenset[Permission] = field(default_factory=frozenset)

    @classmethod
    def anonymous(
        cls, permissions: Iterable[Permission | str] = ()
    ) -> CallerIdentity:
        """Build the identity used for callers that presented no credential.

        The anonymous identity carries only the ``anonymous`` authority.
        """
        return cls(
            name=ANONYMOUS_NAME,
            authenticated=False,
            authorities=(ANONYMOUS_AUTHORITY,),
            permissions=frozenset(Permission(p) for p in permissions),
        )

    @classmethod
    def principal(
        cls,
        name: str,
        authorities: Iterable[str] = (),
        permissions: Iterable[Permission | str] = (),
    ) -> CallerIdentity:
        """Build an authenticated identity.

        Every authenticated principal carries the ``authenticated`` authority
        in addition to the configured ones.
        """
        granted = [AUTHENTICATED_AUTHORITY]
        granted.extend(a for a in authorities if a != AUTHENTICATED_AUTHORITY)
        return cls(
            name=name,
            authenticated=True,
            authorities=tuple(granted),
            permissions=frozenset(Permission(p) for p in permissions),
        )

    @property
    def is_anonymous(self) -> bool:
        return not self.authenticated

    def has_permission(self, permission: Permission) -> bool:
        return (
            Permission.ADMINISTER in self.permissions
            or permission in self.permissions
        )

    def __str__(self) -> str:
        return self.name
