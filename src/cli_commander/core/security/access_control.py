from __future__ import annotations

import logging

from cli_commander.core.common.exceptions import AccessDeniedError
from cli_commander.core.domain.identity import CallerIdentity
from cli_commander.core.domain.permissions import Permission
from cli_commander.core.security.identity_context import get_current_identity

logger = logging.getLogger(__name__)


def check_permission(permission: Permission) -> CallerIdentity:
    """Require ``permission`` from the ambient identity.

    Code running outside of a bound execution has no identity and is always
    denied; there is no fallback to the identity of the gateway process.

    Returns:
        The ambient identity that holds the permission.

    Raises:
        AccessDeniedError: If there is no ambient identity or it lacks the permission.
    """
    identity = get_current_identity()
    if identity is None:
        logger.warning("Permission %s checked without a bound identity", permission.value)
        raise AccessDeniedError(
            f"No caller identity is bound; {permission.value} permission denied"
        )
    if not identity.has_permission(permission):
        logger.info("Denied %s permission to %s", permission.value, identity.name)
        raise AccessDeniedError(
            f"{identity.name} is missing the {permission.value} permission"
        )
    return identity
