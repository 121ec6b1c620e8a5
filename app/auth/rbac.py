# app/auth/rbac.py
"""
Role-based access control.

Every gated route declares its allow-list with require_role(...). Identity
and role are resolved on every request through the request's gateway;
nothing is cached between requests.
"""

from enum import Enum
from typing import Optional

from fastapi import Depends, Request

from app.dependencies import get_gateway
from app.exceptions import (
    AuthenticationError, AuthorizationError, FleetError, InternalError, RemoteOperationError,
)
from app.services.fleet_gateway import FleetGateway
from app.utils.logger import get_logger

logger = get_logger(__name__)


class Role(str, Enum):
    MANAGER = "MANAGER"
    DISPATCHER = "DISPATCHER"
    ADMIN = "ADMIN"
    FINANCIAL_ANALYST = "FINANCIAL_ANALYST"
    SAFETY_OFFICER = "SAFETY_OFFICER"

    @classmethod
    def parse(cls, raw) -> Optional["Role"]:
        """Profile rows store roles in either case; unknown values map to None."""
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return None


# Allow-lists shared by several routers. ADMIN appears in none of them.
FLEET_OPS = (Role.DISPATCHER, Role.MANAGER)
FINANCE = (Role.FINANCIAL_ANALYST, Role.MANAGER)
SAFETY = (Role.SAFETY_OFFICER, Role.MANAGER)
MANAGERS = (Role.MANAGER,)


def require_role(*allowed: Role):
    allowed_set = frozenset(allowed)

    async def role_gate(request: Request, gateway: FleetGateway = Depends(get_gateway)) -> Role:
        try:
            try:
                user_id = await gateway.get_user_id()
            except RemoteOperationError:
                user_id = None
            if not user_id:
                raise AuthenticationError("Invalid token")

            try:
                raw_role = await gateway.get_profile_role(user_id)
            except RemoteOperationError as e:
                logger.info(f"No role profile for user {user_id}: {e.message}")
                raise AuthorizationError("No role profile")

            role = Role.parse(raw_role)
            if role not in allowed_set:
                logger.info(
                    f"Denied {request.method} {request.url.path} for user {user_id} (role={raw_role})"
                )
                raise AuthorizationError("Forbidden")
        except FleetError:
            raise
        except Exception as e:
            logger.error(f"Role check failed on {request.url.path}: {e}", exc_info=True)
            raise InternalError(str(e) or e.__class__.__name__) from e

        request.state.user_id = user_id
        request.state.role = role
        return role

    return role_gate
