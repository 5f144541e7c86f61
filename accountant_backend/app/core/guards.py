"""
Security guards for role-based access control.
"""

from typing import List
from fastapi import Depends
from accountant_backend.app.core.exceptions import InsufficientPermissionsError
from accountant_backend.app.models.enums import UserRole
from accountant_backend.app.core.dependencies import get_current_user


def require_role(allowed_roles: List[UserRole]):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.get("/accountant/summary")
        async def summary(current_user: dict = Depends(require_role(ACCOUNTING_ROLES))):
            ...

    Args:
        allowed_roles: List of UserRole enums that are allowed to access the endpoint

    Returns:
        FastAPI dependency function that validates user role

    Raises:
        InsufficientPermissionsError 403 if user role is not in allowed_roles
    """
    async def role_checker(current_user: dict = Depends(get_current_user)) -> dict:
        user_role_str = current_user.get("role")

        if not user_role_str:
            raise InsufficientPermissionsError("Role information missing from token")

        # Convert string role to UserRole enum
        try:
            user_role = UserRole(user_role_str)
        except ValueError:
            raise InsufficientPermissionsError("Invalid role in token")

        if user_role not in allowed_roles:
            raise InsufficientPermissionsError(f"Access denied. Required role: {', '.join([r.value for r in allowed_roles])}")

        return current_user

    return role_checker


# Accountant API is open to accountants and admins
ACCOUNTING_ROLES = [UserRole.ACCOUNTANT, UserRole.ADMIN]
