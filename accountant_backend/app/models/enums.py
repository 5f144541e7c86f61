"""
User roles enumeration.

Defines the role types allowed to reach the accountant API.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.

    Roles:
        ADMIN: Supreme user with system-level access
        ACCOUNTANT: Manages financial logs and invoices
    """
    ADMIN = "ADMIN"
    ACCOUNTANT = "ACCOUNTANT"
