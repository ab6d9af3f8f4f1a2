"""User role enum for RBAC.

Users are managed by the panel's identity provider. This module retains
only the UserRole enum used by the RBAC dependency.
"""

import enum


class UserRole(enum.StrEnum):
    """User roles for RBAC."""

    super_admin = "super_admin"
    admin = "admin"
    staff = "staff"
