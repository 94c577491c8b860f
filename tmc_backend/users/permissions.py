# users/permissions.py

"""
ROLE GUARDS

- HasRole: base role check (anonymous always denied)
- IsAdmin / IsAdminOrBusiness: concrete role sets
- AdminOnlyMixin: the single "require admin" guard for back-office views.
  A failed check is reported as 401 Unauthorized (never 403), so a
  logged-in shopper hitting an admin endpoint sees the same answer as
  an anonymous caller.
"""

from rest_framework import exceptions
from rest_framework.permissions import BasePermission

from users.models import User


# ---------------- BASE ROLE PERMISSION ----------------
class HasRole(BasePermission):
    """
    Base permission to check user role safely.
    """

    allowed_roles = set()

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "role", None) in self.allowed_roles
        )


# ---------------- ROLE PERMISSIONS ----------------
class IsAdmin(HasRole):
    allowed_roles = {User.Role.ADMIN}


class IsAdminOrBusiness(HasRole):
    allowed_roles = {User.Role.ADMIN, User.Role.BUSINESS}


# ---------------- ADMIN GUARD ----------------
class AdminOnlyMixin:
    """
    Mix into an APIView to require an ADMIN caller.

    Denials raise NotAuthenticated so DRF answers 401 with the
    authenticator's WWW-Authenticate header.
    """

    permission_classes = [IsAdmin]

    def permission_denied(self, request, message=None, code=None):
        raise exceptions.NotAuthenticated(detail="Unauthorized")
