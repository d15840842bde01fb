"""
Roles and the per-operation capability table.

Roles are disjoint: an operation lists every role allowed to call it and there
is no implied ordering between roles. An operation absent from CAPABILITIES is
denied to everyone.
"""

import enum

from fastapi import Request

from store_rating.core.errors import Forbidden, Unauthorized


class Role(str, enum.Enum):
    SYSTEM_ADMIN = "SYSTEM_ADMIN"
    STORE_OWNER = "STORE_OWNER"
    NORMAL_USER = "NORMAL_USER"


class Operation(str, enum.Enum):
    VIEW_PROFILE = "view_profile"
    UPDATE_PROFILE = "update_profile"
    LIST_USERS = "list_users"
    CREATE_USER = "create_user"
    UPDATE_USER = "update_user"
    CREATE_STORE = "create_store"
    VIEW_OWN_STORES = "view_own_stores"
    SUBMIT_RATING = "submit_rating"
    VIEW_OWN_RATING = "view_own_rating"
    VIEW_STORE_RATINGS = "view_store_ratings"
    VIEW_DASHBOARD = "view_dashboard"


ALL_ROLES = frozenset(Role)

CAPABILITIES = {
    Operation.VIEW_PROFILE: ALL_ROLES,
    Operation.UPDATE_PROFILE: ALL_ROLES,
    Operation.LIST_USERS: frozenset({Role.SYSTEM_ADMIN}),
    Operation.CREATE_USER: frozenset({Role.SYSTEM_ADMIN}),
    Operation.UPDATE_USER: frozenset({Role.SYSTEM_ADMIN}),
    Operation.CREATE_STORE: frozenset({Role.SYSTEM_ADMIN}),
    Operation.VIEW_OWN_STORES: frozenset({Role.STORE_OWNER}),
    Operation.SUBMIT_RATING: frozenset({Role.NORMAL_USER}),
    Operation.VIEW_OWN_RATING: frozenset({Role.NORMAL_USER}),
    Operation.VIEW_STORE_RATINGS: frozenset({Role.STORE_OWNER}),
    Operation.VIEW_DASHBOARD: frozenset({Role.SYSTEM_ADMIN}),
}


def is_allowed(role: Role, operation: Operation) -> bool:
    return role in CAPABILITIES.get(operation, frozenset())


def authorize(identity, operation: Operation):
    """Return the identity if it may perform the operation, else raise."""
    if identity is None:
        raise Unauthorized()
    if not is_allowed(identity.role, operation):
        raise Forbidden()
    return identity


def current_identity(request: Request):
    """Identity attached by AuthMiddleware, or None for anonymous requests."""
    return getattr(request.state, "user", None)


def requires(operation: Operation):
    """FastAPI dependency factory gating a route on one operation."""

    def dependency(request: Request):
        return authorize(current_identity(request), operation)

    return dependency


def requires_any(*operations: Operation):
    """Gate on a set of operations; passes if any one of them is allowed."""

    def dependency(request: Request):
        identity = current_identity(request)
        if identity is None:
            raise Unauthorized()
        for operation in operations:
            if is_allowed(identity.role, operation):
                return identity
        raise Forbidden()

    return dependency
