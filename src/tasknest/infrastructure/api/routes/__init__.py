"""API route handlers."""

from tasknest.infrastructure.api.routes.auth_router import router as auth_router
from tasknest.infrastructure.api.routes.invitations_router import router as invitations_router
from tasknest.infrastructure.api.routes.users_router import router as users_router
from tasknest.infrastructure.api.routes.workspaces_router import router as workspaces_router

__all__ = ["auth_router", "invitations_router", "users_router", "workspaces_router"]
