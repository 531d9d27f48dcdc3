from collections.abc import Iterable

from odonto_core.core.application.dtos.session_dto import MANAGER_ROLES, SessionContext
from odonto_core.core.domain.entities.user_entity import UserRole
from odonto_core.core.domain.exceptions import PermissionDeniedError


def require_roles(session: SessionContext, roles: Iterable[UserRole], message: str) -> None:
    if session.role not in set(roles):
        raise PermissionDeniedError(message)


def require_manager(session: SessionContext, message: str) -> None:
    """Apenas OWNER e ADMIN."""
    require_roles(session, MANAGER_ROLES, message)
