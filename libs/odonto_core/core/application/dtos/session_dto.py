from __future__ import annotations

import uuid
from dataclasses import dataclass

from odonto_core.core.domain.entities.user_entity import UserRole

MANAGER_ROLES = frozenset({UserRole.OWNER, UserRole.ADMIN})


@dataclass(frozen=True, slots=True)
class SessionContext:
    """
    Identidade de quem chama um caso de uso.

    Sempre passada explicitamente às fachadas; o núcleo não lê sessão
    de nenhum contexto global.
    """
    clinic_id: uuid.UUID
    role: UserRole
    user_id: uuid.UUID | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.role, UserRole):
            object.__setattr__(self, "role", UserRole(self.role))
        if self.clinic_id is not None and not isinstance(self.clinic_id, uuid.UUID):
            object.__setattr__(self, "clinic_id", uuid.UUID(str(self.clinic_id)))
        if self.user_id is not None and not isinstance(self.user_id, uuid.UUID):
            object.__setattr__(self, "user_id", uuid.UUID(str(self.user_id)))

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER

    @property
    def is_manager(self) -> bool:
        return self.role in MANAGER_ROLES

    def log_context(self) -> dict[str, str | None]:
        return {
            "clinic_id": str(self.clinic_id),
            "user_id": str(self.user_id) if self.user_id else None,
            "role": self.role.value,
        }
