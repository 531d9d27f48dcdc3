from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from odonto_core.core.domain.entities._base import EntityMixin


class UserRole(StrEnum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    DENTIST = "DENTIST"
    RECEPTIONIST = "RECEPTIONIST"


@dataclass(slots=True)
class UserEntity(EntityMixin):
    id: uuid.UUID
    clinic_id: uuid.UUID
    name: str
    email: str
    role: str
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def summary(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email, "is_active": self.is_active}
