from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel

from odonto_core.core.application.dtos.patient_dto import PatientName, Search
from odonto_core.core.application.validation import PatchModel, email, one_of, text
from odonto_core.core.domain.entities.user_entity import UserRole

UserEmail = Annotated[str, email()]
Password = Annotated[
    str,
    text(
        min_length=6,
        max_length=100,
        min_message="Senha deve ter pelo menos 6 caracteres",
        max_message="Senha deve ter no máximo 100 caracteres",
        strip=False,
    ),
]
Role = Annotated[
    str,
    one_of({r.value for r in UserRole}, "Cargo deve ser OWNER, ADMIN, DENTIST ou RECEPTIONIST"),
]


class CreateUserDTO(BaseModel):
    name: PatientName
    email: UserEmail
    password: Password
    role: Role


class UpdateUserDTO(PatchModel):
    not_null = frozenset({"name", "email", "password", "role", "is_active"})

    name: PatientName | None = None
    email: UserEmail | None = None
    password: Password | None = None
    role: Role | None = None
    is_active: bool | None = None


class ListUsersDTO(BaseModel):
    role: Role | None = None
    is_active: bool | None = None
    search: Search = None
