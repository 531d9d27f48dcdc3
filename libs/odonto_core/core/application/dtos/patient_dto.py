from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel

from odonto_core.core.application.validation import PatchModel, aware, blank_to_none, email, text

PatientName = Annotated[
    str,
    text(
        min_length=2,
        max_length=100,
        min_message="Nome deve ter pelo menos 2 caracteres",
        max_message="Nome deve ter no máximo 100 caracteres",
    ),
]
PatientEmail = Annotated[str | None, blank_to_none(), email()]
Phone = Annotated[str | None, blank_to_none(), text(max_length=20, max_message="Telefone deve ter no máximo 20 caracteres")]
Cpf = Annotated[str | None, blank_to_none(), text(max_length=14, max_message="CPF deve ter no máximo 14 caracteres")]
BirthDate = Annotated[datetime | None, blank_to_none(), aware()]
Address = Annotated[str | None, blank_to_none(), text(max_length=500, max_message="Endereço deve ter no máximo 500 caracteres")]
Notes = Annotated[str | None, blank_to_none(), text(max_length=1000, max_message="Observações devem ter no máximo 1000 caracteres")]
Search = Annotated[
    str | None,
    blank_to_none(),
    text(max_length=100, max_message="Busca deve ter no máximo 100 caracteres"),
]


class CreatePatientDTO(BaseModel):
    name: PatientName
    email: PatientEmail = None
    phone: Phone = None
    cpf: Cpf = None
    birth_date: BirthDate = None
    address: Address = None
    notes: Notes = None


class UpdatePatientDTO(PatchModel):
    not_null = frozenset({"name", "is_active"})

    name: PatientName | None = None
    email: PatientEmail = None
    phone: Phone = None
    cpf: Cpf = None
    birth_date: BirthDate = None
    address: Address = None
    notes: Notes = None
    is_active: bool | None = None


class ListPatientsDTO(BaseModel):
    search: Search = None
    is_active: bool | None = None
