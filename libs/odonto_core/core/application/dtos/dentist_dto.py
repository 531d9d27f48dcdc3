from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel

from odonto_core.core.application.dtos.patient_dto import Search
from odonto_core.core.application.validation import PatchModel, blank_to_none, email, items_count, number, text

CRO_PATTERN = r"^CRO-[A-Z]{2}\s+\d+$"
PROFILE_USER_FIELDS = frozenset({"name", "email"})

Cro = Annotated[
    str,
    text(
        min_length=1,
        max_length=50,
        min_message="CRO é obrigatório",
        max_message="CRO deve ter no máximo 50 caracteres",
        pattern=CRO_PATTERN,
        pattern_message="CRO deve seguir o formato: CRO-SP 12345",
    ),
]
SpecialtyText = Annotated[
    str | None,
    blank_to_none(),
    text(max_length=100, max_message="Especialidade deve ter no máximo 100 caracteres"),
]
Commission = Annotated[
    Decimal | None,
    number(ge=0, le=100, ge_message="Comissão deve ser no mínimo 0%", le_message="Comissão deve ser no máximo 100%"),
]
ProfileEmail = Annotated[str | None, blank_to_none(), email()]


class CreateDentistDTO(BaseModel):
    user_id: uuid.UUID
    cro: Cro
    specialty: SpecialtyText = None
    working_hours: dict[str, Any] | None = None
    bank_info: dict[str, Any] | None = None
    commission: Commission = None


class UpdateDentistDTO(PatchModel):
    not_null = frozenset({"cro"})

    cro: Cro | None = None
    specialty: SpecialtyText = None
    working_hours: dict[str, Any] | None = None
    bank_info: dict[str, Any] | None = None
    commission: Commission = None


class UpdateDentistProfileDTO(UpdateDentistDTO):
    """Autoatendimento: também altera nome e e-mail do usuário vinculado."""
    not_null = frozenset({"cro", "name", "email"})

    name: Annotated[
        str | None,
        text(
            min_length=2,
            max_length=100,
            min_message="Nome deve ter pelo menos 2 caracteres",
            max_message="Nome deve ter no máximo 100 caracteres",
        ),
    ] = None
    email: ProfileEmail = None


class UpdateDentistProceduresDTO(BaseModel):
    procedure_ids: list[uuid.UUID]


class AssociateDentistSpecialtiesDTO(BaseModel):
    specialty_ids: Annotated[
        list[uuid.UUID],
        items_count(
            min_items=1,
            max_items=50,
            min_message="Selecione pelo menos uma especialidade",
            max_message="Máximo de 50 especialidades por dentista",
        ),
    ]


class ListDentistsDTO(BaseModel):
    specialty: SpecialtyText = None
    search: Search = None
