"""DTOs do catálogo clínico: especialidades, procedimentos e CIDs."""
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel

from odonto_core.core.application.dtos.patient_dto import Search
from odonto_core.core.application.validation import PatchModel, blank_to_none, number, text

CatalogName = Annotated[
    str,
    text(
        min_length=2,
        max_length=100,
        min_message="Nome deve ter no mínimo 2 caracteres",
        max_message="Nome deve ter no máximo 100 caracteres",
    ),
]
Description = Annotated[
    str | None,
    blank_to_none(),
    text(max_length=500, max_message="Descrição deve ter no máximo 500 caracteres"),
]
BaseValue = Annotated[Decimal, number(ge=0, ge_message="Valor base deve ser maior ou igual a 0")]
CommissionPercentage = Annotated[
    Decimal,
    number(
        ge=0,
        le=100,
        ge_message="Comissão deve ser maior ou igual a 0",
        le_message="Comissão deve ser menor ou igual a 100",
    ),
]


# ───────────────────────────────────────────────
# Especialidades
# ───────────────────────────────────────────────
class CreateSpecialtyDTO(BaseModel):
    name: CatalogName
    description: Description = None
    is_active: bool = True


class UpdateSpecialtyDTO(PatchModel):
    not_null = frozenset({"name", "is_active"})

    name: CatalogName | None = None
    description: Description = None
    is_active: bool | None = None


class ListSpecialtiesDTO(BaseModel):
    search: Search = None
    is_active: bool | None = None


# ───────────────────────────────────────────────
# Procedimentos
# ───────────────────────────────────────────────
class CreateProcedureDTO(BaseModel):
    specialty_id: uuid.UUID
    name: CatalogName
    description: Description = None
    base_value: BaseValue
    commission_percentage: CommissionPercentage = Decimal("0")
    is_active: bool = True


class UpdateProcedureDTO(PatchModel):
    not_null = frozenset({"specialty_id", "name", "base_value", "commission_percentage", "is_active"})

    specialty_id: uuid.UUID | None = None
    name: CatalogName | None = None
    description: Description = None
    base_value: BaseValue | None = None
    commission_percentage: CommissionPercentage | None = None
    is_active: bool | None = None


class ListProceduresDTO(BaseModel):
    specialty_id: uuid.UUID | None = None
    search: Search = None
    is_active: bool | None = None


# ───────────────────────────────────────────────
# CID-10
# ───────────────────────────────────────────────
class SearchCidsDTO(BaseModel):
    query: Annotated[str, text(max_length=100, max_message="Busca deve ter no máximo 100 caracteres")] = ""
    limit: Annotated[
        int,
        number(ge=1, le=50, ge_message="Limite deve ser no mínimo 1", le_message="Limite deve ser no máximo 50"),
    ] = 20
