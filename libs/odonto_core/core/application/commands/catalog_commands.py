import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import CommandDTO
from odonto_core.core.application.dtos.catalog_dto import (
    CreateProcedureDTO,
    CreateSpecialtyDTO,
    UpdateProcedureDTO,
    UpdateSpecialtyDTO,
)
from odonto_core.core.application.dtos.session_dto import SessionContext


# ——— ESPECIALIDADES ————————————————————————————————————————

@dataclass(frozen=True)
class CreateSpecialtyCommand(CommandDTO):
    session: SessionContext
    payload: CreateSpecialtyDTO

@dataclass(frozen=True)
class UpdateSpecialtyCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: UpdateSpecialtyDTO


# ——— PROCEDIMENTOS —————————————————————————————————————————

@dataclass(frozen=True)
class CreateProcedureCommand(CommandDTO):
    session: SessionContext
    payload: CreateProcedureDTO

@dataclass(frozen=True)
class UpdateProcedureCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: UpdateProcedureDTO

@dataclass(frozen=True)
class SetProcedureActiveCommand(CommandDTO):
    """Ativa (`active=True`) ou inativa um procedimento."""
    session: SessionContext
    id: uuid.UUID
    active: bool
