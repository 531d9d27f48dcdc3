import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import CommandDTO
from odonto_core.core.application.dtos.dentist_dto import (
    AssociateDentistSpecialtiesDTO,
    CreateDentistDTO,
    UpdateDentistDTO,
    UpdateDentistProceduresDTO,
    UpdateDentistProfileDTO,
)
from odonto_core.core.application.dtos.session_dto import SessionContext


@dataclass(frozen=True)
class CreateDentistCommand(CommandDTO):
    session: SessionContext
    payload: CreateDentistDTO

@dataclass(frozen=True)
class UpdateDentistCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: UpdateDentistDTO

@dataclass(frozen=True)
class UpdateDentistProfileCommand(CommandDTO):
    """Edição do perfil identificada pelo usuário dono do perfil."""
    session: SessionContext
    user_id: uuid.UUID
    payload: UpdateDentistProfileDTO

@dataclass(frozen=True)
class UpdateDentistProceduresCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: UpdateDentistProceduresDTO

@dataclass(frozen=True)
class AssociateDentistSpecialtiesCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: AssociateDentistSpecialtiesDTO

@dataclass(frozen=True)
class RemoveDentistSpecialtyCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    specialty_id: uuid.UUID

@dataclass(frozen=True)
class DeactivateDentistCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
