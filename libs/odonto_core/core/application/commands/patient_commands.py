import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import CommandDTO
from odonto_core.core.application.dtos.patient_dto import CreatePatientDTO, UpdatePatientDTO
from odonto_core.core.application.dtos.session_dto import SessionContext


@dataclass(frozen=True)
class CreatePatientCommand(CommandDTO):
    session: SessionContext
    payload: CreatePatientDTO

@dataclass(frozen=True)
class UpdatePatientCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: UpdatePatientDTO

@dataclass(frozen=True)
class DeactivatePatientCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
