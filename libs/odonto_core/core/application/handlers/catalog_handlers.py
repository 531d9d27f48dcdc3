import uuid

import structlog

from odonto_core.core.application.commands.catalog_commands import (
    CreateProcedureCommand,
    CreateSpecialtyCommand,
    SetProcedureActiveCommand,
    UpdateProcedureCommand,
    UpdateSpecialtyCommand,
)
from odonto_core.core.application.cqrs import CommandHandler
from odonto_core.core.application.handlers.guards import require_manager
from odonto_core.core.domain.entities.procedure_entity import ProcedureEntity
from odonto_core.core.domain.entities.specialty_entity import SpecialtyEntity
from odonto_core.core.domain.exceptions import BusinessRuleError, ConflictError, NotFoundError
from odonto_core.core.domain.repositories.procedure_repository import ProcedureRepository
from odonto_core.core.domain.repositories.specialty_repository import SpecialtyRepository

logger = structlog.get_logger(__name__)

SPECIALTY_NOT_FOUND = "Especialidade não encontrada"
SPECIALTY_NAME_TAKEN = "Já existe uma especialidade com este nome"
PROCEDURE_NOT_FOUND = "Procedimento não encontrado"


# ——— ESPECIALIDADES ————————————————————————————————————————

class CreateSpecialtyHandler(CommandHandler[CreateSpecialtyCommand]):
    def __init__(self, repo: SpecialtyRepository):
        self.repo = repo

    def handle(self, command: CreateSpecialtyCommand) -> SpecialtyEntity:
        session, payload = command.session, command.payload
        require_manager(session, "Apenas proprietários e administradores podem criar especialidades")
        if self.repo.find_by_name(payload.name, session.clinic_id):
            raise ConflictError(SPECIALTY_NAME_TAKEN)
        return self.repo.create(
            SpecialtyEntity(id=uuid.uuid4(), clinic_id=session.clinic_id, **payload.model_dump())
        )


class UpdateSpecialtyHandler(CommandHandler[UpdateSpecialtyCommand]):
    def __init__(self, repo: SpecialtyRepository):
        self.repo = repo

    def handle(self, command: UpdateSpecialtyCommand) -> SpecialtyEntity:
        session = command.session
        require_manager(session, "Apenas proprietários e administradores podem editar especialidades")
        specialty = self.repo.find_by_id(command.id, session.clinic_id)
        if specialty is None:
            raise NotFoundError(SPECIALTY_NOT_FOUND)

        changes = command.payload.changes()
        name = changes.get("name")
        if name and self.repo.find_by_name(name, session.clinic_id, exclude_id=specialty.id):
            raise ConflictError(SPECIALTY_NAME_TAKEN)
        if not changes:
            return specialty
        return self.repo.update(specialty.id, session.clinic_id, changes)


# ——— PROCEDIMENTOS —————————————————————————————————————————

class CreateProcedureHandler(CommandHandler[CreateProcedureCommand]):
    def __init__(self, repo: ProcedureRepository, specialty_repo: SpecialtyRepository):
        self.repo = repo
        self.specialty_repo = specialty_repo

    def handle(self, command: CreateProcedureCommand) -> ProcedureEntity:
        session, payload = command.session, command.payload
        require_manager(session, "Apenas proprietários e administradores podem criar procedimentos")
        if self.specialty_repo.find_by_id(payload.specialty_id, session.clinic_id) is None:
            raise NotFoundError(SPECIALTY_NOT_FOUND)
        return self.repo.create(
            ProcedureEntity(id=uuid.uuid4(), clinic_id=session.clinic_id, **payload.model_dump())
        )


class UpdateProcedureHandler(CommandHandler[UpdateProcedureCommand]):
    def __init__(self, repo: ProcedureRepository, specialty_repo: SpecialtyRepository):
        self.repo = repo
        self.specialty_repo = specialty_repo

    def handle(self, command: UpdateProcedureCommand) -> ProcedureEntity:
        session = command.session
        require_manager(session, "Apenas proprietários e administradores podem atualizar procedimentos")
        procedure = self.repo.find_by_id(command.id, session.clinic_id)
        if procedure is None:
            raise NotFoundError(PROCEDURE_NOT_FOUND)

        changes = command.payload.changes()
        specialty_id = changes.get("specialty_id")
        if specialty_id and self.specialty_repo.find_by_id(specialty_id, session.clinic_id) is None:
            raise NotFoundError(SPECIALTY_NOT_FOUND)
        if not changes:
            return procedure
        return self.repo.update(procedure.id, session.clinic_id, changes)


class SetProcedureActiveHandler(CommandHandler[SetProcedureActiveCommand]):
    """
    Ativa ou inativa um procedimento do catálogo.
    Inativação bloqueada enquanto houver agendamentos pendentes usando-o.
    """

    def __init__(self, repo: ProcedureRepository):
        self.repo = repo

    def handle(self, command: SetProcedureActiveCommand) -> ProcedureEntity:
        session = command.session
        verb = "ativar" if command.active else "inativar"
        require_manager(session, f"Apenas proprietários e administradores podem {verb} procedimentos")
        procedure = self.repo.find_by_id(command.id, session.clinic_id)
        if procedure is None:
            raise NotFoundError(PROCEDURE_NOT_FOUND)

        if not command.active and self.repo.has_pending_appointments(procedure.id):
            raise BusinessRuleError("Não é possível desativar procedimento com agendamentos pendentes")

        logger.info("procedure.active_changed", procedure_id=str(procedure.id), active=command.active)
        return self.repo.update(procedure.id, session.clinic_id, {"is_active": command.active})
