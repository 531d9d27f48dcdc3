import uuid

import structlog

from odonto_core.core.application.commands.patient_commands import (
    CreatePatientCommand,
    DeactivatePatientCommand,
    UpdatePatientCommand,
)
from odonto_core.core.application.cqrs import CommandHandler
from odonto_core.core.application.handlers.guards import require_manager
from odonto_core.core.domain.entities.patient_entity import PatientEntity
from odonto_core.core.domain.events.events import PatientDeactivatedEvent
from odonto_core.core.domain.exceptions import ConflictError, NotFoundError
from odonto_core.core.domain.repositories.patient_repository import PatientRepository
from odonto_core.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)

CPF_TAKEN = "Este CPF já está cadastrado na clínica"
EMAIL_TAKEN = "Este email já está cadastrado na clínica"


def _ensure_unique(repo: PatientRepository, clinic_id, cpf, email, exclude_id=None) -> None:
    if cpf and repo.find_by_cpf(cpf, clinic_id, exclude_id=exclude_id):
        raise ConflictError(CPF_TAKEN)
    if email and repo.find_by_email(email, clinic_id, exclude_id=exclude_id):
        raise ConflictError(EMAIL_TAKEN)


class CreatePatientHandler(CommandHandler[CreatePatientCommand]):
    def __init__(self, repo: PatientRepository):
        self.repo = repo

    def handle(self, command: CreatePatientCommand) -> PatientEntity:
        clinic_id = command.session.clinic_id
        data = command.payload.model_dump()
        _ensure_unique(self.repo, clinic_id, data["cpf"], data["email"])
        entity = PatientEntity(id=uuid.uuid4(), clinic_id=clinic_id, **data)
        return self.repo.create(entity)


class UpdatePatientHandler(CommandHandler[UpdatePatientCommand]):
    def __init__(self, repo: PatientRepository):
        self.repo = repo

    def handle(self, command: UpdatePatientCommand) -> PatientEntity:
        clinic_id = command.session.clinic_id
        current = self.repo.find_by_id(command.id, clinic_id)
        if current is None:
            raise NotFoundError("Paciente não encontrado")

        changes = command.payload.changes()
        _ensure_unique(
            self.repo,
            clinic_id,
            changes.get("cpf") if changes.get("cpf") != current.cpf else None,
            changes.get("email") if changes.get("email") != current.email else None,
            exclude_id=current.id,
        )
        if not changes:
            return current
        return self.repo.update(current.id, clinic_id, changes)


class DeactivatePatientHandler(CommandHandler[DeactivatePatientCommand]):
    """Exclusão lógica: o histórico clínico do paciente é preservado."""

    def __init__(self, repo: PatientRepository, dispatcher: EventDispatcher):
        self.repo = repo
        self.dispatcher = dispatcher

    def handle(self, command: DeactivatePatientCommand) -> PatientEntity:
        session = command.session
        require_manager(session, "Apenas proprietários e administradores podem desativar pacientes")
        current = self.repo.find_by_id(command.id, session.clinic_id)
        if current is None:
            raise NotFoundError("Paciente não encontrado")

        patient = self.repo.update(current.id, session.clinic_id, {"is_active": False})
        logger.info("patient.deactivated", patient_id=str(patient.id))
        self.dispatcher.dispatch(PatientDeactivatedEvent(patient_id=patient.id, clinic_id=patient.clinic_id))
        return patient
