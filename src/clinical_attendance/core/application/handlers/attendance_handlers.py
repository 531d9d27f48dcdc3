"""
Casos de uso de escrita do atendimento.

Todo handler recarrega o atendimento por `(id, clinic_id)` antes de agir;
atendimento de outra clínica é indistinguível de inexistente.
"""
import uuid

import structlog
from django.db import IntegrityError, transaction
from django.utils import timezone

from clinical_attendance.core.application.commands.attendance_commands import (
    AddAttendanceCidCommand,
    AddAttendanceProcedureCommand,
    CancelAttendanceCommand,
    CheckInAttendanceCommand,
    CreateClinicalDocumentCommand,
    FinishAttendanceCommand,
    RemoveAttendanceProcedureCommand,
    StartAttendanceCommand,
    UpdateAttendanceOdontogramCommand,
)
from clinical_attendance.core.domain.entities.attendance_cid_entity import AttendanceCidEntity
from clinical_attendance.core.domain.entities.attendance_entity import AttendanceEntity, AttendanceStatus
from clinical_attendance.core.domain.entities.attendance_procedure_entity import AttendanceProcedureEntity
from clinical_attendance.core.domain.entities.clinical_document_entity import ClinicalDocumentEntity
from clinical_attendance.core.domain.events.events import (
    AttendanceCanceledEvent,
    AttendanceCheckedInEvent,
    AttendanceFinishedEvent,
    AttendanceStartedEvent,
    ClinicalDocumentGeneratedEvent,
)
from clinical_attendance.core.domain.repositories.attendance_cid_repository import AttendanceCidRepository
from clinical_attendance.core.domain.repositories.attendance_odontogram_repository import (
    AttendanceOdontogramRepository,
)
from clinical_attendance.core.domain.repositories.attendance_procedure_repository import (
    AttendanceProcedureRepository,
)
from clinical_attendance.core.domain.repositories.attendance_repository import AttendanceRepository
from clinical_attendance.core.domain.repositories.clinical_document_repository import (
    ClinicalDocumentRepository,
)
from clinical_attendance.core.domain.services.attendance_policies import (
    ensure_accepts_clinical_data,
    ensure_can_cancel,
    ensure_can_finish,
    ensure_can_generate_document,
    ensure_can_start,
    resolve_effective_dentist,
)
from odonto_core.core.application.cqrs import CommandHandler
from odonto_core.core.application.dtos.session_dto import SessionContext
from odonto_core.core.application.handlers.guards import require_roles
from odonto_core.core.domain.entities.record_entity import RecordEntity
from odonto_core.core.domain.entities.user_entity import UserRole
from odonto_core.core.domain.exceptions import (
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from odonto_core.core.domain.repositories.appointment_repository import AppointmentRepository
from odonto_core.core.domain.repositories.dentist_repository import DentistRepository
from odonto_core.core.domain.repositories.patient_repository import PatientRepository
from odonto_core.core.domain.repositories.procedure_repository import ProcedureRepository
from odonto_core.core.domain.repositories.record_repository import RecordRepository
from odonto_core.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)

ATTENDANCE_NOT_FOUND = "Atendimento não encontrado"
DENTIST_NOT_FOUND = "Dentista não encontrado"
CHECK_IN_ROLES = (UserRole.OWNER, UserRole.ADMIN, UserRole.RECEPTIONIST, UserRole.DENTIST)


def load_attendance(repo: AttendanceRepository, attendance_id, clinic_id) -> AttendanceEntity:
    attendance = repo.find_by_id(attendance_id, clinic_id)
    if attendance is None:
        raise NotFoundError(ATTENDANCE_NOT_FOUND)
    return attendance


def caller_dentist_id(dentist_repo: DentistRepository, session: SessionContext) -> uuid.UUID | None:
    """Perfil de dentista do usuário da sessão, se houver."""
    if session.user_id is None:
        return None
    dentist = dentist_repo.find_by_user_id(session.user_id, session.clinic_id)
    return dentist.id if dentist else None


def _integrity_message(exc: IntegrityError) -> str:
    # sqlite: "attendances.appointment_id"; postgres: "uq_attendance_appointment"
    if "appointment" in str(exc):
        return "Este agendamento já possui um atendimento. Por favor, cancele o atendimento anterior primeiro."
    return "Já existe um registro com esses dados. Verifique se o agendamento já possui um atendimento."


# ╭──────────────────────────────────────────────╮
# │ Transições de status                         │
# ╰──────────────────────────────────────────────╯
class CheckInAttendanceHandler(CommandHandler[CheckInAttendanceCommand]):
    def __init__(
        self,
        repo: AttendanceRepository,
        patient_repo: PatientRepository,
        appointment_repo: AppointmentRepository,
        dentist_repo: DentistRepository,
        dispatcher: EventDispatcher,
    ):
        self.repo = repo
        self.patient_repo = patient_repo
        self.appointment_repo = appointment_repo
        self.dentist_repo = dentist_repo
        self.dispatcher = dispatcher

    def handle(self, command: CheckInAttendanceCommand) -> AttendanceEntity:
        session = command.session
        payload = command.payload
        require_roles(
            session, CHECK_IN_ROLES, "Apenas OWNER, ADMIN, RECEPTIONIST ou DENTIST podem criar atendimento"
        )

        patient = self.patient_repo.find_by_id(payload.patient_id, session.clinic_id)
        if patient is None or not patient.is_active:
            raise NotFoundError("Paciente não encontrado ou inativo")

        dentist_id = payload.dentist_id
        if dentist_id and self.dentist_repo.find_by_id(dentist_id, session.clinic_id) is None:
            raise NotFoundError(DENTIST_NOT_FOUND)

        try:
            with transaction.atomic():
                if payload.appointment_id:
                    appointment = self.appointment_repo.find_by_id(payload.appointment_id, session.clinic_id)
                    if appointment is None:
                        raise NotFoundError("Agendamento não encontrado")
                    dentist_id = dentist_id or appointment.dentist_id

                    if self.repo.find_active_by_appointment(appointment.id, session.clinic_id):
                        raise ConflictError("Este agendamento já possui um atendimento em andamento")
                    # atendimentos encerrados liberam o agendamento para um novo check-in
                    detached = self.repo.detach_appointment(appointment.id, session.clinic_id)
                    if detached:
                        logger.info(
                            "attendance.appointment_detached",
                            appointment_id=str(appointment.id),
                            count=detached,
                        )

                attendance = self.repo.create(
                    AttendanceEntity(
                        id=uuid.uuid4(),
                        clinic_id=session.clinic_id,
                        patient_id=patient.id,
                        dentist_id=dentist_id,
                        appointment_id=payload.appointment_id,
                        status=AttendanceStatus.CHECKED_IN,
                        arrival_at=timezone.now(),
                        created_by_id=session.user_id,
                        created_by_role=session.role.value,
                    )
                )
        except IntegrityError as exc:
            raise ConflictError(_integrity_message(exc)) from exc

        logger.info(
            "attendance.checked_in",
            attendance_id=str(attendance.id),
            clinic_id=str(attendance.clinic_id),
            status=attendance.status,
        )
        self.dispatcher.dispatch(
            AttendanceCheckedInEvent(
                attendance_id=attendance.id,
                clinic_id=attendance.clinic_id,
                patient_id=attendance.patient_id,
                appointment_id=attendance.appointment_id,
            )
        )
        return attendance


class StartAttendanceHandler(CommandHandler[StartAttendanceCommand]):
    """CHECKED_IN → IN_PROGRESS. Quem não é proprietário só inicia com o próprio perfil de dentista."""

    def __init__(self, repo: AttendanceRepository, dentist_repo: DentistRepository, dispatcher: EventDispatcher):
        self.repo = repo
        self.dentist_repo = dentist_repo
        self.dispatcher = dispatcher

    def handle(self, command: StartAttendanceCommand) -> AttendanceEntity:
        session = command.session
        attendance = load_attendance(self.repo, command.id, session.clinic_id)
        ensure_can_start(attendance)

        dentist = self.dentist_repo.find_by_id(command.payload.dentist_id, session.clinic_id)
        if session.is_owner:
            if dentist is None:
                raise NotFoundError(DENTIST_NOT_FOUND)
        elif dentist is None or (session.user_id and not dentist.belongs_to(session.user_id)):
            raise NotFoundError("Dentista não encontrado ou não autorizado")

        updated = self.repo.update(
            attendance.id,
            session.clinic_id,
            {
                "status": AttendanceStatus.IN_PROGRESS,
                "dentist_id": dentist.id,
                "started_at": timezone.now(),
            },
        )
        logger.info(
            "attendance.started",
            attendance_id=str(updated.id),
            clinic_id=str(updated.clinic_id),
            status=updated.status,
            dentist_id=str(dentist.id),
        )
        self.dispatcher.dispatch(
            AttendanceStartedEvent(attendance_id=updated.id, clinic_id=updated.clinic_id, dentist_id=dentist.id)
        )
        return updated


class FinishAttendanceHandler(CommandHandler[FinishAttendanceCommand]):
    """
    IN_PROGRESS → DONE, gerando o prontuário (Record) na mesma transação.

    Exige ao menos um CID, ao menos um procedimento e dentista atribuído.
    """

    def __init__(
        self,
        repo: AttendanceRepository,
        cid_repo: AttendanceCidRepository,
        procedure_repo: AttendanceProcedureRepository,
        odontogram_repo: AttendanceOdontogramRepository,
        record_repo: RecordRepository,
        dispatcher: EventDispatcher,
    ):
        self.repo = repo
        self.cid_repo = cid_repo
        self.procedure_repo = procedure_repo
        self.odontogram_repo = odontogram_repo
        self.record_repo = record_repo
        self.dispatcher = dispatcher

    def handle(self, command: FinishAttendanceCommand) -> AttendanceEntity:
        session = command.session
        attendance = load_attendance(self.repo, command.id, session.clinic_id)
        ensure_can_finish(attendance)

        if self.cid_repo.count_by_attendance_id(attendance.id) == 0:
            raise BusinessRuleError("É necessário adicionar pelo menos um CID antes de finalizar")
        # ordem de lançamento
        procedures = list(reversed(self.procedure_repo.find_by_attendance_id(attendance.id)))
        if not procedures:
            raise BusinessRuleError("É necessário adicionar pelo menos um procedimento antes de finalizar")
        if attendance.dentist_id is None:
            raise BusinessRuleError("Atendimento deve ter um dentista associado")

        cids = self.cid_repo.find_by_attendance_id(attendance.id)
        odontogram = self.odontogram_repo.find_by_attendance_id(attendance.id)
        finished_at = timezone.now()

        with transaction.atomic():
            self.repo.update(
                attendance.id,
                session.clinic_id,
                {"status": AttendanceStatus.DONE, "finished_at": finished_at},
            )
            record = self.record_repo.create(
                RecordEntity(
                    id=uuid.uuid4(),
                    clinic_id=session.clinic_id,
                    patient_id=attendance.patient_id,
                    dentist_id=attendance.dentist_id,
                    appointment_id=attendance.appointment_id,
                    attendance_id=attendance.id,
                    date=finished_at,
                    description=self._describe(attendance, cids, procedures),
                    procedures=[
                        {"code": p.record_code, "description": p.description, "tooth": p.tooth}
                        for p in procedures
                    ],
                    odontogram=odontogram.data if odontogram else None,
                )
            )

        logger.info(
            "attendance.finished",
            attendance_id=str(attendance.id),
            clinic_id=str(session.clinic_id),
            status=AttendanceStatus.DONE.value,
            record_id=str(record.id),
        )
        self.dispatcher.dispatch(
            AttendanceFinishedEvent(attendance_id=attendance.id, clinic_id=session.clinic_id, record_id=record.id)
        )
        return self.repo.find_by_id(attendance.id, session.clinic_id)

    @staticmethod
    def _describe(attendance: AttendanceEntity, cids, procedures) -> str:
        day = timezone.localtime(attendance.arrival_at).strftime("%d/%m/%Y")
        return (
            f"Atendimento realizado em {day}.\n"
            f"CIDs: {', '.join(c.cid_code for c in cids)}\n"
            f"Procedimentos: {', '.join(p.description or '' for p in procedures)}"
        )


class CancelAttendanceHandler(CommandHandler[CancelAttendanceCommand]):
    def __init__(self, repo: AttendanceRepository, dispatcher: EventDispatcher):
        self.repo = repo
        self.dispatcher = dispatcher

    def handle(self, command: CancelAttendanceCommand) -> AttendanceEntity:
        session = command.session
        attendance = load_attendance(self.repo, command.id, session.clinic_id)
        ensure_can_cancel(attendance)

        # libera o agendamento para um novo check-in
        updated = self.repo.update(
            attendance.id,
            session.clinic_id,
            {"status": AttendanceStatus.CANCELED, "appointment_id": None},
        )
        logger.info(
            "attendance.canceled",
            attendance_id=str(updated.id),
            clinic_id=str(updated.clinic_id),
            status=updated.status,
            previous_status=attendance.status,
        )
        self.dispatcher.dispatch(
            AttendanceCanceledEvent(
                attendance_id=updated.id,
                clinic_id=updated.clinic_id,
                previous_status=attendance.status,
                reason=command.payload.reason,
            )
        )
        return updated


# ╭──────────────────────────────────────────────╮
# │ Dados clínicos (IN_PROGRESS ou DONE)         │
# ╰──────────────────────────────────────────────╯
class AddAttendanceCidHandler(CommandHandler[AddAttendanceCidCommand]):
    def __init__(
        self,
        repo: AttendanceRepository,
        cid_repo: AttendanceCidRepository,
        dentist_repo: DentistRepository,
    ):
        self.repo = repo
        self.cid_repo = cid_repo
        self.dentist_repo = dentist_repo

    def handle(self, command: AddAttendanceCidCommand) -> AttendanceEntity:
        session = command.session
        payload = command.payload
        attendance = load_attendance(self.repo, command.id, session.clinic_id)
        ensure_accepts_clinical_data(
            attendance, "CID só pode ser adicionado em atendimentos em andamento ou finalizados"
        )

        author_id = (
            payload.dentist_id
            or caller_dentist_id(self.dentist_repo, session)
            or attendance.dentist_id
        )
        dentist = self.dentist_repo.find_by_id(author_id, session.clinic_id) if author_id else None
        if dentist is None:
            raise NotFoundError(DENTIST_NOT_FOUND)

        self.cid_repo.create(
            AttendanceCidEntity(
                id=uuid.uuid4(),
                attendance_id=attendance.id,
                cid_code=payload.cid_code,
                description=payload.description,
                observation=payload.observation,
                created_by_dentist_id=dentist.id,
            )
        )
        return self.repo.find_by_id(attendance.id, session.clinic_id)


class AddAttendanceProcedureHandler(CommandHandler[AddAttendanceProcedureCommand]):
    """
    Lança um procedimento do catálogo no atendimento.

    O preço é congelado com o `base_value` vigente e o dentista
    responsável segue `resolve_effective_dentist`.
    """

    def __init__(
        self,
        repo: AttendanceRepository,
        procedure_repo: AttendanceProcedureRepository,
        catalog_repo: ProcedureRepository,
        dentist_repo: DentistRepository,
    ):
        self.repo = repo
        self.procedure_repo = procedure_repo
        self.catalog_repo = catalog_repo
        self.dentist_repo = dentist_repo

    def handle(self, command: AddAttendanceProcedureCommand) -> AttendanceEntity:
        session = command.session
        payload = command.payload
        attendance = load_attendance(self.repo, command.id, session.clinic_id)
        ensure_accepts_clinical_data(
            attendance, "Procedimento só pode ser adicionado em atendimentos em andamento ou finalizados"
        )

        procedure = self.catalog_repo.find_by_id(payload.procedure_id, session.clinic_id)
        if procedure is None or not procedure.is_active:
            raise NotFoundError("Procedimento não encontrado ou inativo")

        caller = command.caller_dentist_id or caller_dentist_id(self.dentist_repo, session)
        dentist_id = resolve_effective_dentist(attendance, caller)
        if dentist_id is None:
            raise NotFoundError(DENTIST_NOT_FOUND)
        if not self.dentist_repo.has_procedure(dentist_id, procedure.id):
            raise BusinessRuleError("Procedimento não está vinculado a este dentista")

        self.procedure_repo.create(
            AttendanceProcedureEntity(
                id=uuid.uuid4(),
                attendance_id=attendance.id,
                dentist_id=dentist_id,
                procedure_id=procedure.id,
                procedure_code=payload.procedure_code,
                description=procedure.name,
                tooth=payload.tooth,
                faces=list(payload.faces),
                surface=payload.surface,
                quantity=payload.quantity,
                clinical_status=payload.clinical_status,
                price=procedure.base_value,
                observations=payload.observations,
            )
        )
        return self.repo.find_by_id(attendance.id, session.clinic_id)


class RemoveAttendanceProcedureHandler(CommandHandler[RemoveAttendanceProcedureCommand]):
    """Exclusão física do lançamento; demais cadastros usam exclusão lógica."""

    def __init__(self, repo: AttendanceRepository, procedure_repo: AttendanceProcedureRepository):
        self.repo = repo
        self.procedure_repo = procedure_repo

    def handle(self, command: RemoveAttendanceProcedureCommand) -> None:
        session = command.session
        attendance = load_attendance(self.repo, command.id, session.clinic_id)
        ensure_accepts_clinical_data(
            attendance, "Procedimento só pode ser removido em atendimentos em andamento ou finalizados"
        )
        if self.procedure_repo.find_by_id(command.procedure_id, attendance.id) is None:
            raise NotFoundError("Procedimento não encontrado neste atendimento")

        self.procedure_repo.delete(command.procedure_id, attendance.id)
        logger.info(
            "attendance.procedure_removed",
            attendance_id=str(attendance.id),
            procedure_id=str(command.procedure_id),
        )
        return None


class UpdateAttendanceOdontogramHandler(CommandHandler[UpdateAttendanceOdontogramCommand]):
    def __init__(self, repo: AttendanceRepository, odontogram_repo: AttendanceOdontogramRepository):
        self.repo = repo
        self.odontogram_repo = odontogram_repo

    def handle(self, command: UpdateAttendanceOdontogramCommand) -> AttendanceEntity:
        session = command.session
        attendance = load_attendance(self.repo, command.id, session.clinic_id)
        ensure_accepts_clinical_data(
            attendance, "Odontograma só pode ser atualizado em atendimentos em andamento ou finalizados"
        )
        self.odontogram_repo.upsert(attendance.id, command.payload.data)
        return self.repo.find_by_id(attendance.id, session.clinic_id)


class CreateClinicalDocumentHandler(CommandHandler[CreateClinicalDocumentCommand]):
    def __init__(
        self,
        repo: AttendanceRepository,
        document_repo: ClinicalDocumentRepository,
        dispatcher: EventDispatcher,
    ):
        self.repo = repo
        self.document_repo = document_repo
        self.dispatcher = dispatcher

    def handle(self, command: CreateClinicalDocumentCommand) -> dict:
        session = command.session
        attendance = load_attendance(self.repo, command.id, session.clinic_id)
        ensure_can_generate_document(attendance)
        if session.user_id is None:
            raise PermissionDeniedError("Documentos clínicos exigem um usuário identificado")

        document = self.document_repo.create(
            ClinicalDocumentEntity(
                id=uuid.uuid4(),
                attendance_id=attendance.id,
                type=command.payload.type,
                payload=command.payload.payload,
                generated_by=session.user_id,
            )
        )
        self.dispatcher.dispatch(
            ClinicalDocumentGeneratedEvent(
                document_id=document.id,
                attendance_id=attendance.id,
                clinic_id=session.clinic_id,
                type=document.type,
            )
        )
        return {"document": document, "attendance": self.repo.find_by_id(attendance.id, session.clinic_id)}
