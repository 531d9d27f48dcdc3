from typing import Any

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
from clinical_attendance.core.application.dtos.attendance_dto import (
    AddAttendanceCidDTO,
    AddAttendanceProcedureDTO,
    CancelAttendanceDTO,
    CheckInAttendanceDTO,
    CreateClinicalDocumentDTO,
    ListAttendancesDTO,
    StartAttendanceDTO,
    UpdateAttendanceOdontogramDTO,
)
from clinical_attendance.core.application.queries.attendance_queries import (
    GetAttendanceQuery,
    ListAttendancesQuery,
    ListWaitingRoomQuery,
)
from odonto_core.adapters.observability.decorators import as_operation_result
from odonto_core.core.application.cqrs import BaseService
from odonto_core.core.application.dtos.session_dto import SessionContext
from odonto_core.core.application.validation import as_uuid

ATTENDANCE_NOT_FOUND = "Atendimento não encontrado"


class AttendanceService(BaseService):
    """
    Fachada do ciclo de vida do atendimento.

    Toda operação recebe a `SessionContext` de quem chama e devolve um
    `OperationResult`; nenhuma falha esperada escapa como exceção.
    """

    def _id(self, attendance_id):
        return as_uuid(attendance_id, ATTENDANCE_NOT_FOUND)

    # ────────────────────────── transições ──────────────────────────
    @as_operation_result("check_in_attendance")
    def check_in_attendance(self, session: SessionContext, data: dict[str, Any]):
        payload = CheckInAttendanceDTO.model_validate(data)
        return self.execute(CheckInAttendanceCommand(session=session, payload=payload))

    @as_operation_result("start_attendance")
    def start_attendance(self, session: SessionContext, attendance_id, data: dict[str, Any]):
        payload = StartAttendanceDTO.model_validate(data)
        return self.execute(StartAttendanceCommand(session=session, id=self._id(attendance_id), payload=payload))

    @as_operation_result("finish_attendance")
    def finish_attendance(self, session: SessionContext, attendance_id):
        return self.execute(FinishAttendanceCommand(session=session, id=self._id(attendance_id)))

    @as_operation_result("cancel_attendance")
    def cancel_attendance(self, session: SessionContext, attendance_id, data: dict[str, Any] | None = None):
        payload = CancelAttendanceDTO.model_validate(data or {})
        return self.execute(CancelAttendanceCommand(session=session, id=self._id(attendance_id), payload=payload))

    # ────────────────────────── dados clínicos ──────────────────────────
    @as_operation_result("add_attendance_cid")
    def add_attendance_cid(self, session: SessionContext, attendance_id, data: dict[str, Any]):
        payload = AddAttendanceCidDTO.model_validate(data)
        return self.execute(AddAttendanceCidCommand(session=session, id=self._id(attendance_id), payload=payload))

    @as_operation_result("add_attendance_procedure")
    def add_attendance_procedure(
        self,
        session: SessionContext,
        attendance_id,
        data: dict[str, Any],
        caller_dentist_id=None,
    ):
        payload = AddAttendanceProcedureDTO.model_validate(data)
        return self.execute(
            AddAttendanceProcedureCommand(
                session=session,
                id=self._id(attendance_id),
                payload=payload,
                caller_dentist_id=as_uuid(caller_dentist_id, "Dentista não encontrado") if caller_dentist_id else None,
            )
        )

    @as_operation_result("remove_attendance_procedure")
    def remove_attendance_procedure(self, session: SessionContext, attendance_id, procedure_id):
        return self.execute(
            RemoveAttendanceProcedureCommand(
                session=session,
                id=self._id(attendance_id),
                procedure_id=as_uuid(procedure_id, "Procedimento não encontrado neste atendimento"),
            )
        )

    @as_operation_result("update_attendance_odontogram")
    def update_attendance_odontogram(self, session: SessionContext, attendance_id, data: dict[str, Any]):
        payload = UpdateAttendanceOdontogramDTO.model_validate(data)
        return self.execute(
            UpdateAttendanceOdontogramCommand(session=session, id=self._id(attendance_id), payload=payload)
        )

    @as_operation_result("create_clinical_document")
    def create_clinical_document(self, session: SessionContext, attendance_id, data: dict[str, Any]):
        payload = CreateClinicalDocumentDTO.model_validate(data)
        return self.execute(
            CreateClinicalDocumentCommand(session=session, id=self._id(attendance_id), payload=payload)
        )

    # ────────────────────────── leitura ──────────────────────────
    @as_operation_result("get_attendance")
    def get_attendance(self, session: SessionContext, attendance_id):
        return self.query(GetAttendanceQuery(id=self._id(attendance_id), clinic_id=session.clinic_id))

    @as_operation_result("list_attendances")
    def list_attendances(self, session: SessionContext, filters: dict[str, Any] | None = None):
        filtros = ListAttendancesDTO.model_validate(filters or {})
        return self.query(ListAttendancesQuery(clinic_id=session.clinic_id, filtros=filtros))

    @as_operation_result("list_waiting_room")
    def list_waiting_room(self, session: SessionContext, dentist_id=None):
        return self.query(
            ListWaitingRoomQuery(
                clinic_id=session.clinic_id,
                dentist_id=as_uuid(dentist_id, "Dentista não encontrado") if dentist_id else None,
            )
        )
