import uuid
from dataclasses import dataclass

from clinical_attendance.core.application.dtos.attendance_dto import (
    AddAttendanceCidDTO,
    AddAttendanceProcedureDTO,
    CancelAttendanceDTO,
    CheckInAttendanceDTO,
    CreateClinicalDocumentDTO,
    StartAttendanceDTO,
    UpdateAttendanceOdontogramDTO,
)
from odonto_core.core.application.cqrs import CommandDTO
from odonto_core.core.application.dtos.session_dto import SessionContext


@dataclass(frozen=True)
class CheckInAttendanceCommand(CommandDTO):
    session: SessionContext
    payload: CheckInAttendanceDTO

@dataclass(frozen=True)
class StartAttendanceCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: StartAttendanceDTO

@dataclass(frozen=True)
class AddAttendanceCidCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: AddAttendanceCidDTO

@dataclass(frozen=True)
class AddAttendanceProcedureCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: AddAttendanceProcedureDTO
    caller_dentist_id: uuid.UUID | None = None

@dataclass(frozen=True)
class RemoveAttendanceProcedureCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    procedure_id: uuid.UUID

@dataclass(frozen=True)
class UpdateAttendanceOdontogramCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: UpdateAttendanceOdontogramDTO

@dataclass(frozen=True)
class FinishAttendanceCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID

@dataclass(frozen=True)
class CancelAttendanceCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: CancelAttendanceDTO

@dataclass(frozen=True)
class CreateClinicalDocumentCommand(CommandDTO):
    session: SessionContext
    id: uuid.UUID
    payload: CreateClinicalDocumentDTO
