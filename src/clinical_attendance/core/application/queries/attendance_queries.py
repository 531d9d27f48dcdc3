import uuid
from dataclasses import dataclass

from clinical_attendance.core.application.dtos.attendance_dto import ListAttendancesDTO
from odonto_core.core.application.cqrs import QueryDTO


@dataclass(frozen=True)
class GetAttendanceQuery(QueryDTO[None]):
    id: uuid.UUID
    clinic_id: uuid.UUID

@dataclass(frozen=True)
class ListAttendancesQuery(QueryDTO[ListAttendancesDTO]):
    clinic_id: uuid.UUID
    filtros: ListAttendancesDTO

@dataclass(frozen=True)
class ListWaitingRoomQuery(QueryDTO[None]):
    clinic_id: uuid.UUID
    dentist_id: uuid.UUID | None = None
