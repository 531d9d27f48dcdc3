from clinical_attendance.core.application.handlers.attendance_handlers import load_attendance
from clinical_attendance.core.application.queries.attendance_queries import (
    GetAttendanceQuery,
    ListAttendancesQuery,
    ListWaitingRoomQuery,
)
from clinical_attendance.core.domain.entities.attendance_entity import AttendanceEntity
from clinical_attendance.core.domain.repositories.attendance_repository import AttendanceRepository
from odonto_core.core.application.cqrs import QueryHandler


class GetAttendanceHandler(QueryHandler[GetAttendanceQuery, AttendanceEntity]):
    def __init__(self, repo: AttendanceRepository):
        self.repo = repo

    def handle(self, query: GetAttendanceQuery) -> AttendanceEntity:
        return load_attendance(self.repo, query.id, query.clinic_id)


class ListAttendancesHandler(QueryHandler[ListAttendancesQuery, list]):
    def __init__(self, repo: AttendanceRepository):
        self.repo = repo

    def handle(self, query: ListAttendancesQuery) -> list[AttendanceEntity]:
        return self.repo.find_many(query.clinic_id, query.filtros.model_dump(exclude_none=True))


class ListWaitingRoomHandler(QueryHandler[ListWaitingRoomQuery, list]):
    """Fila de espera: primeiro a chegar, primeiro a ser chamado."""

    def __init__(self, repo: AttendanceRepository):
        self.repo = repo

    def handle(self, query: ListWaitingRoomQuery) -> list[AttendanceEntity]:
        return self.repo.find_waiting_room(query.clinic_id, query.dentist_id)
