import uuid
from abc import ABC, abstractmethod

from clinical_attendance.core.domain.entities.attendance_cid_entity import AttendanceCidEntity


class AttendanceCidRepository(ABC):
    @abstractmethod
    def create(self, cid: AttendanceCidEntity) -> AttendanceCidEntity:
        ...

    @abstractmethod
    def find_by_attendance_id(self, attendance_id: uuid.UUID) -> list[AttendanceCidEntity]:
        ...

    @abstractmethod
    def count_by_attendance_id(self, attendance_id: uuid.UUID) -> int:
        ...
