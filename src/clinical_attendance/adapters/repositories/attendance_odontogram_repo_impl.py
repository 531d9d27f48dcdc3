from clinical_attendance.core.domain.entities.attendance_odontogram_entity import AttendanceOdontogramEntity
from clinical_attendance.core.domain.repositories.attendance_odontogram_repository import (
    AttendanceOdontogramRepository,
)
from plugins.django_interface.models import AttendanceOdontogram as AttendanceOdontogramModel


class AttendanceOdontogramRepoImpl(AttendanceOdontogramRepository):
    def upsert(self, attendance_id, data: dict[str, str]) -> AttendanceOdontogramEntity:
        m, _ = AttendanceOdontogramModel.objects.update_or_create(
            attendance_id=attendance_id, defaults={"data": data}
        )
        return AttendanceOdontogramEntity.from_model(m)

    def find_by_attendance_id(self, attendance_id) -> AttendanceOdontogramEntity | None:
        m = AttendanceOdontogramModel.objects.filter(attendance_id=attendance_id).first()
        return AttendanceOdontogramEntity.from_model(m) if m else None
