from clinical_attendance.core.domain.entities.attendance_cid_entity import AttendanceCidEntity
from clinical_attendance.core.domain.repositories.attendance_cid_repository import AttendanceCidRepository
from plugins.django_interface.models import AttendanceCID as AttendanceCIDModel


class AttendanceCidRepoImpl(AttendanceCidRepository):
    def create(self, cid: AttendanceCidEntity) -> AttendanceCidEntity:
        m = AttendanceCIDModel.objects.create(
            id=cid.id,
            attendance_id=cid.attendance_id,
            cid_code=cid.cid_code,
            description=cid.description,
            observation=cid.observation,
            created_by_dentist_id=cid.created_by_dentist_id,
        )
        return AttendanceCidEntity.from_model(m)

    def find_by_attendance_id(self, attendance_id) -> list[AttendanceCidEntity]:
        qs = AttendanceCIDModel.objects.filter(attendance_id=attendance_id).order_by("created_at")
        return [AttendanceCidEntity.from_model(m) for m in qs]

    def count_by_attendance_id(self, attendance_id) -> int:
        return AttendanceCIDModel.objects.filter(attendance_id=attendance_id).count()
