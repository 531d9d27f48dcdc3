from clinical_attendance.core.domain.entities.clinical_document_entity import ClinicalDocumentEntity
from clinical_attendance.core.domain.repositories.clinical_document_repository import (
    ClinicalDocumentRepository,
)
from plugins.django_interface.models import ClinicalDocument as ClinicalDocumentModel


class ClinicalDocumentRepoImpl(ClinicalDocumentRepository):
    def create(self, document: ClinicalDocumentEntity) -> ClinicalDocumentEntity:
        m = ClinicalDocumentModel.objects.create(
            id=document.id,
            attendance_id=document.attendance_id,
            type=document.type,
            payload=document.payload,
            generated_by=document.generated_by,
        )
        return ClinicalDocumentEntity.from_model(m)

    def find_by_attendance_id(self, attendance_id) -> list[ClinicalDocumentEntity]:
        qs = ClinicalDocumentModel.objects.filter(attendance_id=attendance_id).order_by("-generated_at")
        return [ClinicalDocumentEntity.from_model(m) for m in qs]
