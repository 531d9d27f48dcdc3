from odonto_core.adapters.observability.decorators import as_operation_result
from odonto_core.core.application.cqrs import BaseService
from odonto_core.core.application.dtos.session_dto import SessionContext
from odonto_core.core.application.queries.record_queries import GetRecordQuery, ListRecordsQuery
from odonto_core.core.application.validation import as_uuid

NOT_FOUND = "Prontuário não encontrado"


class RecordService(BaseService):
    """Prontuários são somente leitura aqui; nascem ao finalizar um atendimento."""

    @as_operation_result("get_record")
    def get_record(self, session: SessionContext, record_id):
        return self.query(GetRecordQuery(id=as_uuid(record_id, NOT_FOUND), clinic_id=session.clinic_id))

    @as_operation_result("list_records")
    def list_records(self, session: SessionContext, patient_id=None):
        patient = as_uuid(patient_id, "Paciente não encontrado") if patient_id else None
        return self.query(ListRecordsQuery(clinic_id=session.clinic_id, patient_id=patient))
