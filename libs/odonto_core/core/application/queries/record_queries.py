import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import QueryDTO


@dataclass(frozen=True)
class GetRecordQuery(QueryDTO[None]):
    id: uuid.UUID
    clinic_id: uuid.UUID

@dataclass(frozen=True)
class ListRecordsQuery(QueryDTO[None]):
    clinic_id: uuid.UUID
    patient_id: uuid.UUID | None = None
