import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import QueryDTO
from odonto_core.core.application.dtos.patient_dto import ListPatientsDTO


@dataclass(frozen=True)
class GetPatientQuery(QueryDTO[None]):
    id: uuid.UUID
    clinic_id: uuid.UUID

@dataclass(frozen=True)
class ListPatientsQuery(QueryDTO[ListPatientsDTO]):
    clinic_id: uuid.UUID
    filtros: ListPatientsDTO
