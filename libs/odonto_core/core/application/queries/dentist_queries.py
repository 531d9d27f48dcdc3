import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import QueryDTO
from odonto_core.core.application.dtos.dentist_dto import ListDentistsDTO


@dataclass(frozen=True)
class GetDentistQuery(QueryDTO[None]):
    id: uuid.UUID
    clinic_id: uuid.UUID

@dataclass(frozen=True)
class ListDentistsQuery(QueryDTO[ListDentistsDTO]):
    clinic_id: uuid.UUID
    filtros: ListDentistsDTO
