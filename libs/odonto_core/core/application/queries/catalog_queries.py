import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import QueryDTO
from odonto_core.core.application.dtos.catalog_dto import ListProceduresDTO, ListSpecialtiesDTO, SearchCidsDTO


@dataclass(frozen=True)
class ListSpecialtiesQuery(QueryDTO[ListSpecialtiesDTO]):
    clinic_id: uuid.UUID
    filtros: ListSpecialtiesDTO

@dataclass(frozen=True)
class GetProcedureQuery(QueryDTO[None]):
    id: uuid.UUID
    clinic_id: uuid.UUID

@dataclass(frozen=True)
class ListProceduresQuery(QueryDTO[ListProceduresDTO]):
    clinic_id: uuid.UUID
    filtros: ListProceduresDTO

@dataclass(frozen=True)
class SearchCidsQuery(QueryDTO[SearchCidsDTO]):
    """O catálogo CID é global; não há `clinic_id`."""
    filtros: SearchCidsDTO
