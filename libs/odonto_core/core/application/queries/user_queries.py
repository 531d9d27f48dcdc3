import uuid
from dataclasses import dataclass

from odonto_core.core.application.cqrs import QueryDTO
from odonto_core.core.application.dtos.user_dto import ListUsersDTO


@dataclass(frozen=True)
class ListUsersQuery(QueryDTO[ListUsersDTO]):
    clinic_id: uuid.UUID
    filtros: ListUsersDTO

@dataclass(frozen=True)
class ListEligibleUsersQuery(QueryDTO[None]):
    """Usuários DENTIST ativos que ainda não têm perfil de dentista."""
    clinic_id: uuid.UUID
