from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any

from odonto_core.core.domain.entities.payment_entity import PaymentEntity


class PaymentRepository(ABC):
    @abstractmethod
    def create(self, payment: PaymentEntity, treatment_plan_ids: list[uuid.UUID]) -> tuple[PaymentEntity, list[uuid.UUID]]:
        """
        Registra o pagamento e os vínculos com orçamentos numa única transação.

        Orçamentos vinculados ainda OPEN passam a APPROVED; retorna o
        pagamento e os IDs efetivamente aprovados.
        """
        ...

    @abstractmethod
    def find_by_id(self, payment_id: uuid.UUID, clinic_id: uuid.UUID) -> PaymentEntity | None:
        ...

    @abstractmethod
    def list(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[PaymentEntity]:
        """Filtra por `patient_id`, `method`, `start_date` e `end_date` (inclusivos)."""
        ...
