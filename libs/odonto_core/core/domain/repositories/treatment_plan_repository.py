from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any

from odonto_core.core.domain.entities.treatment_plan_entity import TreatmentItemEntity, TreatmentPlanEntity


class TreatmentPlanRepository(ABC):
    @abstractmethod
    def find_by_id(self, plan_id: uuid.UUID, clinic_id: uuid.UUID) -> TreatmentPlanEntity | None:
        ...

    @abstractmethod
    def find_many(self, plan_ids: list[uuid.UUID], clinic_id: uuid.UUID) -> list[TreatmentPlanEntity]:
        ...

    @abstractmethod
    def create(self, plan: TreatmentPlanEntity) -> TreatmentPlanEntity:
        """Cria o orçamento e seus itens numa única transação."""
        ...

    @abstractmethod
    def update(
        self,
        plan_id: uuid.UUID,
        clinic_id: uuid.UUID,
        changes: dict[str, Any],
        items: list[TreatmentItemEntity] | None = None,
    ) -> TreatmentPlanEntity:
        """
        Atualiza o orçamento; quando `items` vier, substitui todos os itens
        e recalcula `total_amount` na mesma transação.
        """
        ...

    @abstractmethod
    def list(self, clinic_id: uuid.UUID, filtros: dict[str, Any]) -> list[TreatmentPlanEntity]:
        ...
