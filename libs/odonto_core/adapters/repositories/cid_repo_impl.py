from django.db.models import Q
from django.db.models.functions import Trim, Upper

from odonto_core.core.domain.entities.cid_entity import CidEntity, normalize_cid_code
from odonto_core.core.domain.repositories.cid_repository import CidRepository
from plugins.django_interface.models import Cid as CidModel


class CidRepoImpl(CidRepository):
    def find_categories_by_codes(self, codes: set[str]) -> dict[str, str]:
        normalized = {normalize_cid_code(c) for c in codes if c}
        if not normalized:
            return {}
        # o catálogo pode ter códigos gravados sem normalização
        rows = (
            CidModel.objects.annotate(normalized_code=Upper(Trim("code")))
            .filter(normalized_code__in=normalized, category__isnull=False)
            .values_list("code", "category")
        )
        return {normalize_cid_code(code): category for code, category in rows}

    def search(self, query: str, limit: int = 20) -> list[CidEntity]:
        term = query.strip()
        qs = CidModel.objects.all()
        if term:
            qs = qs.filter(Q(code__istartswith=term) | Q(description__icontains=term))
        return [CidEntity.from_model(m) for m in qs.order_by("code")[:limit]]
