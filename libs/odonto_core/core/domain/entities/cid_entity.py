from __future__ import annotations

from dataclasses import dataclass

from odonto_core.core.domain.entities._base import EntityMixin


def normalize_cid_code(code: str) -> str:
    return code.strip().upper()


@dataclass(slots=True)
class CidEntity(EntityMixin):
    code: str
    description: str
    category: str | None = None
