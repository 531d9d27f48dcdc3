from abc import ABC, abstractmethod

from odonto_core.core.domain.entities.cid_entity import CidEntity


class CidRepository(ABC):
    @abstractmethod
    def find_categories_by_codes(self, codes: set[str]) -> dict[str, str]:
        """
        Mapa código normalizado → categoria, apenas para os códigos
        informados que existem no catálogo e têm categoria.
        """
        ...

    @abstractmethod
    def search(self, query: str, limit: int = 20) -> list[CidEntity]:
        """Busca por prefixo de código ou trecho da descrição."""
        ...
