from dataclasses import MISSING, asdict, field, fields, is_dataclass
from typing import Any, TypeVar

T = TypeVar("T")

_NESTED = "nested"


def nested(default_factory=None) -> Any:
    """
    Campo preenchido pelo repositório com projeções de entidades
    relacionadas (paciente, dentista, procedimento...). Não é lido do
    model em `from_model`.
    """
    if default_factory is None:
        return field(default=None, metadata={_NESTED: True})
    return field(default_factory=default_factory, metadata={_NESTED: True})


class EntityMixin:
    @classmethod
    def from_dict(cls: type[T], data: dict[str, Any]) -> T:
        """
        Cria uma instância da entidade a partir de um dict.
        """
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """
        Converte a entidade em dict, recursivamente se for dataclass.
        """
        return asdict(self)

    @classmethod
    def from_model(cls: type[T], model: Any, **extra: Any) -> T:
        """
        Cria uma entidade a partir de um modelo Django.

        Usa os campos da dataclass para extrair atributos do model;
        campos `nested` só são preenchidos quando vierem em `extra`.
        """
        if not is_dataclass(cls):
            raise TypeError(f"{cls.__name__} deve ser um dataclass")
        data: dict[str, Any] = {}
        for f in fields(cls):
            if f.name in extra:
                data[f.name] = extra[f.name]
            elif f.metadata.get(_NESTED):
                continue
            elif hasattr(model, f.name):
                data[f.name] = getattr(model, f.name)
            elif f.default is MISSING and f.default_factory is MISSING:
                raise AttributeError(f"{type(model).__name__} não possui '{f.name}'")
        return cls(**data)
