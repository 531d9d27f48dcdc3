"""
Validadores reutilizáveis dos DTOs pydantic.

Os erros são `PydanticCustomError` para que a mensagem chegue ao
usuário exatamente como escrita aqui (sem o prefixo "Value error,").
"""
from __future__ import annotations

import re
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar

from django.utils import timezone
from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, ValidationError
from pydantic_core import PydanticCustomError

from odonto_core.core.domain.exceptions import NotFoundError

_FALLBACK_MESSAGES = {
    "missing": "Campo obrigatório: {loc}",
    "uuid_parsing": "ID inválido: {loc}",
    "uuid_type": "ID inválido: {loc}",
    "literal_error": "Valor inválido para {loc}",
    "enum": "Valor inválido para {loc}",
    "string_type": "Texto inválido para {loc}",
    "int_parsing": "Número inteiro inválido para {loc}",
    "int_from_float": "Número inteiro inválido para {loc}",
    "decimal_parsing": "Número inválido para {loc}",
    "float_parsing": "Número inválido para {loc}",
    "datetime_from_date_parsing": "Data inválida para {loc}",
    "date_parsing": "Data inválida para {loc}",
    "date_type": "Data inválida para {loc}",
    "datetime_parsing": "Data inválida para {loc}",
    "date_from_datetime_parsing": "Data inválida para {loc}",
    "dict_type": "Objeto inválido para {loc}",
    "list_type": "Lista inválida para {loc}",
    "extra_forbidden": "Campo não permitido: {loc}",
}


def format_validation_error(exc: ValidationError) -> str:
    """`Dados inválidos: msg1, msg2` com as mensagens de cada campo."""
    messages: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        template = _FALLBACK_MESSAGES.get(err["type"])
        messages.append(template.format(loc=loc) if template else err["msg"])
    return f"Dados inválidos: {', '.join(messages)}"


def _fail(code: str, message: str) -> None:
    raise PydanticCustomError(code, message)


# ───────────────────────────────────────────────
# Texto
# ───────────────────────────────────────────────
def text(
    *,
    min_length: int | None = None,
    max_length: int | None = None,
    min_message: str | None = None,
    max_message: str | None = None,
    pattern: str | None = None,
    pattern_message: str | None = None,
    lower: bool = False,
    strip: bool = True,
) -> AfterValidator:
    """Aplica trim e limites; `None` passa direto (campos opcionais)."""
    regex = re.compile(pattern) if pattern else None

    def _check(value: str | None) -> str | None:
        if value is None:
            return value
        if strip:
            value = value.strip()
        if lower:
            value = value.lower()
        if min_length is not None and len(value) < min_length:
            _fail("text_too_short", min_message or f"Deve ter pelo menos {min_length} caracteres")
        if max_length is not None and len(value) > max_length:
            _fail("text_too_long", max_message or f"Deve ter no máximo {max_length} caracteres")
        if regex is not None and not regex.match(value):
            _fail("text_pattern", pattern_message or "Formato inválido")
        return value

    return AfterValidator(_check)


def email(message: str = "Email deve ter um formato válido") -> AfterValidator:
    def _check(value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip().lower()
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            _fail("email_invalid", message)
        return value

    return AfterValidator(_check)


def blank_to_none() -> BeforeValidator:
    """Strings vazias de formulários viram `None`."""
    def _convert(value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    return BeforeValidator(_convert)


# ───────────────────────────────────────────────
# Números
# ───────────────────────────────────────────────
def number(
    *,
    gt: Decimal | int | None = None,
    ge: Decimal | int | None = None,
    le: Decimal | int | None = None,
    gt_message: str | None = None,
    ge_message: str | None = None,
    le_message: str | None = None,
) -> AfterValidator:
    def _check(value: Any) -> Any:
        if value is None:
            return value
        if gt is not None and not value > gt:
            _fail("number_not_gt", gt_message or f"Deve ser maior que {gt}")
        if ge is not None and not value >= ge:
            _fail("number_not_ge", ge_message or f"Deve ser maior ou igual a {ge}")
        if le is not None and not value <= le:
            _fail("number_not_le", le_message or f"Deve ser no máximo {le}")
        return value

    return AfterValidator(_check)


def items_count(*, min_items: int, max_items: int, min_message: str, max_message: str) -> AfterValidator:
    def _check(value: list | None) -> list | None:
        if value is None:
            return value
        if len(value) < min_items:
            _fail("too_few_items", min_message)
        if len(value) > max_items:
            _fail("too_many_items", max_message)
        return value

    return AfterValidator(_check)


def one_of(allowed: set[str], message: str) -> AfterValidator:
    def _check(value: str | None) -> str | None:
        if value is not None and value not in allowed:
            _fail("not_allowed", message)
        return value

    return AfterValidator(_check)


def aware() -> AfterValidator:
    """Datas sem fuso são interpretadas no fuso da clínica (TIME_ZONE)."""
    def _convert(value: datetime | None) -> datetime | None:
        if value is not None and timezone.is_naive(value):
            return timezone.make_aware(value)
        return value

    return AfterValidator(_convert)


def local_day(message: str = "Data deve ser uma data válida (YYYY-MM-DD ou ISO datetime)") -> BeforeValidator:
    """Aceita `YYYY-MM-DD` ou datetime ISO; datetimes viram o dia no fuso local."""
    def _convert(value: Any) -> Any:
        if isinstance(value, str) and "T" in value:
            try:
                value = datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                _fail("date_invalid", message)
        if isinstance(value, datetime):
            return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()
        return value

    return BeforeValidator(_convert)


# ───────────────────────────────────────────────
# Atualizações parciais
# ───────────────────────────────────────────────
class PatchModel(BaseModel):
    """
    DTO de edição parcial: só os campos enviados viram alteração.

    Campos listados em `not_null` enviados como `None` são descartados,
    pois não podem ser limpos no banco.
    """
    not_null: ClassVar[frozenset[str]] = frozenset()

    def changes(self, *, exclude: set[str] | None = None) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True, exclude=exclude)
        return {k: v for k, v in data.items() if not (v is None and k in self.not_null)}


def as_uuid(value: Any, not_found_message: str) -> uuid.UUID:
    """IDs malformados equivalem a registros inexistentes."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise NotFoundError(not_found_message) from None
