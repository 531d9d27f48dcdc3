"""
Regras de transição do atendimento.

    CHECKED_IN ──start──▶ IN_PROGRESS ──finish──▶ DONE
        │                     │
        └──────cancel─────────┴──▶ CANCELED

NO_SHOW faz parte do tipo mas nenhuma operação o produz; ainda pode ser
cancelado, o que libera o agendamento.
CIDs, procedimentos e odontograma só mudam em IN_PROGRESS ou DONE.
"""
from __future__ import annotations

import uuid

from clinical_attendance.core.domain.entities.attendance_entity import AttendanceEntity, AttendanceStatus
from odonto_core.core.domain.exceptions import InvalidTransitionError

CLINICAL_DATA_STATUSES = frozenset({AttendanceStatus.IN_PROGRESS, AttendanceStatus.DONE})


def ensure_can_start(attendance: AttendanceEntity) -> None:
    if attendance.status != AttendanceStatus.CHECKED_IN:
        raise InvalidTransitionError("Apenas atendimentos em check-in podem ser iniciados")


def ensure_can_finish(attendance: AttendanceEntity) -> None:
    if attendance.status != AttendanceStatus.IN_PROGRESS:
        raise InvalidTransitionError("Apenas atendimentos em andamento podem ser finalizados")


def ensure_can_cancel(attendance: AttendanceEntity) -> None:
    if attendance.status == AttendanceStatus.DONE:
        raise InvalidTransitionError("Não é possível cancelar um atendimento já finalizado")
    if attendance.status == AttendanceStatus.CANCELED:
        raise InvalidTransitionError("Atendimento já está cancelado")

def ensure_accepts_clinical_data(attendance: AttendanceEntity, message: str) -> None:
    """Guarda comum de CID, procedimento e odontograma; a mensagem nomeia o recurso."""
    if attendance.status not in CLINICAL_DATA_STATUSES:
        raise InvalidTransitionError(message)


def ensure_can_generate_document(attendance: AttendanceEntity) -> None:
    if attendance.status != AttendanceStatus.DONE:
        raise InvalidTransitionError("Documentos só podem ser gerados para atendimentos finalizados")


def resolve_effective_dentist(
    attendance: AttendanceEntity, caller_dentist_id: uuid.UUID | None
) -> uuid.UUID | None:
    """
    Dentista responsável por um procedimento lançado no atendimento.

    O dentista do atendimento tem precedência; sem ele, vale quem está
    lançando. Um dentista diferente do atribuído não é barrado aqui.
    """
    return attendance.dentist_id or caller_dentist_id
