class ClinicError(Exception):
    """
    Classe base para violações de regra de negócio.

    A mensagem é exibida ao usuário final como está; não deve conter
    detalhes internos (SQL, stack, IDs de outras clínicas).
    """
    pass

class NotFoundError(ClinicError):
    """Recurso inexistente ou pertencente a outra clínica."""
    pass

class BusinessRuleError(ClinicError):
    """Pré-condição de negócio não atendida."""
    pass

class InvalidTransitionError(BusinessRuleError):
    """Transição de status não permitida a partir do status atual."""
    pass

class PermissionDeniedError(ClinicError):
    """Papel do usuário não autoriza a operação."""
    pass

class ConflictError(ClinicError):
    """
    Unicidade violada dentro da clínica.
    Exemplos:
    - CPF ou e-mail de paciente já cadastrado.
    - Agendamento que já possui atendimento ativo.
    """
    pass
