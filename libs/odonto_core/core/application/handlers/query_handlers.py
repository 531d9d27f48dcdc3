from odonto_core.core.application.cqrs import QueryHandler

# ───────────────────────────────────────────────
# Importação dos DTOs de consulta
# ───────────────────────────────────────────────
from odonto_core.core.application.queries.catalog_queries import (
    GetProcedureQuery,
    ListProceduresQuery,
    ListSpecialtiesQuery,
    SearchCidsQuery,
)
from odonto_core.core.application.queries.dentist_queries import GetDentistQuery, ListDentistsQuery
from odonto_core.core.application.queries.finance_queries import (
    GetPaymentQuery,
    GetTreatmentPlanQuery,
    ListPaymentsQuery,
    ListTreatmentPlansQuery,
)
from odonto_core.core.application.queries.patient_queries import GetPatientQuery, ListPatientsQuery
from odonto_core.core.application.queries.record_queries import GetRecordQuery, ListRecordsQuery
from odonto_core.core.application.queries.user_queries import ListEligibleUsersQuery, ListUsersQuery
from odonto_core.core.domain.entities.dentist_entity import DentistEntity
from odonto_core.core.domain.entities.patient_entity import PatientEntity
from odonto_core.core.domain.entities.payment_entity import PaymentEntity
from odonto_core.core.domain.entities.procedure_entity import ProcedureEntity
from odonto_core.core.domain.entities.record_entity import RecordEntity
from odonto_core.core.domain.entities.treatment_plan_entity import TreatmentPlanEntity
from odonto_core.core.domain.exceptions import NotFoundError

# ───────────────────────────────────────────────
# Importação dos Repositórios
# ───────────────────────────────────────────────
from odonto_core.core.domain.repositories.cid_repository import CidRepository
from odonto_core.core.domain.repositories.dentist_repository import DentistRepository
from odonto_core.core.domain.repositories.patient_repository import PatientRepository
from odonto_core.core.domain.repositories.payment_repository import PaymentRepository
from odonto_core.core.domain.repositories.procedure_repository import ProcedureRepository
from odonto_core.core.domain.repositories.record_repository import RecordRepository
from odonto_core.core.domain.repositories.specialty_repository import SpecialtyRepository
from odonto_core.core.domain.repositories.treatment_plan_repository import TreatmentPlanRepository
from odonto_core.core.domain.repositories.user_repository import UserRepository


def _found(entity, message: str):
    if entity is None:
        raise NotFoundError(message)
    return entity


# ───────────────────────────────────────────────
# Handlers para Queries do núcleo da clínica
# ───────────────────────────────────────────────

# 1) Pacientes
class ListPatientsHandler(QueryHandler[ListPatientsQuery, list]):
    def __init__(self, repo: PatientRepository):
        self._repo = repo

    def handle(self, query: ListPatientsQuery) -> list[PatientEntity]:
        return self._repo.list(query.clinic_id, query.filtros.model_dump(exclude_none=True))

class GetPatientHandler(QueryHandler[GetPatientQuery, PatientEntity]):
    def __init__(self, repo: PatientRepository):
        self._repo = repo

    def handle(self, query: GetPatientQuery) -> PatientEntity:
        return _found(self._repo.find_by_id(query.id, query.clinic_id), "Paciente não encontrado")

# 2) Dentistas
class ListDentistsHandler(QueryHandler[ListDentistsQuery, list]):
    def __init__(self, repo: DentistRepository):
        self._repo = repo

    def handle(self, query: ListDentistsQuery) -> list[DentistEntity]:
        return self._repo.list(query.clinic_id, query.filtros.model_dump(exclude_none=True))

class GetDentistHandler(QueryHandler[GetDentistQuery, DentistEntity]):
    def __init__(self, repo: DentistRepository):
        self._repo = repo

    def handle(self, query: GetDentistQuery) -> DentistEntity:
        return _found(self._repo.find_by_id(query.id, query.clinic_id), "Dentista não encontrado")

# 3) Catálogo
class ListSpecialtiesHandler(QueryHandler[ListSpecialtiesQuery, list]):
    def __init__(self, repo: SpecialtyRepository):
        self._repo = repo

    def handle(self, query: ListSpecialtiesQuery):
        return self._repo.list(query.clinic_id, query.filtros.model_dump(exclude_none=True))

class ListProceduresHandler(QueryHandler[ListProceduresQuery, list]):
    def __init__(self, repo: ProcedureRepository):
        self._repo = repo

    def handle(self, query: ListProceduresQuery) -> list[ProcedureEntity]:
        return self._repo.list(query.clinic_id, query.filtros.model_dump(exclude_none=True))

class GetProcedureHandler(QueryHandler[GetProcedureQuery, ProcedureEntity]):
    def __init__(self, repo: ProcedureRepository):
        self._repo = repo

    def handle(self, query: GetProcedureQuery) -> ProcedureEntity:
        return _found(self._repo.find_by_id(query.id, query.clinic_id), "Procedimento não encontrado")

class SearchCidsHandler(QueryHandler[SearchCidsQuery, list]):
    def __init__(self, repo: CidRepository):
        self._repo = repo

    def handle(self, query: SearchCidsQuery):
        return self._repo.search(query.filtros.query, limit=query.filtros.limit)

# 4) Financeiro
class ListPaymentsHandler(QueryHandler[ListPaymentsQuery, list]):
    def __init__(self, repo: PaymentRepository):
        self._repo = repo

    def handle(self, query: ListPaymentsQuery) -> list[PaymentEntity]:
        return self._repo.list(query.clinic_id, query.filtros.model_dump(exclude_none=True))

class GetPaymentHandler(QueryHandler[GetPaymentQuery, PaymentEntity]):
    def __init__(self, repo: PaymentRepository):
        self._repo = repo

    def handle(self, query: GetPaymentQuery) -> PaymentEntity:
        return _found(self._repo.find_by_id(query.id, query.clinic_id), "Pagamento não encontrado")

class ListTreatmentPlansHandler(QueryHandler[ListTreatmentPlansQuery, list]):
    def __init__(self, repo: TreatmentPlanRepository):
        self._repo = repo

    def handle(self, query: ListTreatmentPlansQuery) -> list[TreatmentPlanEntity]:
        return self._repo.list(query.clinic_id, query.filtros.model_dump(exclude_none=True))

class GetTreatmentPlanHandler(QueryHandler[GetTreatmentPlanQuery, TreatmentPlanEntity]):
    def __init__(self, repo: TreatmentPlanRepository):
        self._repo = repo

    def handle(self, query: GetTreatmentPlanQuery) -> TreatmentPlanEntity:
        return _found(self._repo.find_by_id(query.id, query.clinic_id), "Orçamento não encontrado")

# 5) Usuários
class ListUsersHandler(QueryHandler[ListUsersQuery, list]):
    def __init__(self, repo: UserRepository):
        self._repo = repo

    def handle(self, query: ListUsersQuery):
        return self._repo.list(query.clinic_id, query.filtros.model_dump(exclude_none=True))

class ListEligibleUsersHandler(QueryHandler[ListEligibleUsersQuery, list]):
    def __init__(self, repo: UserRepository):
        self._repo = repo

    def handle(self, query: ListEligibleUsersQuery):
        return self._repo.list_eligible_dentists(query.clinic_id)

# 6) Prontuários
class ListRecordsHandler(QueryHandler[ListRecordsQuery, list]):
    def __init__(self, repo: RecordRepository):
        self._repo = repo

    def handle(self, query: ListRecordsQuery) -> list[RecordEntity]:
        return self._repo.list(query.clinic_id, patient_id=query.patient_id)

class GetRecordHandler(QueryHandler[GetRecordQuery, RecordEntity]):
    def __init__(self, repo: RecordRepository):
        self._repo = repo

    def handle(self, query: GetRecordQuery) -> RecordEntity:
        return _found(self._repo.find_by_id(query.id, query.clinic_id), "Prontuário não encontrado")
