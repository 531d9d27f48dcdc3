from dependency_injector import containers, providers

container = None

def setup_di_container_from_settings(settings):  # noqa: PLR0915
    """Inicializa o DI container após o Django já estar com settings carregados."""
    global container  # noqa: PLW0603
    if container is not None:
        import structlog
        structlog.get_logger().debug("DI container já inicializado.")
        return container

    # ------- IMPORTS QUE USAM DJANGO MODELS -------
    import structlog

    from odonto_core.adapters.repositories.appointment_repo_impl import AppointmentRepoImpl
    from odonto_core.adapters.repositories.cid_repo_impl import CidRepoImpl
    from odonto_core.adapters.repositories.dentist_repo_impl import DentistRepoImpl
    from odonto_core.adapters.repositories.patient_repo_impl import PatientRepoImpl
    from odonto_core.adapters.repositories.payment_repo_impl import PaymentRepoImpl
    from odonto_core.adapters.repositories.procedure_repo_impl import ProcedureRepoImpl
    from odonto_core.adapters.repositories.record_repo_impl import RecordRepoImpl
    from odonto_core.adapters.repositories.specialty_repo_impl import SpecialtyRepoImpl
    from odonto_core.adapters.repositories.treatment_plan_repo_impl import TreatmentPlanRepoImpl
    from odonto_core.adapters.repositories.user_repo_impl import UserRepoImpl
    from odonto_core.adapters.security.hash_service import HashService

    # Commands
    from odonto_core.core.application.commands.catalog_commands import (
        CreateProcedureCommand,
        CreateSpecialtyCommand,
        SetProcedureActiveCommand,
        UpdateProcedureCommand,
        UpdateSpecialtyCommand,
    )
    from odonto_core.core.application.commands.dentist_commands import (
        AssociateDentistSpecialtiesCommand,
        CreateDentistCommand,
        DeactivateDentistCommand,
        RemoveDentistSpecialtyCommand,
        UpdateDentistCommand,
        UpdateDentistProceduresCommand,
        UpdateDentistProfileCommand,
    )
    from odonto_core.core.application.commands.finance_commands import (
        CreatePaymentCommand,
        CreateTreatmentPlanCommand,
        UpdateTreatmentPlanCommand,
    )
    from odonto_core.core.application.commands.patient_commands import (
        CreatePatientCommand,
        DeactivatePatientCommand,
        UpdatePatientCommand,
    )
    from odonto_core.core.application.commands.user_commands import CreateUserCommand, UpdateUserCommand

    # CQRS buses
    from odonto_core.core.application.cqrs import CommandBusImpl, QueryBusImpl

    # Handlers de comandos
    from odonto_core.core.application.handlers.catalog_handlers import (
        CreateProcedureHandler,
        CreateSpecialtyHandler,
        SetProcedureActiveHandler,
        UpdateProcedureHandler,
        UpdateSpecialtyHandler,
    )
    from odonto_core.core.application.handlers.dentist_handlers import (
        AssociateDentistSpecialtiesHandler,
        CreateDentistHandler,
        DeactivateDentistHandler,
        RemoveDentistSpecialtyHandler,
        UpdateDentistHandler,
        UpdateDentistProceduresHandler,
        UpdateDentistProfileHandler,
    )
    from odonto_core.core.application.handlers.finance_handlers import (
        CreatePaymentHandler,
        CreateTreatmentPlanHandler,
        ItemProcedurePolicy,
        UpdateTreatmentPlanHandler,
    )
    from odonto_core.core.application.handlers.patient_handlers import (
        CreatePatientHandler,
        DeactivatePatientHandler,
        UpdatePatientHandler,
    )

    # Handlers de queries
    from odonto_core.core.application.handlers.query_handlers import (
        GetDentistHandler,
        GetPatientHandler,
        GetPaymentHandler,
        GetProcedureHandler,
        GetRecordHandler,
        GetTreatmentPlanHandler,
        ListDentistsHandler,
        ListEligibleUsersHandler,
        ListPatientsHandler,
        ListPaymentsHandler,
        ListProceduresHandler,
        ListRecordsHandler,
        ListSpecialtiesHandler,
        ListTreatmentPlansHandler,
        ListUsersHandler,
        SearchCidsHandler,
    )
    from odonto_core.core.application.handlers.user_handlers import CreateUserHandler, UpdateUserHandler

    # Queries
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

    # Fachadas
    from odonto_core.core.application.services.catalog_service import CatalogService
    from odonto_core.core.application.services.finance_service import FinanceService
    from odonto_core.core.application.services.patient_service import PatientService
    from odonto_core.core.application.services.record_service import RecordService
    from odonto_core.core.application.services.staff_service import StaffService

    # ─────────────────────────────────────────────────────────
    # Construção do container DI
    # ─────────────────────────────────────────────────────────
    class Container(containers.DeclarativeContainer):
        config = providers.Configuration()

        # Infra
        logger           = providers.Singleton(structlog.get_logger)
        event_dispatcher = providers.Singleton(
            'odonto_core.core.domain.services.event_dispatcher.EventDispatcher'
        )

        # CQRS
        command_bus = providers.Singleton(CommandBusImpl, dispatcher=event_dispatcher)
        query_bus   = providers.Singleton(QueryBusImpl)

        # Implementações de Repositórios
        patient_repo        = providers.Singleton(PatientRepoImpl)
        dentist_repo        = providers.Singleton(DentistRepoImpl)
        user_repo           = providers.Singleton(UserRepoImpl)
        specialty_repo      = providers.Singleton(SpecialtyRepoImpl)
        procedure_repo      = providers.Singleton(ProcedureRepoImpl)
        appointment_repo    = providers.Singleton(AppointmentRepoImpl)
        payment_repo        = providers.Singleton(PaymentRepoImpl)
        treatment_plan_repo = providers.Singleton(TreatmentPlanRepoImpl)
        record_repo         = providers.Singleton(RecordRepoImpl)
        cid_repo            = providers.Singleton(CidRepoImpl)

        # Hash
        hash_service = providers.Singleton(HashService, rounds=config.bcrypt_rounds)

        # Políticas
        item_policy = providers.Singleton(
            ItemProcedurePolicy,
            dentist_repo=dentist_repo,
            procedure_repo=procedure_repo,
        )

        # Handlers de comandos
        create_patient_handler     = providers.Factory(CreatePatientHandler,     repo=patient_repo)
        update_patient_handler     = providers.Factory(UpdatePatientHandler,     repo=patient_repo)
        deactivate_patient_handler = providers.Factory(
            DeactivatePatientHandler, repo=patient_repo, dispatcher=event_dispatcher
        )

        create_dentist_handler = providers.Factory(
            CreateDentistHandler, repo=dentist_repo, user_repo=user_repo, dispatcher=event_dispatcher
        )
        update_dentist_handler         = providers.Factory(UpdateDentistHandler,        repo=dentist_repo)
        update_dentist_profile_handler = providers.Factory(
            UpdateDentistProfileHandler, repo=dentist_repo, user_repo=user_repo
        )
        deactivate_dentist_handler     = providers.Factory(DeactivateDentistHandler,    repo=dentist_repo)
        update_dentist_procedures_handler = providers.Factory(
            UpdateDentistProceduresHandler, repo=dentist_repo, procedure_repo=procedure_repo
        )
        associate_dentist_specialties_handler = providers.Factory(
            AssociateDentistSpecialtiesHandler, repo=dentist_repo, specialty_repo=specialty_repo
        )
        remove_dentist_specialty_handler = providers.Factory(RemoveDentistSpecialtyHandler, repo=dentist_repo)

        create_specialty_handler   = providers.Factory(CreateSpecialtyHandler,   repo=specialty_repo)
        update_specialty_handler   = providers.Factory(UpdateSpecialtyHandler,   repo=specialty_repo)
        create_procedure_handler   = providers.Factory(
            CreateProcedureHandler, repo=procedure_repo, specialty_repo=specialty_repo
        )
        update_procedure_handler   = providers.Factory(
            UpdateProcedureHandler, repo=procedure_repo, specialty_repo=specialty_repo
        )
        set_procedure_active_handler = providers.Factory(SetProcedureActiveHandler, repo=procedure_repo)

        create_payment_handler = providers.Factory(
            CreatePaymentHandler,
            repo=payment_repo,
            patient_repo=patient_repo,
            plan_repo=treatment_plan_repo,
            dispatcher=event_dispatcher,
        )
        create_treatment_plan_handler = providers.Factory(
            CreateTreatmentPlanHandler,
            repo=treatment_plan_repo,
            patient_repo=patient_repo,
            dentist_repo=dentist_repo,
            item_policy=item_policy,
        )
        update_treatment_plan_handler = providers.Factory(
            UpdateTreatmentPlanHandler,
            repo=treatment_plan_repo,
            item_policy=item_policy,
            dispatcher=event_dispatcher,
        )

        create_user_handler = providers.Factory(CreateUserHandler, repo=user_repo, hash_service=hash_service)
        update_user_handler = providers.Factory(UpdateUserHandler, repo=user_repo, hash_service=hash_service)

        # Handlers de queries
        list_patients_handler        = providers.Factory(ListPatientsHandler,       repo=patient_repo)
        get_patient_handler          = providers.Factory(GetPatientHandler,         repo=patient_repo)
        list_dentists_handler        = providers.Factory(ListDentistsHandler,       repo=dentist_repo)
        get_dentist_handler          = providers.Factory(GetDentistHandler,         repo=dentist_repo)
        list_specialties_handler     = providers.Factory(ListSpecialtiesHandler,    repo=specialty_repo)
        list_procedures_handler      = providers.Factory(ListProceduresHandler,     repo=procedure_repo)
        get_procedure_handler        = providers.Factory(GetProcedureHandler,       repo=procedure_repo)
        search_cids_handler          = providers.Factory(SearchCidsHandler,         repo=cid_repo)
        list_payments_handler        = providers.Factory(ListPaymentsHandler,       repo=payment_repo)
        get_payment_handler          = providers.Factory(GetPaymentHandler,         repo=payment_repo)
        list_treatment_plans_handler = providers.Factory(ListTreatmentPlansHandler, repo=treatment_plan_repo)
        get_treatment_plan_handler   = providers.Factory(GetTreatmentPlanHandler,   repo=treatment_plan_repo)
        list_users_handler           = providers.Factory(ListUsersHandler,          repo=user_repo)
        list_eligible_users_handler  = providers.Factory(ListEligibleUsersHandler,  repo=user_repo)
        list_records_handler         = providers.Factory(ListRecordsHandler,        repo=record_repo)
        get_record_handler           = providers.Factory(GetRecordHandler,          repo=record_repo)

        # Fachadas
        patient_service = providers.Singleton(PatientService, command_bus=command_bus, query_bus=query_bus)
        staff_service   = providers.Singleton(StaffService,   command_bus=command_bus, query_bus=query_bus)
        catalog_service = providers.Singleton(CatalogService, command_bus=command_bus, query_bus=query_bus)
        finance_service = providers.Singleton(FinanceService, command_bus=command_bus, query_bus=query_bus)
        record_service  = providers.Singleton(RecordService,  command_bus=command_bus, query_bus=query_bus)

        def init(self):  # noqa: PLR0915
            # Bus de comandos
            cmd_bus = self.command_bus()

            cmd_bus.register(CreatePatientCommand, self.create_patient_handler())
            cmd_bus.register(UpdatePatientCommand, self.update_patient_handler())
            cmd_bus.register(DeactivatePatientCommand, self.deactivate_patient_handler())

            cmd_bus.register(CreateDentistCommand, self.create_dentist_handler())
            cmd_bus.register(UpdateDentistCommand, self.update_dentist_handler())
            cmd_bus.register(UpdateDentistProfileCommand, self.update_dentist_profile_handler())
            cmd_bus.register(DeactivateDentistCommand, self.deactivate_dentist_handler())
            cmd_bus.register(UpdateDentistProceduresCommand, self.update_dentist_procedures_handler())
            cmd_bus.register(AssociateDentistSpecialtiesCommand, self.associate_dentist_specialties_handler())
            cmd_bus.register(RemoveDentistSpecialtyCommand, self.remove_dentist_specialty_handler())

            cmd_bus.register(CreateSpecialtyCommand, self.create_specialty_handler())
            cmd_bus.register(UpdateSpecialtyCommand, self.update_specialty_handler())
            cmd_bus.register(CreateProcedureCommand, self.create_procedure_handler())
            cmd_bus.register(UpdateProcedureCommand, self.update_procedure_handler())
            cmd_bus.register(SetProcedureActiveCommand, self.set_procedure_active_handler())

            cmd_bus.register(CreatePaymentCommand, self.create_payment_handler())
            cmd_bus.register(CreateTreatmentPlanCommand, self.create_treatment_plan_handler())
            cmd_bus.register(UpdateTreatmentPlanCommand, self.update_treatment_plan_handler())

            cmd_bus.register(CreateUserCommand, self.create_user_handler())
            cmd_bus.register(UpdateUserCommand, self.update_user_handler())

            # Bus de queries
            qry_bus = self.query_bus()

            qry_bus.register(ListPatientsQuery, self.list_patients_handler())
            qry_bus.register(GetPatientQuery, self.get_patient_handler())

            qry_bus.register(ListDentistsQuery, self.list_dentists_handler())
            qry_bus.register(GetDentistQuery, self.get_dentist_handler())

            qry_bus.register(ListSpecialtiesQuery, self.list_specialties_handler())
            qry_bus.register(ListProceduresQuery, self.list_procedures_handler())
            qry_bus.register(GetProcedureQuery, self.get_procedure_handler())
            qry_bus.register(SearchCidsQuery, self.search_cids_handler())

            qry_bus.register(ListPaymentsQuery, self.list_payments_handler())
            qry_bus.register(GetPaymentQuery, self.get_payment_handler())
            qry_bus.register(ListTreatmentPlansQuery, self.list_treatment_plans_handler())
            qry_bus.register(GetTreatmentPlanQuery, self.get_treatment_plan_handler())

            qry_bus.register(ListUsersQuery, self.list_users_handler())
            qry_bus.register(ListEligibleUsersQuery, self.list_eligible_users_handler())

            qry_bus.register(ListRecordsQuery, self.list_records_handler())
            qry_bus.register(GetRecordQuery, self.get_record_handler())

    # ------- INSTANCIAÇÃO E CONFIG -------
    container = Container()
    container.config.bcrypt_rounds.from_value(settings.BCRYPT_ROUNDS)
    Container.init(container)
    return container
