"""
Composition-root do *clinical_attendance*.

• Carregado apenas depois que Django já aplicou as `settings`.
• Reaproveita repositórios e o EventDispatcher do container do núcleo;
  mantém buses próprios para os comandos de atendimento.
"""
from dependency_injector import containers, providers

container = None  # type: ignore


# ────────────────────────────────────────────────────────────────────
def setup_di_container_from_settings(settings):                      # noqa: PLR0915
    """Sempre retorna a mesma instância."""
    global container                                                 # noqa: PLW0603
    if container is not None:
        import structlog

        structlog.get_logger(__name__).debug(
            "ClinicalAttendance DI container já instanciado."
        )
        return container

    import structlog
    from odonto_core.adapters.config.composition_root import (
        setup_di_container_from_settings as _setup_core_di,
    )

    core_container = _setup_core_di(settings)

    from clinical_attendance.adapters.observability.metrics import record_transition
    from clinical_attendance.adapters.repositories.attendance_cid_repo_impl import (
        AttendanceCidRepoImpl,
    )
    from clinical_attendance.adapters.repositories.attendance_odontogram_repo_impl import (
        AttendanceOdontogramRepoImpl,
    )
    from clinical_attendance.adapters.repositories.attendance_procedure_repo_impl import (
        AttendanceProcedureRepoImpl,
    )
    from clinical_attendance.adapters.repositories.attendance_repo_impl import AttendanceRepoImpl
    from clinical_attendance.adapters.repositories.clinical_document_repo_impl import (
        ClinicalDocumentRepoImpl,
    )
    from clinical_attendance.core.application.commands.attendance_commands import (
        AddAttendanceCidCommand,
        AddAttendanceProcedureCommand,
        CancelAttendanceCommand,
        CheckInAttendanceCommand,
        CreateClinicalDocumentCommand,
        FinishAttendanceCommand,
        RemoveAttendanceProcedureCommand,
        StartAttendanceCommand,
        UpdateAttendanceOdontogramCommand,
    )
    from clinical_attendance.core.application.handlers.attendance_handlers import (
        AddAttendanceCidHandler,
        AddAttendanceProcedureHandler,
        CancelAttendanceHandler,
        CheckInAttendanceHandler,
        CreateClinicalDocumentHandler,
        FinishAttendanceHandler,
        RemoveAttendanceProcedureHandler,
        StartAttendanceHandler,
        UpdateAttendanceOdontogramHandler,
    )
    from clinical_attendance.core.application.handlers.query_handlers import (
        GetAttendanceHandler,
        ListAttendancesHandler,
        ListWaitingRoomHandler,
    )
    from clinical_attendance.core.application.queries.attendance_queries import (
        GetAttendanceQuery,
        ListAttendancesQuery,
        ListWaitingRoomQuery,
    )
    from clinical_attendance.core.application.services.attendance_service import AttendanceService
    from clinical_attendance.core.domain.events.events import AttendanceTransitionEvent
    from odonto_core.core.application.cqrs import CommandBusImpl, QueryBusImpl

    # ─── CONTAINER ─────────────────────────────────────────────────
    class Container(containers.DeclarativeContainer):
        # --- cross-cutting ----------------------------------------
        logger      = providers.Singleton(structlog.get_logger, __name__)
        dispatcher  = core_container.event_dispatcher
        command_bus = providers.Singleton(CommandBusImpl, dispatcher=dispatcher)
        query_bus   = providers.Singleton(QueryBusImpl)

        # --- repositórios -----------------------------------------
        attendance_repo = providers.Singleton(AttendanceRepoImpl, cid_catalog=core_container.cid_repo)
        cid_repo        = providers.Singleton(AttendanceCidRepoImpl)
        procedure_repo  = providers.Singleton(AttendanceProcedureRepoImpl)
        odontogram_repo = providers.Singleton(AttendanceOdontogramRepoImpl)
        document_repo   = providers.Singleton(ClinicalDocumentRepoImpl)

        # --- handlers ---------------------------------------------
        check_in_handler = providers.Factory(
            CheckInAttendanceHandler,
            repo=attendance_repo,
            patient_repo=core_container.patient_repo,
            appointment_repo=core_container.appointment_repo,
            dentist_repo=core_container.dentist_repo,
            dispatcher=dispatcher,
        )
        start_handler = providers.Factory(
            StartAttendanceHandler,
            repo=attendance_repo,
            dentist_repo=core_container.dentist_repo,
            dispatcher=dispatcher,
        )
        add_cid_handler = providers.Factory(
            AddAttendanceCidHandler,
            repo=attendance_repo,
            cid_repo=cid_repo,
            dentist_repo=core_container.dentist_repo,
        )
        add_procedure_handler = providers.Factory(
            AddAttendanceProcedureHandler,
            repo=attendance_repo,
            procedure_repo=procedure_repo,
            catalog_repo=core_container.procedure_repo,
            dentist_repo=core_container.dentist_repo,
        )
        remove_procedure_handler = providers.Factory(
            RemoveAttendanceProcedureHandler, repo=attendance_repo, procedure_repo=procedure_repo
        )
        update_odontogram_handler = providers.Factory(
            UpdateAttendanceOdontogramHandler, repo=attendance_repo, odontogram_repo=odontogram_repo
        )
        finish_handler = providers.Factory(
            FinishAttendanceHandler,
            repo=attendance_repo,
            cid_repo=cid_repo,
            procedure_repo=procedure_repo,
            odontogram_repo=odontogram_repo,
            record_repo=core_container.record_repo,
            dispatcher=dispatcher,
        )
        cancel_handler = providers.Factory(CancelAttendanceHandler, repo=attendance_repo, dispatcher=dispatcher)
        create_document_handler = providers.Factory(
            CreateClinicalDocumentHandler,
            repo=attendance_repo,
            document_repo=document_repo,
            dispatcher=dispatcher,
        )

        get_attendance_handler   = providers.Factory(GetAttendanceHandler,   repo=attendance_repo)
        list_attendances_handler = providers.Factory(ListAttendancesHandler, repo=attendance_repo)
        waiting_room_handler     = providers.Factory(ListWaitingRoomHandler, repo=attendance_repo)

        # --- fachada ----------------------------------------------
        attendance_service = providers.Singleton(
            AttendanceService, command_bus=command_bus, query_bus=query_bus
        )

        # ----------------------------------------------------------
        def init(self) -> None:
            """Registra handlers e assinantes de métricas – executa 1×."""
            bus = self.command_bus()
            bus.register(CheckInAttendanceCommand, self.check_in_handler())
            bus.register(StartAttendanceCommand, self.start_handler())
            bus.register(AddAttendanceCidCommand, self.add_cid_handler())
            bus.register(AddAttendanceProcedureCommand, self.add_procedure_handler())
            bus.register(RemoveAttendanceProcedureCommand, self.remove_procedure_handler())
            bus.register(UpdateAttendanceOdontogramCommand, self.update_odontogram_handler())
            bus.register(FinishAttendanceCommand, self.finish_handler())
            bus.register(CancelAttendanceCommand, self.cancel_handler())
            bus.register(CreateClinicalDocumentCommand, self.create_document_handler())

            qry = self.query_bus()
            qry.register(GetAttendanceQuery, self.get_attendance_handler())
            qry.register(ListAttendancesQuery, self.list_attendances_handler())
            qry.register(ListWaitingRoomQuery, self.waiting_room_handler())

            self.dispatcher().subscribe(AttendanceTransitionEvent, record_transition)

    # ─── INSTANTIAÇÃO ──────────────────────────────────────────────
    container = Container()
    Container.init(container)                                             # type: ignore[attr-defined]
    return container
